# lesson_qa/services/qa_pipeline.py
"""
qa_pipeline.py
- Purpose: Runs the lesson QA pipeline end-to-end for one uploaded PDF.
- Order: extract -> normalize -> deterministic checks -> AI review + persist.
- A critical deterministic flag ends the run before any AI call; that is a
  normal "blocked" outcome, not an exception.
"""

import logging
from typing import Callable

from sqlalchemy.orm import Session

from lesson_qa.constants.qa import PDFSourceType, PipelineStage, QAMode
from lesson_qa.core import ErrorCode, ErrorReason
from lesson_qa.core.errors import stage_error
from lesson_qa.pdf.extract import extract_raw_pages
from lesson_qa.pdf.normalize import normalize_pages
from lesson_qa.pdf.types import NormalizationResult, RawPage
from lesson_qa.schemas.qa_run import NormalizationSummary, PipelineOutcome, UserIdentity
from lesson_qa.services.qa_engine import QAEngine
from lesson_qa.validations.deck_checks import run_deterministic_checks
from lesson_qa.validations.request_validators import parse_mode, parse_source_type

logger = logging.getLogger("lesson_qa.qa_pipeline")


def _summary(normalized: NormalizationResult) -> NormalizationSummary:
    return NormalizationSummary(
        slide_count=len(normalized.slides),
        notes_detected_count=normalized.notes_detected_count,
        detected_notes_pattern=normalized.detected_notes_pattern.value,
        normalization_confidence=round(normalized.normalization_confidence, 3),
    )


class QAPipeline:
    def __init__(
        self,
        db: Session,
        *,
        engine: QAEngine | None = None,
        extractor: Callable[[bytes], list[RawPage]] = extract_raw_pages,
    ):
        self.db = db
        self.engine = engine or QAEngine(db)
        self.extractor = extractor

    def run(
        self,
        pdf_bytes: bytes,
        source_type: PDFSourceType | str,
        mode: QAMode | str,
        title: str,
        *,
        user: UserIdentity,
    ) -> PipelineOutcome:
        mode = parse_mode(mode)
        source_type = parse_source_type(source_type)

        raw_pages = self.extractor(pdf_bytes)

        normalized = normalize_pages(raw_pages, source_type)
        summary = _summary(normalized)
        logger.info("pipeline.normalized", extra=summary.model_dump())

        if not normalized.slides:
            raise stage_error(
                PipelineStage.NORMALIZATION,
                code=ErrorCode.NOTHING_EXTRACTED,
                reason=ErrorReason.NOTHING_EXTRACTED,
                message="Could not extract any slides from the PDF. Re-export the deck and try again.",
                status_code=422,
                details={"page_count": len(raw_pages)},
            )

        checks = run_deterministic_checks(normalized.slides, mode, title)
        if checks.critical_fail:
            logger.warning("pipeline.blocked", extra={"flags": checks.flags})
            return PipelineOutcome(status="blocked", flags=checks.flags, normalization=summary)

        run_id, run = self.engine.run(
            normalized.slides,
            mode,
            title,
            source_type,
            checks.flags,
            normalized.notes_detected_count,
            user=user,
        )
        return PipelineOutcome(status="completed", flags=checks.flags, normalization=summary, run_id=run_id, run=run)
