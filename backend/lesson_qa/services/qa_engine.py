# lesson_qa/services/qa_engine.py
"""
qa_engine.py
- Purpose: AI review of a normalized deck, producing one persisted QA run.
- Owns: prompt resolution, transcript building, the single retry, and the
  insert of the audit record.
- Never substitutes a default result: a review that fails twice is an error.
"""

import logging
import time
import uuid
from typing import Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from lesson_qa.constants.qa import PDFSourceType, PipelineStage, QAMode
from lesson_qa.core import ErrorCode, ErrorReason
from lesson_qa.core.config import settings
from lesson_qa.core.errors import stage_error
from lesson_qa.core.request_context import clear_run_context, set_context
from lesson_qa.llm.client import ReviewClient
from lesson_qa.llm.prompts.registry import render_transcript
from lesson_qa.llm.retry import call_with_retry
from lesson_qa.llm.types import ReviewResponse
from lesson_qa.pdf.types import NormalizedSlide
from lesson_qa.repos.prompt_config.read import ConfigurationReadRepo, QAVersionReadRepo
from lesson_qa.repos.qa_run.write import QARunWriteRepo
from lesson_qa.schemas.qa_run import QARun, UserIdentity
from lesson_qa.services.prompt_resolver import PromptResolver

logger = logging.getLogger("lesson_qa.qa_engine")

MAX_ATTEMPTS = 2  # first call + exactly one retry
UNTITLED = "Untitled Lesson"


class QAEngine:
    def __init__(
        self,
        db: Session,
        *,
        review_client: ReviewClient | None = None,
        resolver: PromptResolver | None = None,
        retry_delay_seconds: float | None = None,
    ):
        self.db = db
        self.review_client = review_client or ReviewClient()
        self.resolver = resolver or PromptResolver(ConfigurationReadRepo(db), QAVersionReadRepo(db))
        self.run_write = QARunWriteRepo(db)
        self.retry_delay_seconds = (
            settings.LLM_RETRY_DELAY_SECONDS if retry_delay_seconds is None else retry_delay_seconds
        )

    def _review(self, system_instruction: str, transcript: str, prompt_version: str, mode: QAMode) -> ReviewResponse:
        try:
            return call_with_retry(
                lambda attempt: self.review_client.review(
                    system_instruction,
                    transcript,
                    prompt_version=prompt_version,
                    attempt=attempt,
                ),
                max_attempts=MAX_ATTEMPTS,
                delay_seconds=self.retry_delay_seconds,
            )
        except Exception as e:
            logger.error("qa.failed", extra={"error_type": type(e).__name__, "error": str(e)})
            raise stage_error(
                PipelineStage.AI_REVIEW,
                code=ErrorCode.QA_FAILED,
                reason=ErrorReason.LLM_FAILED,
                message=f"AI QA failed after retry for mode '{mode.value}': {e}",
                status_code=502,
                details={"mode": mode.value, "error_type": type(e).__name__},
            ) from e

    def _run(
        self,
        slides: Sequence[NormalizedSlide],
        mode: QAMode,
        title: str,
        source_type: PDFSourceType,
        deterministic_flags: Sequence[str],
        notes_detected_count: int,
        *,
        user: UserIdentity,
    ) -> tuple[uuid.UUID, QARun]:
        started = time.monotonic()

        prompt = self.resolver.resolve(mode)
        transcript = render_transcript(slides)

        review = self._review(prompt.instruction, transcript, prompt.version_tag, mode)
        result = review.result
        report = result.model_dump(mode="json")

        try:
            row = self.run_write.create_run(
                mode=mode.value,
                title=(title or "").strip() or UNTITLED,
                source_type=source_type.value,
                normalized_slide_count=len(slides),
                notes_detected_count=notes_detected_count,
                deterministic_flags=list(deterministic_flags),
                total_score=result.total_score,
                verdict=result.verdict,
                short_summary=result.short_summary,
                revision_required=result.revision_required,
                revision_triggers=list(result.revision_triggers),
                structured_scores=report["scores"],
                full_report=report,
                parsed_ai_json=report,
                raw_ai_response=review.raw_text,
                prompt_version=prompt.version_tag,
                ai_model=review.model,
                execution_time_ms=int((time.monotonic() - started) * 1000),
                triggered_by_user_id=user.user_id,
                triggered_by_user_email=user.email,
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("qa_run.persist_failed")
            raise stage_error(
                PipelineStage.PERSISTENCE,
                code=ErrorCode.PERSIST_FAILED,
                reason=ErrorReason.PERSIST_FAILED,
                message=f"QA result for mode '{mode.value}' could not be saved: {e}",
                status_code=500,
            ) from e

        run = QARun.model_validate(row)
        set_context(run_id=str(run.id))
        logger.info(
            "qa_run.persisted",
            extra={
                "verdict": run.verdict,
                "total_score": run.total_score,
                "prompt_version": run.prompt_version,
                "execution_time_ms": run.execution_time_ms,
            },
        )
        return run.id, run

    def run(
        self,
        slides: Sequence[NormalizedSlide],
        mode: QAMode | str,
        title: str,
        source_type: PDFSourceType | str,
        deterministic_flags: Sequence[str],
        notes_detected_count: int,
        *,
        user: UserIdentity,
    ) -> tuple[uuid.UUID, QARun]:
        mode = QAMode(mode)
        set_context(mode=mode.value)
        try:
            return self._run(
                slides,
                mode,
                title,
                PDFSourceType(source_type),
                deterministic_flags,
                notes_detected_count,
                user=user,
            )
        finally:
            clear_run_context()
