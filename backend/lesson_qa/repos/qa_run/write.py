"""
qa_run/write.py
- Purpose: Write-side DB operations for QA runs.
- Insert only. No update or delete: a QA run is an audit record.
"""

from sqlalchemy.orm import Session

from lesson_qa.models.qa_run import QARunRecord


class QARunWriteRepo:
    def __init__(self, db: Session):
        self.db = db

    def create_run(
        self,
        *,
        mode: str,
        title: str,
        source_type: str,
        normalized_slide_count: int,
        notes_detected_count: int,
        deterministic_flags: list[str],
        total_score: float,
        verdict: str,
        short_summary: str,
        revision_required: bool,
        revision_triggers: list[str],
        structured_scores: list[dict],
        full_report: dict,
        parsed_ai_json: dict,
        raw_ai_response: str,
        prompt_version: str,
        ai_model: str,
        execution_time_ms: int,
        triggered_by_user_id: str,
        triggered_by_user_email: str,
    ) -> QARunRecord:
        row = QARunRecord(
            mode=mode,
            title=title,
            source_type=source_type,
            normalized_slide_count=normalized_slide_count,
            notes_detected_count=notes_detected_count,
            deterministic_flags=list(deterministic_flags),
            total_score=total_score,
            verdict=verdict,
            short_summary=short_summary,
            revision_required=revision_required,
            revision_triggers=list(revision_triggers),
            structured_scores=structured_scores,
            full_report=full_report,
            parsed_ai_json=parsed_ai_json,
            raw_ai_response=raw_ai_response,
            prompt_version=prompt_version,
            ai_model=ai_model,
            execution_time_ms=execution_time_ms,
            triggered_by_user_id=triggered_by_user_id,
            triggered_by_user_email=triggered_by_user_email,
        )
        self.db.add(row)
        self.db.flush()
        self.db.refresh(row)
        return row
