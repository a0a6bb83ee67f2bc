"""
qa_run.py
- Purpose: Immutable audit record of one completed AI QA review.
- One row per successful pipeline run. Rows are inserted once and never
  updated or deleted; a correction is a new run.
"""

import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, Float, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from lesson_qa.models.base import Base, JsonColumn, utcnow


class QARunRecord(Base):
    __tablename__ = "qa_runs"
    __table_args__ = (
        Index("ix_qa_runs_mode_created", "mode", "created_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    mode: Mapped[str] = mapped_column(String(32), nullable=False)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    source_type: Mapped[str] = mapped_column(String(32), nullable=False)

    normalized_slide_count: Mapped[int] = mapped_column(Integer, nullable=False)
    notes_detected_count: Mapped[int] = mapped_column(Integer, nullable=False)
    deterministic_flags: Mapped[list] = mapped_column(JsonColumn, nullable=False, default=list)

    # Denormalized headline fields for listing/filtering
    total_score: Mapped[float] = mapped_column(Float, nullable=False)
    verdict: Mapped[str] = mapped_column(String(32), nullable=False)
    short_summary: Mapped[str] = mapped_column(Text, nullable=False)
    revision_required: Mapped[bool] = mapped_column(Boolean, nullable=False)
    revision_triggers: Mapped[list] = mapped_column(JsonColumn, nullable=False, default=list)

    structured_scores: Mapped[list] = mapped_column(JsonColumn, nullable=False, default=list)
    full_report: Mapped[dict] = mapped_column(JsonColumn, nullable=False)
    parsed_ai_json: Mapped[dict] = mapped_column(JsonColumn, nullable=False)
    raw_ai_response: Mapped[str] = mapped_column(Text, nullable=False)

    prompt_version: Mapped[str] = mapped_column(String(64), nullable=False)
    ai_model: Mapped[str] = mapped_column(String(128), nullable=False)
    execution_time_ms: Mapped[int] = mapped_column(Integer, nullable=False)

    triggered_by_user_id: Mapped[str] = mapped_column(String(128), nullable=False)
    triggered_by_user_email: Mapped[str] = mapped_column(Text, nullable=False, default="")

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
