"""
qa_run.py (schemas)
- Purpose: The QA run audit record as returned to callers, and the pipeline
  outcome DTOs.
- QARun is frozen; once persisted it is presented as complete and never
  altered.
"""

from datetime import datetime
from typing import List, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from lesson_qa.schemas.qa import QAResult, QAScore


class UserIdentity(BaseModel):
    """Caller identity, passed explicitly into the pipeline."""
    model_config = ConfigDict(frozen=True)

    user_id: str
    email: str = ""


class QARun(BaseModel):
    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: UUID
    mode: str
    title: str
    source_type: str
    normalized_slide_count: int
    notes_detected_count: int
    deterministic_flags: List[str]

    total_score: float
    verdict: str
    short_summary: str
    revision_required: bool
    revision_triggers: List[str]

    structured_scores: List[QAScore]
    full_report: QAResult
    parsed_ai_json: QAResult
    raw_ai_response: str

    prompt_version: str
    ai_model: str
    execution_time_ms: int
    triggered_by_user_id: str
    triggered_by_user_email: str
    created_at: datetime


class NormalizationSummary(BaseModel):
    slide_count: int
    notes_detected_count: int
    detected_notes_pattern: str
    normalization_confidence: float


class PipelineOutcome(BaseModel):
    """
    `blocked`: deterministic critical flags stopped the run before AI review.
    `completed`: the run was reviewed and persisted.
    """
    model_config = ConfigDict(frozen=True)

    status: Literal["blocked", "completed"]
    flags: List[str]
    normalization: NormalizationSummary
    run_id: Optional[UUID] = None
    run: Optional[QARun] = None

    @property
    def blocked(self) -> bool:
        return self.status == "blocked"
