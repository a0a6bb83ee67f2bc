"""
qa.py (schemas)
- Purpose: The AI review output contract (QAResult) and the response schema
  sent to Gemini so generation is constrained to the same shape.
- Field names match the JSON the model returns; do not rename.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field, StrictBool, StrictFloat, StrictInt, StrictStr, ValidationInfo, field_validator

from lesson_qa.constants.qa import IssueSeverity, QAVerdict

MIN_SUMMARY_CHARS = 5


class QAIssue(BaseModel):
    slideNumber: Optional[StrictInt] = None
    severity: Literal["critical", "major", "minor"]
    description: StrictStr
    suggestion: StrictStr

    @field_validator("description")
    @classmethod
    def _description_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v


class QAScore(BaseModel):
    category: StrictStr
    # maxScore is declared first so the score check can read it
    maxScore: StrictFloat = Field(ge=0, allow_inf_nan=False)
    score: StrictFloat = Field(ge=0, allow_inf_nan=False)
    notes: StrictStr = ""

    @field_validator("score")
    @classmethod
    def _score_within_max(cls, v: float, info: ValidationInfo) -> float:
        max_score = info.data.get("maxScore")
        if max_score is not None and v > max_score:
            raise ValueError("must not exceed maxScore")
        return v


class QAResult(BaseModel):
    total_score: StrictFloat = Field(ge=0, le=100, allow_inf_nan=False)
    verdict: Literal["pass", "pass-with-warnings", "revision-required", "fail"]
    short_summary: StrictStr
    revision_required: StrictBool
    revision_triggers: List[StrictStr]
    strengths: List[StrictStr]
    issues: List[QAIssue]
    risks: List[StrictStr]
    suggestions: List[StrictStr]
    scores: List[QAScore]

    @field_validator("short_summary")
    @classmethod
    def _summary_has_content(cls, v: str) -> str:
        if len(v.strip()) < MIN_SUMMARY_CHARS:
            raise ValueError(f"must have at least {MIN_SUMMARY_CHARS} characters")
        return v


_STRING_LIST = {"type": "ARRAY", "items": {"type": "STRING"}}

QA_RESPONSE_SCHEMA: dict = {
    "type": "OBJECT",
    "properties": {
        "total_score": {"type": "NUMBER"},
        "verdict": {"type": "STRING", "enum": [v.value for v in QAVerdict]},
        "short_summary": {"type": "STRING"},
        "revision_required": {"type": "BOOLEAN"},
        "revision_triggers": _STRING_LIST,
        "strengths": _STRING_LIST,
        "issues": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "slideNumber": {"type": "INTEGER", "nullable": True},
                    "severity": {"type": "STRING", "enum": [s.value for s in IssueSeverity]},
                    "description": {"type": "STRING"},
                    "suggestion": {"type": "STRING"},
                },
                "required": ["severity", "description", "suggestion"],
            },
        },
        "risks": _STRING_LIST,
        "suggestions": _STRING_LIST,
        "scores": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "category": {"type": "STRING"},
                    "score": {"type": "NUMBER"},
                    "maxScore": {"type": "NUMBER"},
                    "notes": {"type": "STRING"},
                },
                "required": ["category", "score", "maxScore", "notes"],
            },
        },
    },
    "required": [
        "total_score",
        "verdict",
        "short_summary",
        "revision_required",
        "revision_triggers",
        "strengths",
        "issues",
        "risks",
        "suggestions",
        "scores",
    ],
}
