# lesson_qa/llm/types.py
from dataclasses import dataclass
from typing import Any

from lesson_qa.schemas.qa import QAResult

JsonDict = dict[str, Any]

@dataclass(frozen=True)
class LLMRequest:
    trace_id: str
    purpose: str                    # e.g. "qa_review"
    prompt_version: str             # resolved prompt version tag
    system_instruction: str
    user_prompt: str

    provider: str                   # "gemini"
    model: str                      # e.g. "gemini-3-flash-preview"

    temperature: float
    max_output_tokens: int
    timeout_seconds: int

    response_mime_type: str | None = "application/json"
    response_schema: JsonDict | None = None

@dataclass(frozen=True)
class LLMResponse:
    trace_id: str
    provider: str
    model: str
    output_text: str

    latency_ms: int
    raw: JsonDict | None = None
    input_tokens: int | None = None
    output_tokens: int | None = None

@dataclass(frozen=True)
class ReviewResponse:
    """One successful, validated review attempt."""
    raw_text: str
    result: QAResult
    model: str
    trace_id: str
