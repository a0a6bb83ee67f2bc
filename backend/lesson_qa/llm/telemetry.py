# lesson_qa/llm/telemetry.py

import logging
import time
from dataclasses import dataclass

logger = logging.getLogger("llm")

@dataclass
class LLMCallLog:
    trace_id: str
    provider: str
    model: str
    purpose: str
    prompt_version: str
    latency_ms: int
    attempt: int
    ok: bool
    error_type: str | None = None
    input_tokens: int | None = None
    output_tokens: int | None = None

def now_ms() -> int:
    return int(time.time() * 1000)

def log_llm_call(item: LLMCallLog) -> None:
    logger.info(
        "llm_call trace_id=%s provider=%s model=%s purpose=%s prompt_version=%s latency_ms=%s attempt=%s ok=%s error=%s tokens_in=%s tokens_out=%s",
        item.trace_id,
        item.provider,
        item.model,
        item.purpose,
        item.prompt_version,
        item.latency_ms,
        item.attempt,
        item.ok,
        item.error_type,
        item.input_tokens,
        item.output_tokens,
    )
