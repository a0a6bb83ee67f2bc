# lesson_qa/llm/retry.py
"""Bounded retry around a single-attempt call.

The wrapped callable receives the 1-based attempt number so it can tag its
own telemetry. Any exception counts as a failed attempt; the last one is
re-raised once attempts are exhausted.
"""

import logging
import time
from typing import Callable, TypeVar

T = TypeVar("T")

logger = logging.getLogger("lesson_qa.llm.retry")


def call_with_retry(
    fn: Callable[[int], T],
    *,
    max_attempts: int = 2,
    delay_seconds: float = 0.0,
) -> T:
    if max_attempts < 1:
        raise ValueError("max_attempts must be >= 1")

    last_err: Exception | None = None
    for attempt in range(1, max_attempts + 1):
        try:
            return fn(attempt)
        except Exception as e:
            last_err = e
            if attempt >= max_attempts:
                break
            logger.warning(
                "qa.attempt_failed",
                extra={"attempt": attempt, "error_type": type(e).__name__, "error": str(e)},
            )
            if delay_seconds > 0:
                time.sleep(delay_seconds)

    raise last_err if last_err else RuntimeError("call failed without raising")
