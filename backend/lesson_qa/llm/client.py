# lesson_qa/llm/client.py


import json
import logging
import uuid

from lesson_qa.core.config import settings
from lesson_qa.llm.errors import (
    LLMEmptyResponseError,
    LLMNonRetryableError,
    LLMResponseInvalidError,
    LLMResponseParseError,
)
from lesson_qa.llm.providers.gemini import GeminiProvider
from lesson_qa.llm.telemetry import LLMCallLog, log_llm_call, now_ms
from lesson_qa.llm.types import LLMRequest, LLMResponse, ReviewResponse
from lesson_qa.schemas.qa import QA_RESPONSE_SCHEMA
from lesson_qa.validations.result_validator import validate_qa_result

logger = logging.getLogger("lesson_qa.llm.client")


class ReviewClient:
    """
    One schema-constrained review attempt: generate -> parse -> validate.
    Raises an LLMError subclass on any failure; retries live in the caller.
    """

    def __init__(self, provider=None, *, model: str | None = None):
        self.provider = provider or GeminiProvider()
        self.model = model or settings.GEMINI_MODEL

    def _build_request(self, system_instruction: str, user_prompt: str, prompt_version: str) -> LLMRequest:
        if settings.LLM_PROVIDER != "gemini":
            raise LLMNonRetryableError(f"Unsupported provider: {settings.LLM_PROVIDER}")

        return LLMRequest(
            trace_id=str(uuid.uuid4()),
            purpose="qa_review",
            prompt_version=prompt_version,
            system_instruction=system_instruction,
            user_prompt=user_prompt,
            provider=settings.LLM_PROVIDER,
            model=self.model,
            temperature=settings.LLM_TEMPERATURE,
            max_output_tokens=settings.LLM_MAX_OUTPUT_TOKENS,
            timeout_seconds=settings.LLM_TIMEOUT_SECONDS,
            response_mime_type="application/json",
            response_schema=QA_RESPONSE_SCHEMA,
        )

    def _parse(self, resp: LLMResponse) -> ReviewResponse:
        raw = resp.output_text or ""
        if not raw.strip():
            raise LLMEmptyResponseError("AI returned an empty response.")

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise LLMResponseParseError(f"AI response is not valid JSON: {e}") from e

        outcome = validate_qa_result(data)
        if not outcome.valid:
            raise LLMResponseInvalidError(
                f"AI response failed schema validation: {outcome.summary()}",
                errors=outcome.errors,
            )

        return ReviewResponse(raw_text=raw, result=outcome.result, model=resp.model, trace_id=resp.trace_id)

    def review(
        self,
        system_instruction: str,
        user_prompt: str,
        *,
        prompt_version: str,
        attempt: int = 1,
    ) -> ReviewResponse:
        req = self._build_request(system_instruction, user_prompt, prompt_version)
        if settings.LLM_LOG_PROMPTS:
            logger.debug("llm.prompt", extra={"trace_id": req.trace_id, "system": system_instruction, "user": user_prompt})

        start_ms = now_ms()
        resp: LLMResponse | None = None
        try:
            resp = self.provider.generate(req)
            review = self._parse(resp)
        except Exception as e:
            log_llm_call(
                LLMCallLog(
                    trace_id=req.trace_id,
                    provider=req.provider,
                    model=req.model,
                    purpose=req.purpose,
                    prompt_version=prompt_version,
                    latency_ms=now_ms() - start_ms,
                    attempt=attempt,
                    ok=False,
                    error_type=type(e).__name__,
                    input_tokens=resp.input_tokens if resp else None,
                    output_tokens=resp.output_tokens if resp else None,
                )
            )
            raise

        log_llm_call(
            LLMCallLog(
                trace_id=req.trace_id,
                provider=req.provider,
                model=req.model,
                purpose=req.purpose,
                prompt_version=prompt_version,
                latency_ms=now_ms() - start_ms,
                attempt=attempt,
                ok=True,
                input_tokens=resp.input_tokens,
                output_tokens=resp.output_tokens,
            )
        )
        return review
