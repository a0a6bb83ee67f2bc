# lesson_qa/llm/errors.py
class LLMError(Exception):
    """Base LLM error (wrapped)."""

class LLMRetryableError(LLMError):
    """Transient error: timeouts, 429s, 5xx, network."""

class LLMNonRetryableError(LLMError):
    """Bad request, auth, prompt too large."""

class LLMEmptyResponseError(LLMError):
    """Model returned no text."""

class LLMResponseParseError(LLMError):
    """Model text is not valid JSON."""

class LLMResponseInvalidError(LLMError):
    """JSON parsed but failed QAResult validation."""

    def __init__(self, message: str, errors: list | None = None):
        super().__init__(message)
        self.errors = errors or []
