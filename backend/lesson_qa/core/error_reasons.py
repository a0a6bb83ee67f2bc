"""
error_reasons.py
- Purpose: Human-friendly "reason" strings.
- Keep these stable; they are surfaced next to QA results in the UI.
"""

from enum import Enum


class ErrorReason(str, Enum):
    UNKNOWN = "Unknown error"

    INVALID_INPUT = "Invalid input"
    RESOURCE_NOT_FOUND = "Resource not found"

    DATABASE_UNAVAILABLE = "Database unavailable"
    PDF_INVALID = "Invalid PDF"
    NOTHING_EXTRACTED = "No slides could be extracted"
    LLM_FAILED = "AI review failed"
    PERSIST_FAILED = "QA run could not be saved"
    INTERNAL_ERROR = "Internal server error"
