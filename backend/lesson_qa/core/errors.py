"""
errors.py
- Purpose: AppError used across services/repos for consistent errors.
- Pattern: raise AppError(...) in service/repo, handler converts to JSON response.
- Pipeline failures carry the failed stage in details["stage"].
"""

from dataclasses import dataclass
from typing import Any

from fastapi import status as http_status

from lesson_qa.constants.qa import PipelineStage
from lesson_qa.core.error_codes import ErrorCode
from lesson_qa.core.error_reasons import ErrorReason


@dataclass(eq=False)
class AppError(Exception):
    code: ErrorCode
    reason: str
    status_code: int = http_status.HTTP_400_BAD_REQUEST
    details: dict[str, Any] | None = None
    message: str | None = None  # Optional human-readable message

    def __str__(self) -> str:
        return self.message or str(self.reason)

    @property
    def stage(self) -> str | None:
        return (self.details or {}).get("stage")

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "error": {
                "code": self.code,
                "reason": self.reason,
                "message": self.message if self.message else self.reason,
            }
        }
        if self.details:
            payload["error"]["details"] = self.details
        return payload


# Convenience constructors
def _reason_text(reason) -> str:
    return reason.value if isinstance(reason, ErrorReason) else str(reason)


def bad_request(reason: str = ErrorReason.INVALID_INPUT, *, code: ErrorCode = ErrorCode.VALIDATION_ERROR, message: str | None = None, details: dict | None = None) -> AppError:
    return AppError(code=code, reason=_reason_text(reason), status_code=422, details=details, message=message)


def not_found(reason: str = ErrorReason.RESOURCE_NOT_FOUND, *, message: str | None = None, details: dict | None = None) -> AppError:
    return AppError(code=ErrorCode.NOT_FOUND, reason=_reason_text(reason), status_code=http_status.HTTP_404_NOT_FOUND, details=details, message=message)


def stage_error(
    stage: PipelineStage,
    *,
    code: ErrorCode,
    reason: ErrorReason,
    message: str,
    status_code: int,
    details: dict | None = None,
) -> AppError:
    payload = {"stage": stage.value}
    if details:
        payload.update(details)
    return AppError(code=code, reason=reason.value, status_code=status_code, details=payload, message=message)
