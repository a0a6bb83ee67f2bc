"""
result_validator.py
- Purpose: Field-level validation of the parsed AI review JSON.
- QAResult is the contract; pydantic collects every violation at once.
- A response with any violation is rejected wholesale; scoring and verdict
  display downstream assume a fully well-formed QAResult.
"""

from typing import Any

from pydantic import ValidationError

from lesson_qa.schemas.qa import QAResult
from lesson_qa.validations.types import FieldError, ValidationOutcome


def _field_path(loc: tuple) -> str:
    # ("issues", 0, "severity") -> "issues[0].severity"
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path += f".{part}" if path else str(part)
    return path or "root"


def validate_qa_result(raw: Any) -> ValidationOutcome:
    try:
        return ValidationOutcome(result=QAResult.model_validate(raw))
    except ValidationError as e:
        return ValidationOutcome(
            errors=[FieldError(_field_path(err["loc"]), err["msg"]) for err in e.errors()]
        )
