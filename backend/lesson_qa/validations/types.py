"""lesson_qa/validations/types.py

Outcomes of the two gates around the AI review:
- DeterministicResult: structural checks before any AI cost is spent.
- ValidationOutcome: schema checks on what the AI sent back.
"""


from dataclasses import dataclass, field

from lesson_qa.schemas.qa import QAResult


@dataclass(frozen=True)
class DeterministicResult:
    deterministic_pass: bool
    flags: list[str]
    critical_fail: bool


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


@dataclass(frozen=True)
class ValidationOutcome:
    """Either `result` or `errors`, never both."""

    result: QAResult | None = None
    errors: list[FieldError] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return self.result is not None and not self.errors

    def summary(self) -> str:
        return "; ".join(str(e) for e in self.errors)
