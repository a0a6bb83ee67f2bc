import json

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from lesson_qa.db.base import Base
from lesson_qa.llm.types import ReviewResponse
from lesson_qa.pdf.types import NormalizedSlide
from lesson_qa.schemas.qa import QAResult
from lesson_qa.schemas.qa_run import UserIdentity

# live API script, run by hand
collect_ignore = ["llm_smoke_test.py"]


def _report(**overrides) -> dict:
    report = {
        "total_score": 82,
        "verdict": "pass",
        "short_summary": "Clear lesson with strong teacher notes.",
        "revision_required": False,
        "revision_triggers": [],
        "strengths": ["Warm-up is engaging"],
        "issues": [
            {
                "slideNumber": 3,
                "severity": "minor",
                "description": "Instruction wording is long.",
                "suggestion": "Split into two steps.",
            }
        ],
        "risks": [],
        "suggestions": ["Add timings to the extension slide"],
        "scores": [
            {"category": "Instructional Clarity", "score": 21, "maxScore": 25, "notes": "Mostly clear"},
            {"category": "Engagement", "score": 12, "maxScore": 15, "notes": "Varied"},
        ],
    }
    report.update(overrides)
    return report


class FakeReviewClient:
    """Plays back scripted outcomes: an Exception is raised, a dict is returned as a review."""

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.calls: list[dict] = []

    def review(self, system_instruction, user_prompt, *, prompt_version, attempt=1):
        self.calls.append(
            {
                "system_instruction": system_instruction,
                "user_prompt": user_prompt,
                "prompt_version": prompt_version,
                "attempt": attempt,
            }
        )
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return ReviewResponse(
            raw_text=json.dumps(outcome),
            result=QAResult.model_validate(outcome),
            model="gemini-test",
            trace_id=f"trace-{len(self.calls)}",
        )


def _slides(count: int, *, with_notes: int | None = None) -> list[NormalizedSlide]:
    with_notes = count if with_notes is None else with_notes
    return [
        NormalizedSlide(
            slide_number=i + 1,
            slide_text=f"Slide {i + 1}: practice the words cat, dog and bird",
            speaker_notes=f"Ask the student to repeat each word for slide {i + 1}." if i < with_notes else None,
        )
        for i in range(count)
    ]


@pytest.fixture
def db():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    session = sessionmaker(bind=engine, autoflush=False, autocommit=False)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def make_report():
    return _report


@pytest.fixture
def make_slides():
    return _slides


@pytest.fixture
def fake_client():
    return FakeReviewClient


@pytest.fixture
def user():
    return UserIdentity(user_id="u-123", email="reviewer@example.com")
