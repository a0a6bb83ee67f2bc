import pytest
from sqlalchemy.exc import OperationalError

from lesson_qa.core import AppError, ErrorCode
from lesson_qa.core.request_context import clear_context, get_context, set_context
from lesson_qa.llm.errors import LLMResponseInvalidError, LLMResponseParseError, LLMRetryableError
from lesson_qa.llm.prompts.registry import NO_NOTES_MARKER, render_transcript
from lesson_qa.models.configuration import Configuration
from lesson_qa.models.qa_run import QARunRecord
from lesson_qa.repos.qa_run.write import QARunWriteRepo
from lesson_qa.services.qa_engine import UNTITLED, QAEngine


def run_engine(engine, slides, user, mode="full-lesson", title="Animals Around Us"):
    return engine.run(slides, mode, title, "gslides", ["1 slide(s) have empty or near-empty content: slides 3."], 4, user=user)


def test_successful_review_is_persisted(db, fake_client, make_report, make_slides, user):
    client = fake_client(make_report())
    engine = QAEngine(db, review_client=client, retry_delay_seconds=0)

    run_id, run = run_engine(engine, make_slides(5, with_notes=4), user)

    assert len(client.calls) == 1
    assert run.id == run_id
    assert run.total_score == 82
    assert run.verdict == "pass"
    assert run.prompt_version == "default-v1"
    assert run.ai_model == "gemini-test"
    assert run.normalized_slide_count == 5
    assert run.notes_detected_count == 4
    assert run.deterministic_flags == ["1 slide(s) have empty or near-empty content: slides 3."]
    assert run.triggered_by_user_id == "u-123"
    assert run.triggered_by_user_email == "reviewer@example.com"
    assert run.full_report == run.parsed_ai_json
    assert [s.category for s in run.structured_scores] == ["Instructional Clarity", "Engagement"]
    assert run.execution_time_ms >= 0

    row = db.get(QARunRecord, run_id)
    assert row is not None
    assert row.raw_ai_response.startswith("{")


def test_prompt_and_transcript_are_sent(db, fake_client, make_report, make_slides, user):
    db.add(Configuration(key="ai-qa-runner-chunk-qa", instruction="Review this chunk.", is_locked=False))
    db.commit()
    client = fake_client(make_report())
    slides = make_slides(2, with_notes=1)

    _, run = run_engine(QAEngine(db, review_client=client, retry_delay_seconds=0), slides, user, mode="chunk-qa")

    call = client.calls[0]
    assert call["system_instruction"] == "Review this chunk."
    assert call["prompt_version"] == "config-chunk-qa"
    assert call["user_prompt"] == render_transcript(slides)
    assert "LESSON CONTENT (2 slides)" in call["user_prompt"]
    assert f"--- SLIDE 2 ---\n{slides[1].slide_text}\nSPEAKER NOTES: {NO_NOTES_MARKER}" in call["user_prompt"]
    assert run.prompt_version == "config-chunk-qa"


def test_retry_uses_second_attempt(db, fake_client, make_report, make_slides, user):
    client = fake_client(LLMResponseParseError("not json"), make_report(total_score=64, verdict="revision-required"))

    _, run = run_engine(QAEngine(db, review_client=client, retry_delay_seconds=0), make_slides(5), user)

    assert [c["attempt"] for c in client.calls] == [1, 2]
    assert run.total_score == 64
    assert run.verdict == "revision-required"


def test_two_failures_raise_one_wrapped_error(db, fake_client, make_report, make_slides, user):
    second = LLMResponseInvalidError("AI response failed schema validation: total_score: out of range")
    client = fake_client(LLMRetryableError("timeout"), second, make_report())

    with pytest.raises(AppError) as exc:
        run_engine(QAEngine(db, review_client=client, retry_delay_seconds=0), make_slides(5), user)

    err = exc.value
    assert len(client.calls) == 2
    assert err.code == ErrorCode.QA_FAILED
    assert err.status_code == 502
    assert err.stage == "ai_review"
    assert "full-lesson" in err.message
    assert err.__cause__ is second
    assert db.query(QARunRecord).count() == 0


def test_persistence_failure_is_reported(db, fake_client, make_report, make_slides, user, monkeypatch):
    def boom(self, **fields):
        raise OperationalError("INSERT INTO qa_runs", {}, Exception("disk full"))

    monkeypatch.setattr(QARunWriteRepo, "create_run", boom)

    with pytest.raises(AppError) as exc:
        run_engine(QAEngine(db, review_client=fake_client(make_report()), retry_delay_seconds=0), make_slides(5), user)

    assert exc.value.code == ErrorCode.PERSIST_FAILED
    assert exc.value.stage == "persistence"
    assert exc.value.status_code == 500


def test_identical_runs_get_distinct_ids(db, fake_client, make_report, make_slides, user):
    engine = QAEngine(db, review_client=fake_client(make_report(), make_report()), retry_delay_seconds=0)

    first_id, _ = run_engine(engine, make_slides(5), user)
    second_id, _ = run_engine(engine, make_slides(5), user)

    assert first_id != second_id
    assert db.query(QARunRecord).count() == 2


def test_blank_title_is_stored_as_untitled(db, fake_client, make_report, make_slides, user):
    engine = QAEngine(db, review_client=fake_client(make_report()), retry_delay_seconds=0)

    _, run = run_engine(engine, make_slides(5), user, title="   ")

    assert run.title == UNTITLED


def test_write_repo_is_insert_only():
    assert not hasattr(QARunWriteRepo, "update_run")
    assert not hasattr(QARunWriteRepo, "delete_run")


def test_run_context_is_cleared_after_each_run(db, fake_client, make_report, make_slides, user):
    set_context(request_id="req-1")
    engine = QAEngine(db, review_client=fake_client(make_report()), retry_delay_seconds=0)
    try:
        run_engine(engine, make_slides(5), user)

        assert get_context() == {"request_id": "req-1"}
    finally:
        clear_context()


def test_run_context_is_cleared_after_failure(db, fake_client, make_slides, user):
    engine = QAEngine(
        db,
        review_client=fake_client(LLMRetryableError("timeout"), LLMRetryableError("timeout")),
        retry_delay_seconds=0,
    )

    with pytest.raises(AppError):
        run_engine(engine, make_slides(5), user, mode="chunk-qa")

    assert "mode" not in get_context()
    assert "run_id" not in get_context()
