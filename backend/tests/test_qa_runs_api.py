import io
import uuid

import pytest
from fastapi.testclient import TestClient

from lesson_qa.api.deps import get_db, get_qa_pipeline
from lesson_qa.constants.qa import PipelineStage
from lesson_qa.core import ErrorCode, ErrorReason
from lesson_qa.core.errors import stage_error
from lesson_qa.main import app
from lesson_qa.pdf.types import RawPage
from lesson_qa.services.qa_engine import QAEngine
from lesson_qa.services.qa_pipeline import QAPipeline

PAGES = [
    RawPage(
        page_number=i,
        text=f"Slide {i}: colours of the rainbow and where to find them Speaker Notes: Point to colour number {i} and say it twice.",
        item_count=14,
        avg_font_size=18.0,
    )
    for i in range(1, 6)
]

HEADERS = {"X-User-Id": "u-123", "X-User-Email": "reviewer@example.com"}


def pdf_upload():
    return {"pdf": ("lesson.pdf", io.BytesIO(b"%PDF-1.4\n%fake pdf\n"), "application/pdf")}


@pytest.fixture
def review(fake_client, make_report):
    return fake_client(make_report(), make_report(total_score=55, verdict="fail", revision_required=True))


@pytest.fixture
def pages():
    return list(PAGES)


@pytest.fixture
def client(db, review, pages):
    def _db():
        yield db

    def _pipeline():
        engine = QAEngine(db, review_client=review, retry_delay_seconds=0)
        return QAPipeline(db, engine=engine, extractor=lambda _bytes: list(pages))

    app.dependency_overrides[get_db] = _db
    app.dependency_overrides[get_qa_pipeline] = _pipeline
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def submit(client, mode="full-lesson", title="Rainbow Colours", headers=HEADERS, files=None):
    data = {"mode": mode, "source_type": "gslides", "title": title}
    return client.post("/api/qa-runs", data=data, files=files or pdf_upload(), headers=headers)


def test_submit_creates_run(client):
    resp = submit(client)
    assert resp.status_code == 201, resp.text

    body = resp.json()
    assert body["status"] == "completed"
    assert body["normalization"]["slide_count"] == 5
    assert body["run"]["verdict"] == "pass"
    assert body["run"]["triggered_by_user_id"] == "u-123"
    assert body["run_id"] == body["run"]["id"]


def test_blocked_submission_returns_422_with_flags(client, review):
    resp = submit(client, title="")
    assert resp.status_code == 422, resp.text

    body = resp.json()
    assert body["status"] == "blocked"
    assert "Lesson title is missing or too short." in body["flags"]
    assert body["run"] is None
    assert review.calls == []


def test_missing_user_header_is_rejected(client):
    resp = submit(client, headers={})

    assert resp.status_code == 422
    assert resp.json()["error"]["code"] == "VALIDATION_ERROR"


def test_unknown_mode_is_rejected(client):
    resp = submit(client, mode="speed-qa")

    assert resp.status_code == 422
    assert "speed-qa" in resp.json()["error"]["message"]


def test_non_pdf_upload_is_rejected(client):
    files = {"pdf": ("notes.txt", io.BytesIO(b"hello"), "text/plain")}

    resp = submit(client, files=files)

    assert resp.status_code == 422
    assert resp.json()["error"]["code"] == "INVALID_FILE_TYPE"


def test_pipeline_error_carries_stage(client, monkeypatch):
    def fail(self, *args, **kwargs):
        raise stage_error(
            PipelineStage.EXTRACTION,
            code=ErrorCode.PDF_UNREADABLE,
            reason=ErrorReason.PDF_INVALID,
            message="Could not read the PDF",
            status_code=422,
        )

    monkeypatch.setattr(QAPipeline, "run", fail)

    resp = submit(client)

    assert resp.status_code == 422
    error = resp.json()["error"]
    assert error["code"] == "PDF_UNREADABLE"
    assert error["details"]["stage"] == "extraction"


def test_get_and_list_runs(client):
    first = submit(client).json()["run_id"]
    second = submit(client).json()["run_id"]
    assert first != second

    resp = client.get(f"/api/qa-runs/{first}")
    assert resp.status_code == 200
    assert resp.json()["total_score"] == 82
    assert resp.json()["full_report"]["issues"][0]["severity"] == "minor"

    listed = client.get("/api/qa-runs", params={"mode": "full-lesson"}).json()
    assert {r["id"] for r in listed} == {first, second}

    assert client.get("/api/qa-runs", params={"mode": "chunk-qa"}).json() == []


def test_unknown_run_is_404(client):
    resp = client.get(f"/api/qa-runs/{uuid.uuid4()}")

    assert resp.status_code == 404
    assert resp.json()["error"]["code"] == "NOT_FOUND"


def test_push_returns_stub_receipt(client):
    run_id = submit(client).json()["run_id"]

    resp = client.post(f"/api/qa-runs/{run_id}/push")

    assert resp.status_code == 200
    assert resp.json() == {
        "success": True,
        "message": resp.json()["message"],
        "external_id": f"stub-{run_id}",
    }


@pytest.mark.parametrize("method", ["put", "patch", "delete"])
def test_runs_cannot_be_modified(client, method):
    run_id = submit(client).json()["run_id"]

    resp = getattr(client, method)(f"/api/qa-runs/{run_id}")

    assert resp.status_code == 405


def test_health(client):
    assert client.get("/api/health").json() == {"status": "ok"}
    assert client.get("/api/db/health").json() == {"status": "ok", "db": "connected"}
