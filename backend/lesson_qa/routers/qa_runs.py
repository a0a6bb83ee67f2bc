"""
qa_runs.py
- Purpose: API routes for submitting lesson PDFs for QA and reading QA runs.
- Design: Keep router thin. Delegate business logic to services.
- Runs are immutable: there is no update or delete route.
"""

import uuid

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from lesson_qa.api.deps import get_current_user, get_db, get_qa_pipeline
from lesson_qa.core.config import settings
from lesson_qa.core.errors import not_found
from lesson_qa.repos.qa_run.read import QARunReadRepo
from lesson_qa.schemas.qa_run import PipelineOutcome, QARun, UserIdentity
from lesson_qa.services.connector import ConnectorTarget, push_to_connector
from lesson_qa.services.qa_pipeline import QAPipeline
from lesson_qa.validations.request_validators import parse_mode, validate_pdf_size, validate_pdf_upload

router = APIRouter(prefix="/api/qa-runs", tags=["QA Runs"])


def _load_run(db: Session, run_id: uuid.UUID) -> QARun:
    row = QARunReadRepo(db).get_by_id(run_id)
    if not row:
        raise not_found(message="QA run not found")
    return QARun.model_validate(row)


@router.post("", response_model=PipelineOutcome, status_code=status.HTTP_201_CREATED)
def submit_qa_run(
    pdf: UploadFile = File(...),
    title: str = Form(""),
    mode: str = Form(...),
    source_type: str = Form(...),
    user: UserIdentity = Depends(get_current_user),
    pipeline: QAPipeline = Depends(get_qa_pipeline),
):
    validate_pdf_upload(pdf)
    pdf_bytes = pdf.file.read()
    validate_pdf_size(pdf_bytes, settings.MAX_UPLOAD_BYTES)

    outcome = pipeline.run(pdf_bytes, source_type, mode, title, user=user)
    if outcome.blocked:
        return JSONResponse(
            status_code=422,
            content=outcome.model_dump(mode="json"),
        )
    return outcome


@router.get("", response_model=list[QARun])
def list_qa_runs(
    mode: str | None = None,
    limit: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
):
    mode_value = parse_mode(mode).value if mode else None
    rows = QARunReadRepo(db).list_recent(mode=mode_value, limit=limit)
    return [QARun.model_validate(r) for r in rows]


@router.get("/{run_id}", response_model=QARun)
def get_qa_run(run_id: uuid.UUID, db: Session = Depends(get_db)):
    return _load_run(db, run_id)


@router.post("/{run_id}/push")
def push_qa_run(
    run_id: uuid.UUID,
    target: ConnectorTarget = ConnectorTarget.PROJECT_TOOL,
    db: Session = Depends(get_db),
):
    run = _load_run(db, run_id)
    res = push_to_connector(target, run)
    return {"success": res.success, "message": res.message, "external_id": res.external_id}
