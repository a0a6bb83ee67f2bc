from typing import Generator

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from lesson_qa.core.errors import bad_request
from lesson_qa.db.session import SessionLocal
from lesson_qa.schemas.qa_run import UserIdentity
from lesson_qa.services.qa_pipeline import QAPipeline


def get_db() -> Generator[Session, None, None]:
    """
    Yields a DB session per request.
    Ensures the session is closed even on exceptions.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_current_user(
    x_user_id: str | None = Header(None),
    x_user_email: str | None = Header(None),
) -> UserIdentity:
    """
    Caller identity as forwarded by the upstream gateway.
    Authentication itself happens upstream; this only makes identity explicit.
    """
    if not x_user_id or not x_user_id.strip():
        raise bad_request(message="X-User-Id header is required")
    return UserIdentity(user_id=x_user_id.strip(), email=(x_user_email or "").strip())


def get_qa_pipeline(db: Session = Depends(get_db)) -> QAPipeline:
    """
    Service dependency for QA runs.
    Override in tests to inject a fake review client.
    """
    return QAPipeline(db=db)
