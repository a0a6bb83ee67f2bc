import uuid

from sqlalchemy.orm import Session

from lesson_qa.models.qa_run import QARunRecord


class QARunReadRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, run_id: uuid.UUID) -> QARunRecord | None:
        return self.db.query(QARunRecord).filter(QARunRecord.id == run_id).first()

    def list_recent(self, *, mode: str | None = None, limit: int = 20) -> list[QARunRecord]:
        q = self.db.query(QARunRecord)
        if mode:
            q = q.filter(QARunRecord.mode == mode)
        return q.order_by(QARunRecord.created_at.desc()).limit(limit).all()
