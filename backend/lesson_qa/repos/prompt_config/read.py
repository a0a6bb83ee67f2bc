"""
prompt_config/read.py
- Purpose: Read-only access to the two external prompt sources: the
  key-value configuration store and the versioned qa_versions records.
- The QA pipeline never writes to either.
"""

from sqlalchemy.orm import Session

from lesson_qa.models.configuration import Configuration
from lesson_qa.models.qa_version import QAVersion


class ConfigurationReadRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_by_key(self, key: str) -> Configuration | None:
        return self.db.query(Configuration).filter(Configuration.key == key).first()


class QAVersionReadRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_active(self, mode: str) -> QAVersion | None:
        """Newest active version for a mode."""
        return (
            self.db.query(QAVersion)
            .filter(QAVersion.mode == mode, QAVersion.active.is_(True))
            .order_by(QAVersion.created_at.desc())
            .first()
        )
