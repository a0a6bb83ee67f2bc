"""
qa_version.py
- Purpose: Admin-seeded, versioned review instructions per QA mode.
- At most one row per mode is expected to be active.
"""

import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from lesson_qa.models.base import Base, utcnow


class QAVersion(Base):
    __tablename__ = "qa_versions"
    __table_args__ = (
        Index("ix_qa_versions_mode_active", "mode", "active"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    mode: Mapped[str] = mapped_column(String(32), nullable=False)
    version_tag: Mapped[str] = mapped_column(String(64), nullable=False)
    prompt_template: Mapped[str] = mapped_column(Text, nullable=False)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
