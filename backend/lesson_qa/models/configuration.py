"""
configuration.py
- Purpose: Key-value tool configuration edited from the admin settings screen.
- The QA pipeline reads keys of the form "ai-qa-runner-{mode}".
"""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from lesson_qa.models.base import Base, utcnow


class Configuration(Base):
    __tablename__ = "configurations"

    key: Mapped[str] = mapped_column(String(128), primary_key=True)
    instruction: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_locked: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    updated_by: Mapped[str | None] = mapped_column(Text, nullable=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
