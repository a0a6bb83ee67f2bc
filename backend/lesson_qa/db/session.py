from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from lesson_qa.core.config import settings
from lesson_qa.db.base import Base

_connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

# Sync engine; the pipeline is one sequential flow per request
engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    connect_args=_connect_args,
)

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


def init_db() -> None:
    """Create missing tables (local/dev; DB_AUTO_CREATE)."""
    Base.metadata.create_all(bind=engine)
