"""Engine and session factory for the portal database.

SQLite is the default backend; its connections are shared across the
threads FastAPI runs sync dependencies on, hence ``check_same_thread``.
"""

from __future__ import annotations

from collections.abc import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from stratizen_hub.core.settings import settings


class Base(DeclarativeBase):
    """Base for users, catalog, resources, engagement and rank models."""


# Model modules register their tables on Base.metadata.
import stratizen_hub.models  # noqa: E402,F401

_connect_args = (
    {"check_same_thread": False}
    if settings.effective_database_url.startswith("sqlite")
    else {}
)

engine = create_engine(
    settings.effective_database_url,
    pool_pre_ping=True,
    echo=settings.sql_debug,
    connect_args=_connect_args,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Yield one session per request; callers commit their own work."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables() -> None:
    """Create every table; used by init_db and local development."""
    Base.metadata.create_all(bind=engine)


def drop_tables() -> None:
    """Drop every table."""
    Base.metadata.drop_all(bind=engine)
