# src/question_board/db/session.py
"""Engine and session wiring shared by the API, scripts and tests."""

from __future__ import annotations

from collections.abc import Generator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from question_board.core.settings import settings


class Base(DeclarativeBase):
    """Declarative base for every Question Board table."""


def build_engine(url: str, *, echo: bool = False) -> Engine:
    """Create an engine for ``url`` with SQLite handled for threaded use.

    FastAPI runs sync dependencies on worker threads, so SQLite connections
    must be shareable across threads. An in-memory SQLite database only
    exists on its one connection and is therefore pinned with ``StaticPool``.
    """
    if not url.startswith("sqlite"):
        return create_engine(url, pool_pre_ping=True, echo=echo)
    options: dict[str, object] = {"connect_args": {"check_same_thread": False}}
    if url in ("sqlite://", "sqlite:///:memory:"):
        options["poolclass"] = StaticPool
    return create_engine(url, echo=echo, **options)


# Models must be registered on Base.metadata before create_all runs.
import question_board.models  # noqa: E402,F401

engine = build_engine(settings.database_url_sync, echo=settings.sql_debug)

SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


def get_db() -> Generator[Session, None, None]:
    """Yield a request-scoped session and close it afterwards."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables() -> None:
    """Create every table on the configured engine (local runs without Alembic)."""
    Base.metadata.create_all(bind=engine)


def drop_tables() -> None:
    """Drop every table on the configured engine."""
    Base.metadata.drop_all(bind=engine)
