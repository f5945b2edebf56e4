"""Database layer utilities for SQLAlchemy-backed persistence."""
from __future__ import annotations

from typing import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from .config import get_settings

settings = get_settings()

engine: Engine = create_engine(settings.database_url, pool_pre_ping=True, future=True)


if engine.dialect.name == "sqlite":

    @event.listens_for(engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:  # pragma: no cover - driver hook
        # SQLite ignores ON DELETE clauses unless the pragma is set per connection.
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


SessionLocal = sessionmaker(
    bind=engine,
    autoflush=False,
    autocommit=False,
    future=True,
    expire_on_commit=False,
)

Base = declarative_base()


def get_engine() -> Engine:
    """Return the configured SQLAlchemy engine."""
    return engine


def get_session() -> Generator[Session, None, None]:
    """FastAPI dependency that yields a SQLAlchemy session per request."""
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def create_session() -> Session:
    """Return a new SQLAlchemy session for background tasks or scripts."""
    return SessionLocal()


def init_db() -> None:
    """Initialise database schema by creating tables when missing."""
    # Import models to ensure they are registered on the metadata before create_all runs.
    from . import models  # noqa: F401

    Base.metadata.create_all(bind=engine)


__all__ = [
    "Base",
    "SessionLocal",
    "engine",
    "get_engine",
    "get_session",
    "create_session",
    "init_db",
]
