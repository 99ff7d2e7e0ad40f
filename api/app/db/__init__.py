from __future__ import annotations

from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from api.app.obs import add_query_logger
from config import get_settings

from ..models import Base

# The engine is created lazily on first use so tests can swap in an in-memory
# database via ``create_test_session`` before any request is served.


def create_test_session() -> tuple[sessionmaker, Engine]:
    """Return a session factory and engine for tests.

    The database uses an in-memory SQLite engine with a static pool so that
    multiple connections share the same data.
    """

    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    add_query_logger(engine, "test")
    Base.metadata.create_all(bind=engine)
    session_factory = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    return session_factory, engine


def _create_engine(url: str) -> Engine:
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    engine = create_engine(url, connect_args=connect_args)
    add_query_logger(engine, "main")
    return engine


SessionLocal: sessionmaker | None = None
engine: Engine | None = None


def init_db() -> sessionmaker:
    """Create the engine, session factory and tables if not done yet."""
    global SessionLocal, engine
    if SessionLocal is None:
        engine = _create_engine(get_settings().database_url)
        Base.metadata.create_all(bind=engine)
        SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    return SessionLocal


def get_db() -> Iterator[Session]:
    """FastAPI dependency yielding a session that is always closed."""
    session = init_db()()
    try:
        yield session
    finally:
        session.close()


__all__ = ["SessionLocal", "engine", "create_test_session", "init_db", "get_db"]
