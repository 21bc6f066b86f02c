"""SQLite engine and session helpers for the client key-value store."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from recipebox.config import get_settings
from recipebox.db.models import Base

logger = logging.getLogger(__name__)

_engine: Optional[Engine] = None
_session_factory: Optional[sessionmaker[Session]] = None


def _sqlite_url(path: Path) -> str:
    return f"sqlite:///{path}"


def get_engine(database_path: Path | None = None) -> Engine:
    """Return the shared engine, creating the database file and schema on first use."""
    global _engine, _session_factory

    if _engine is not None:
        return _engine

    db_path = database_path or get_settings().database_path
    db_path.parent.mkdir(parents=True, exist_ok=True)
    logger.debug("Opening client store database at %s", db_path)

    engine = create_engine(
        _sqlite_url(db_path),
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(engine, checkfirst=True)
    _engine = engine
    _session_factory = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    return engine


@contextmanager
def session_scope() -> Iterator[Session]:
    """Yield a session that commits on success and rolls back on error."""

    if _session_factory is None:
        get_engine()
    assert _session_factory is not None
    session = _session_factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def reset_repository_state() -> None:
    """Forget the cached engine so the next call honours a new database path."""

    global _engine, _session_factory
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _session_factory = None


__all__ = ["get_engine", "reset_repository_state", "session_scope"]
