"""Database configuration and session management.

This module provides the SQLAlchemy 2.x document store:
- Lazy engine creation (SQLite by default)
- Session factory with commit/rollback handling
- Table creation for the resume and template aggregates

The database URL comes from the ``DB_URL`` setting and defaults to
sqlite:///<project_root>/database.db.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.engine import URL, Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.orm.exc import StaleDataError

from resume_builder.config import get_settings
from resume_builder.errors import VersionConflict


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models."""


_engine = None
_SessionLocal: sessionmaker[Session] | None = None


def get_database_url() -> str:
    """Return the database URL, allowing overrides via ``DB_URL``."""
    env_url = get_settings().db_url
    if env_url:
        return env_url

    project_root = Path(__file__).resolve().parents[3]
    db_path = project_root / "database.db"
    return URL.create("sqlite", database=str(db_path)).render_as_string(hide_password=False)


def _get_engine() -> Engine:
    global _engine
    if _engine is None:
        _engine = create_engine(get_database_url(), echo=False, future=True)
        _ensure_tables_created()
    return _engine


def _ensure_tables_created() -> None:
    # Import ORM models so their metadata is registered on Base before create_all.
    from resume_builder.data.models import resume_document, template  # noqa: F401

    Base.metadata.create_all(bind=_engine)


def _get_session_factory() -> sessionmaker[Session]:
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(
            bind=_get_engine(),
            autoflush=False,
            expire_on_commit=False,
        )
    return _SessionLocal


def init_db() -> None:
    """Create all tables. Tables are also created lazily on first access."""
    _get_engine()


def reset_engine() -> None:
    """Dispose the engine so the next access reconnects with current settings."""
    global _engine, _SessionLocal
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _SessionLocal = None


@contextmanager
def get_session() -> Iterator[Session]:
    """Provide a transactional scope around a series of operations.

    A version-checked update that lost a race surfaces as ``VersionConflict``.
    """
    session = _get_session_factory()()
    try:
        yield session
        session.commit()
    except StaleDataError as exc:
        session.rollback()
        raise VersionConflict() from exc
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
