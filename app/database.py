"""
SQLAlchemy engine, session factory and declarative base.

``get_db`` is the FastAPI dependency that hands one session per request to
the routers; services receive that session explicitly.  ``commit_or_raise``
is the single commit point used by every write operation so that storage
faults surface as ``StorageUnavailableError`` instead of raw driver errors.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from app.config import get_settings
from app.utils.errors import StorageUnavailableError

settings = get_settings()
logger = logging.getLogger(__name__)

# SQLite needs check_same_thread disabled when used behind FastAPI's threadpool
_connect_args = (
    {"check_same_thread": False}
    if settings.DATABASE_URL.startswith("sqlite")
    else {}
)

engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    connect_args=_connect_args,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db() -> Iterator[Session]:
    """Yield a request-scoped session and always close it afterwards."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def commit_or_raise(db: Session, operacion: str) -> None:
    """Commit the current unit of work or roll it back.

    Args:
        db: Active SQLAlchemy session.
        operacion: Short label of the calling operation, used in logs and in
                   the error detail.

    Raises:
        StorageUnavailableError: If the database rejects the commit.  The
            session is rolled back first, so nothing is partially written.
    """
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("commit_or_raise: %s failed: %s", operacion, exc)
        raise StorageUnavailableError(
            f"No se pudo completar '{operacion}': almacenamiento no disponible."
        ) from exc
