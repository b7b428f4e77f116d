"""
Engine and per-request sessions for BrandHub.

Routes receive a session through get_db_session, hand it to a service,
and commit once the service returns. Services only flush, so an error
raised mid-operation leaves nothing behind when the session closes.

    @router.get("/api/brands")
    async def get_own_brand(db: Session = Depends(get_db_session), ...):
        return {"brand": BrandService(db).get_own_brand(principal)}
"""

import os
import logging
from typing import Generator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import QueuePool

from brandhub.errors import DependencyError

logger = logging.getLogger(__name__)

POOL_SIZE = 5
MAX_OVERFLOW = 10

_engine: Optional[Engine] = None
_SessionLocal: Optional[sessionmaker] = None


def _get_database_url() -> str:
    """
    DATABASE_URL, with Heroku-style postgres:// rewritten for SQLAlchemy.

    Raises:
        ValueError: DATABASE_URL is not set
    """
    database_url = os.getenv("DATABASE_URL")
    if not database_url:
        raise ValueError("DATABASE_URL environment variable is not set")

    if database_url.startswith("postgres://"):
        database_url = "postgresql://" + database_url[len("postgres://"):]
    return database_url


def get_engine() -> Engine:
    """
    Shared engine for the API process.

    A request holds one connection from the service call through the
    notification dispatch.
    """
    global _engine
    if _engine is None:
        _engine = create_engine(
            _get_database_url(),
            poolclass=QueuePool,
            pool_size=POOL_SIZE,
            max_overflow=MAX_OVERFLOW,
            pool_pre_ping=True,
            pool_recycle=1800,
        )
        logger.info(
            "Database engine created",
            extra={"pool_size": POOL_SIZE, "max_overflow": MAX_OVERFLOW},
        )
    return _engine


def get_session_factory() -> sessionmaker:
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=get_engine())
    return _SessionLocal


async def get_db_session() -> Generator[Session, None, None]:
    """
    FastAPI dependency yielding one session per request.

    Raises:
        DependencyError: The database is not configured (503)
    """
    try:
        SessionLocal = get_session_factory()
    except ValueError as e:
        logger.error("Database is not configured", extra={"error": str(e)})
        raise DependencyError(str(e), dependency="database")

    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
