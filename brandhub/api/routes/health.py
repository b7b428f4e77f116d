"""
Health check endpoint.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.orm import Session

from brandhub import __version__
from brandhub.database.session import get_db_session

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(db: Session = Depends(get_db_session)):
    """Service liveness plus database reachability."""
    try:
        db.execute(text("SELECT 1"))
        database = "ok"
    except Exception:
        logger.warning("Health check database probe failed", exc_info=True)
        database = "unavailable"
    return {
        "status": "ok" if database == "ok" else "degraded",
        "database": database,
        "version": __version__,
    }
