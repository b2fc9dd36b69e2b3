"""Router exposing basic system endpoints."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from liftlog.database import get_db
from liftlog.dependencies import ApiError


logger = logging.getLogger(__name__)


router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("/status")
async def get_status() -> dict[str, str]:
    """Return a minimal status payload."""
    return {"status": "online"}


@router.get("/database")
def get_database_status(db: Session = Depends(get_db)) -> dict[str, str]:
    """
    Check that the workout database answers a trivial query.

    Returns:
        dict: {"database": "ok"}
    """
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as err:
        logger.exception("Database health check failed")
        raise ApiError(500, "Database unavailable") from err
    return {"database": "ok"}
