"""Liveness and readiness probes for load balancers and monitoring."""

import logging
import os

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.db.session import get_db
from app.models.workout import Workout

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("")
async def health():
    """Liveness: the process is up. Adds built_at when GYMLOG_BUILT_AT is set."""
    settings = get_settings()
    payload: dict = {"status": "ok", "app": settings.app_name, "environment": settings.environment}
    built_at = os.environ.get("GYMLOG_BUILT_AT")
    if built_at:
        payload["built_at"] = built_at
    return payload


@router.get("/ready")
async def readiness(db: AsyncSession = Depends(get_db)):
    """Readiness: the database answers and the workout schema is in place."""
    backend = "sqlite" if get_settings().is_sqlite else "postgresql"
    try:
        await db.scalar(select(func.count()).select_from(Workout))
    except SQLAlchemyError as e:
        await db.rollback()
        logger.warning("Readiness check failed on %s: %s", backend, e)
        return JSONResponse(
            status_code=503,
            content={"status": "error", "database": backend, "detail": str(e)},
        )
    return {"status": "ok", "database": backend}
