"""
Health check endpoints
"""

from typing import Any
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import text
import logging

from groove.core.database import get_session
from groove.core.redis import get_redis
from groove.config import settings

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/live")
async def liveness() -> Any:
    """
    Liveness probe
    """
    return {"status": "alive", "service": "groove-api"}


@router.get("/ready")
async def readiness(
    db: AsyncSession = Depends(get_session),
    redis_client = Depends(get_redis)
) -> Any:
    """
    Readiness probe - checks the database and Redis
    """
    checks = {
        "database": False,
        "redis": False,
        "api": True
    }

    try:
        result = await db.execute(text("SELECT 1"))
        checks["database"] = result.scalar() == 1
    except Exception as e:
        logger.warning(f"Readiness: database check failed: {e}")

    try:
        await redis_client.ping()
        checks["redis"] = True
    except Exception as e:
        logger.warning(f"Readiness: Redis check failed: {e}")

    all_healthy = all(checks.values())

    return {
        "status": "ready" if all_healthy else "not ready",
        "checks": checks,
        "version": settings.APP_VERSION
    }
