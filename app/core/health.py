"""Health check endpoints."""

from datetime import UTC, datetime
from typing import Literal

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from app.core.database import Database, get_database
from app.core.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: Literal["OK", "DEGRADED"]
    timestamp: datetime
    database: Literal["connected", "disconnected"] | None = None


@router.get("/status", response_model=HealthResponse, response_model_exclude_none=True)
async def health_check() -> HealthResponse:
    """Basic liveness check.

    Returns:
        Health status with the current server time.
    """
    logger.debug("health.check_started")
    return HealthResponse(status="OK", timestamp=datetime.now(UTC))


@router.get("/status/ready", response_model=HealthResponse, response_model_exclude_none=True)
async def readiness_check(
    database: Database = Depends(get_database),
) -> HealthResponse:
    """Readiness check including database connectivity.

    Args:
        database: Storage handle dependency.

    Returns:
        Health status with database state.
    """
    logger.debug("health.readiness_check_started")

    try:
        await database.ping()
        logger.info("health.database_connected")
        return HealthResponse(status="OK", timestamp=datetime.now(UTC), database="connected")
    except Exception as e:
        logger.error(
            "health.database_disconnected",
            error=str(e),
            error_type=type(e).__name__,
            exc_info=True,
        )
        return HealthResponse(
            status="DEGRADED",
            timestamp=datetime.now(UTC),
            database="disconnected",
        )
