"""Liveness and readiness endpoints for monitoring service status."""

import asyncio
from datetime import UTC, datetime

from fastapi import APIRouter, Response, status
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError

from quotes_api.constants import READINESS_PING_TIMEOUT_SECONDS
from quotes_api.logging import logger
from quotes_api.storage.db import ping_database

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Response model for health check endpoints."""

    status: str
    timestamp: datetime
    services: dict[str, str]


@router.get(
    "/healthz",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Liveness probe",
)
async def liveness() -> HealthResponse:
    """Report that the process is up. Never touches dependencies."""
    return HealthResponse(
        status="ok", timestamp=datetime.now(UTC), services={}
    )


@router.get(
    "/readyz",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Readiness probe",
)
async def readiness(response: Response) -> HealthResponse:
    """
    Check that the database answers within the ping timeout.

    Returns:
        HealthResponse with per-service status. Responds 503 Service
        Unavailable if the database is unreachable.
    """
    db_status = "ok"

    try:
        async with asyncio.timeout(READINESS_PING_TIMEOUT_SECONDS):
            await ping_database()
    except (SQLAlchemyError, OSError) as e:
        logger.error(f"Database readiness check failed: {e}")
        db_status = "unhealthy"

    overall_status = "ok" if db_status == "ok" else "unhealthy"
    if overall_status != "ok":
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return HealthResponse(
        status=overall_status,
        timestamp=datetime.now(UTC),
        services={"database": db_status},
    )
