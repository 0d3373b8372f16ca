"""Health check API endpoints.

- Liveness: /health - Is the process alive?
- Readiness: /health/ready - Can the service reach its database?
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: TC002

from bookshelf.core.dependencies.database import get_db_session
from bookshelf.core.settings import get_app_settings
from bookshelf.features.health.schemas import HealthResponse, ReadinessResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse, summary="Liveness check")
async def health() -> HealthResponse:
    settings = get_app_settings()
    return HealthResponse(
        service=settings.service_name,
        version=settings.version,
        environment=settings.environment,
    )


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    summary="Readiness check",
    responses={503: {"model": ReadinessResponse}},
)
async def readiness(
    response: Response,
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> ReadinessResponse:
    """Run ``SELECT 1`` against the database.

    Returns 503 when the database cannot be reached.
    """
    try:
        await session.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.warning("Readiness check failed", extra={"error": str(e)})
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return ReadinessResponse(status="unavailable", database=False, detail="database unreachable")
    return ReadinessResponse(status="ok", database=True)


__all__ = ["router"]
