"""
API Health Check Endpoint

Health check for the settings service.
"""

from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Request
from fastapi.concurrency import run_in_threadpool

from appsettings.api.schemas.responses import HealthResponse
from appsettings.core.config import settings
from appsettings.core.exceptions import DatabaseException
from appsettings.core.logger import get_logger
from appsettings.stores.database import ping_database

logger = get_logger(__name__)

router = APIRouter()


async def check_database_health(request: Request) -> Dict[str, Any]:
    """Check database connection health."""
    try:
        status = await run_in_threadpool(ping_database, request.app.state.engine)
        return {"status": "healthy", "details": status}
    except DatabaseException as e:
        logger.warning("Database health check failed: %s", e.message)
        return {"status": "unhealthy", "error": e.message}


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="API Health Check",
    description="Check the health of the API and, if enabled, its database",
    tags=["health"],
)
async def health_check(request: Request) -> HealthResponse:
    """
    Health check endpoint.

    Always reports the API itself; the database is checked only when
    ``health__check_database`` is enabled.
    """
    components: Dict[str, Any] = {}
    overall_healthy = True

    if settings.health__check_database:
        db_health = await check_database_health(request)
        components["database"] = db_health
        if db_health["status"] == "unhealthy":
            overall_healthy = False

    components["api"] = {
        "status": "healthy",
        "version": settings.api__version,
        "environment": settings.environment,
    }

    return HealthResponse(
        status="healthy" if overall_healthy else "unhealthy",
        timestamp=datetime.now(timezone.utc).isoformat(),
        version=settings.api__version,
        environment=settings.environment,
        components=components,
    )
