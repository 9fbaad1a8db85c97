"""
FastAPI router for the settings API.

The health route is registered ahead of the settings routes so ``/health``
is not captured by ``/{key}``.
"""

from fastapi import APIRouter

from appsettings.api.endpoints import health_router, settings_router

router = APIRouter()
router.include_router(health_router)
router.include_router(settings_router)

__all__ = ["router"]
