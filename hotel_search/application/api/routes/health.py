"""
Health Check Routes
===================

``GET /health`` reports the service version and the state of both cache
tiers, wrapped in the same ``{"success": true, "data": ...}`` envelope as
the booking routes. Tier 2 being down degrades the service but never fails
it: reads fall through to Tier 1 and the upstream API, so the endpoint
still answers 200 with ``status: degraded``.
"""

from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel

from hotel_search.application.api.dependencies import CacheManagerDep, SettingsDep
from hotel_search.application.api.models.envelope import SuccessResponse, envelope

router = APIRouter(prefix="/health", tags=["Health"])


class HealthResponse(BaseModel):
    """Health check payload."""

    status: str  # "healthy" or "degraded"
    timestamp: str
    version: str
    environment: str
    cache: dict | None = None


class HealthEnvelope(SuccessResponse):
    data: HealthResponse


@router.get("", response_model=HealthEnvelope)
async def health_check(cache_manager: CacheManagerDep, settings: SettingsDep):
    """
    Service and cache tier health.

    HTTP Status Codes:
        200: Service is answering (check ``data.status`` for degradation)
    """
    cache_health = await cache_manager.health_check()

    health = HealthResponse(
        status=cache_health["status"],
        timestamp=datetime.now(timezone.utc).isoformat(),
        version=settings.app.APP_VERSION,
        environment=settings.app.ENVIRONMENT,
        cache=cache_health,
    )
    return envelope(health)
