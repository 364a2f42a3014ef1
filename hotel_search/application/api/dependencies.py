"""
FastAPI Dependency Injection Module
===================================

Reusable dependencies for route handlers. Application services are built
once in the lifespan manager and stored on ``app.state``; these providers
hand them to routes so tests can swap them by assigning ``app.state``.
"""

import secrets
from typing import Annotated

from fastapi import Depends, Request

from hotel_search.application.services.hotel_search_service import HotelSearchService
from hotel_search.core.config.constants import HEADER_ADMIN_KEY
from hotel_search.core.config.settings import Settings, get_settings
from hotel_search.core.exceptions import AuthenticationError
from hotel_search.infrastructure.cache.cache_manager import CacheManager

# ============================================================================
# DEPENDENCY FUNCTIONS
# ============================================================================


def get_search_service(request: Request) -> HotelSearchService:
    """
    Retrieve the HotelSearchService from application state.

    Raises:
        RuntimeError: If the lifespan startup did not run
    """
    service = getattr(request.app.state, "search_service", None)
    if service is None:
        raise RuntimeError(
            "HotelSearchService not initialized in app.state. "
            "This indicates the application lifespan startup didn't complete properly."
        )
    return service


def get_cache_manager(request: Request) -> CacheManager:
    """Retrieve the CacheManager from application state."""
    cache_manager = getattr(request.app.state, "cache_manager", None)
    if cache_manager is None:
        raise RuntimeError("CacheManager not initialized in app.state")
    return cache_manager


def require_admin_key(request: Request) -> None:
    """
    Guard for cache administration routes.

    When ADMIN_API_KEY is configured, the X-Admin-Key header must match it.
    When it is not configured, the routes are open (development setups).

    Raises:
        AuthenticationError: Missing or wrong admin key (401)
    """
    expected = get_settings().app.ADMIN_API_KEY
    if not expected:
        return

    provided = request.headers.get(HEADER_ADMIN_KEY, "")
    if not secrets.compare_digest(provided.encode(), expected.encode()):
        raise AuthenticationError(
            "Invalid or missing admin key",
            details={"header": HEADER_ADMIN_KEY},
        )


# ============================================================================
# TYPE ALIASES FOR CLEANER ROUTE SIGNATURES
# ============================================================================

SearchServiceDep = Annotated[HotelSearchService, Depends(get_search_service)]
CacheManagerDep = Annotated[CacheManager, Depends(get_cache_manager)]
SettingsDep = Annotated[Settings, Depends(get_settings)]
AdminGuard = Depends(require_admin_key)
