#!/usr/bin/env python3
"""
FastAPI Application Entry Point

Configures the Hotel Search Service: a caching proxy in front of the
Booking.com API with a two-tier (in-process + Redis) cache.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hotel_search.application.api.middleware import RequestIDMiddleware, add_error_handling
from hotel_search.application.api.routes import booking_router, health_router
from hotel_search.application.services import HotelSearchService
from hotel_search.core.config.constants import HEADER_REQUEST_ID
from hotel_search.core.config.settings import get_settings
from hotel_search.core.logging.logger import get_logger, setup_logging
from hotel_search.infrastructure.booking_com import BookingComClient
from hotel_search.infrastructure.cache import CacheTTLPolicy, create_cache_manager
from hotel_search.rate_limiting import get_rate_limit_manager

logger = get_logger(__name__)


# ============================================================================
# Application Lifespan
# ============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifecycle (startup and shutdown).
    """
    settings = get_settings()

    setup_logging(log_level=settings.logging.LOG_LEVEL, log_format=settings.logging.LOG_FORMAT)

    logger.info(
        "Starting Hotel Search Service",
        environment=settings.app.ENVIRONMENT,
        version=settings.app.APP_VERSION,
    )

    cache_manager = create_cache_manager(settings)
    booking_client = BookingComClient.from_settings(settings)

    try:
        # Tier 2 failures are reported, not fatal
        await cache_manager.initialize()
        logger.info("Cache initialized", tier2_configured=cache_manager.tier2_configured)

        search_service = HotelSearchService(
            cache_manager=cache_manager,
            client=booking_client,
            ttl_policy=CacheTTLPolicy.from_settings(settings),
            key_prefix=settings.cache.CACHE_KEY_PREFIX,
            compress=settings.cache.CACHE_COMPRESS,
        )

        # Store in app state for dependencies.py
        app.state.cache_manager = cache_manager
        app.state.booking_client = booking_client
        app.state.search_service = search_service

        logger.info("Application startup complete")

        yield

    finally:
        logger.info("Shutting down application")

        await booking_client.aclose()
        await cache_manager.shutdown()

        logger.info("Application shutdown complete")


# ============================================================================
# Application Factory
# ============================================================================


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        FastAPI: Configured application instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app.APP_NAME,
        version=settings.app.APP_VERSION,
        description="Caching proxy for Booking.com hotel search",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Middleware runs in reverse order of registration (last added = outermost).
    # Request IDs wrap everything so even unhandled 500s carry the header.

    # 1. Error handling (catch-all middleware + exception handlers)
    add_error_handling(
        app,
        include_traceback=settings.app.ENVIRONMENT == "development" or settings.app.DEBUG,
    )

    # 2. CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.app.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[HEADER_REQUEST_ID],
    )

    # 3. Rate limiting
    get_rate_limit_manager().setup_app(app, enabled=settings.rate_limit.RATE_LIMIT_ENABLED)

    # 4. Request correlation
    app.add_middleware(RequestIDMiddleware)

    base_path = settings.app.API_BASE_PATH

    app.include_router(health_router, prefix=base_path)
    app.include_router(booking_router, prefix=base_path)

    @app.get("/", tags=["Root"])
    async def root():
        """Root endpoint with API information."""
        return {
            "name": settings.app.APP_NAME,
            "version": settings.app.APP_VERSION,
            "environment": settings.app.ENVIRONMENT,
            "docs": "/docs",
            "health": f"{base_path}/health",
        }

    return app


# Create application instance
app = create_app()


# ============================================================================
# Main Entry Point
# ============================================================================

if __name__ == "__main__":
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "hotel_search.application.app:app",
        host=settings.app.API_HOST,
        port=settings.app.API_PORT,
        reload=settings.app.ENVIRONMENT == "development",
        log_level=settings.logging.LOG_LEVEL.lower(),
    )
