"""
Rate Limiter

Per-client rate limiting for FastAPI using slowapi.

Features:
- Separate limits per endpoint family (search, details, cache admin)
- Client identified by X-API-Key, falling back to the remote IP
- Limits read from settings at request time
- 429 responses in the standard error envelope with retry_after
"""

from collections.abc import Callable

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from hotel_search.core.config.constants import HEADER_API_KEY
from hotel_search.core.config.settings import get_settings
from hotel_search.core.logging import get_logger

logger = get_logger(__name__)


def get_client_identifier(request: Request) -> str:
    """
    Extract client identifier from request.

    Priority: X-API-Key header > Remote IP
    """
    api_key = request.headers.get(HEADER_API_KEY)
    if api_key:
        return f"key:{api_key}"

    return f"ip:{get_remote_address(request)}"


def search_limit() -> str:
    return get_settings().rate_limit.RATE_LIMIT_SEARCH


def details_limit() -> str:
    return get_settings().rate_limit.RATE_LIMIT_DETAILS


def cache_limit() -> str:
    return get_settings().rate_limit.RATE_LIMIT_CACHE


class RateLimitManager:
    """
    Owns the slowapi Limiter and wires it into the FastAPI app.

    Route decorators bind to the limiter at import time, so one manager
    exists per process; ``setup_app`` toggles it per settings.
    """

    def __init__(self):
        self.settings = get_settings()

        self._limiter = Limiter(
            key_func=get_client_identifier,
            storage_uri=self.settings.rate_limit.RATE_LIMIT_STORAGE_URI,
            strategy="moving-window",
            enabled=self.settings.rate_limit.RATE_LIMIT_ENABLED,
        )

        logger.info(
            "Rate limit manager initialized",
            storage=self.settings.rate_limit.RATE_LIMIT_STORAGE_URI,
            enabled=self.settings.rate_limit.RATE_LIMIT_ENABLED,
        )

    @property
    def limiter(self) -> Limiter:
        return self._limiter

    def setup_app(self, app, enabled: bool = True) -> None:
        """Configure rate limiting for FastAPI application."""
        self._limiter.enabled = enabled
        app.state.limiter = self._limiter

        app.add_exception_handler(RateLimitExceeded, self._rate_limit_handler)

        app.add_middleware(SlowAPIMiddleware)

        logger.info("Rate limiting configured for FastAPI app", enabled=enabled)

    def reset(self) -> None:
        """Clear all counters (tests)."""
        self._limiter.reset()

    async def _rate_limit_handler(self, request: Request, exc: RateLimitExceeded) -> Response:
        """Handle rate limit exceeded - return 429 with Retry-After."""
        retry_after = exc.limit.limit.get_expiry()

        logger.warning(
            "Rate limit exceeded",
            client=get_client_identifier(request),
            path=request.url.path,
            limit=str(exc.limit.limit),
        )

        return JSONResponse(
            status_code=429,
            content={
                "success": False,
                "message": "Too many requests, please try again later.",
                "retry_after": retry_after,
            },
            headers={"Retry-After": str(retry_after)},
        )

    def limit(self, limit_value: str | Callable[[], str]) -> Callable:
        """Create rate limit decorator (e.g., "100/15 minutes")."""
        return self._limiter.limit(limit_value)


_rate_limit_manager: RateLimitManager | None = None


def get_rate_limit_manager() -> RateLimitManager:
    """Get the process-wide rate limit manager."""
    global _rate_limit_manager

    if _rate_limit_manager is None:
        _rate_limit_manager = RateLimitManager()

    return _rate_limit_manager
