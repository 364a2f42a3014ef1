from hotel_search.rate_limiting.rate_limiter import (
    RateLimitManager,
    cache_limit,
    details_limit,
    get_client_identifier,
    get_rate_limit_manager,
    search_limit,
)

__all__ = [
    "RateLimitManager",
    "cache_limit",
    "details_limit",
    "get_client_identifier",
    "get_rate_limit_manager",
    "search_limit",
]
