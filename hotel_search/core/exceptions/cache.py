"""
Cache-Related Exceptions

All exceptions related to caching operations (Redis, in-memory cache, codec).
"""

from hotel_search.core.exceptions.base import HotelSearchError


class CacheError(HotelSearchError):
    """Base exception for cache-related errors."""
    pass


class CacheConnectionError(CacheError):
    """
    Raised when unable to connect to the distributed cache (Redis).

    Common causes:
    - Redis server is down
    - Network connectivity issues
    - Incorrect REDIS_URL
    """
    pass


class CacheKeyError(CacheError):
    """
    Raised when a cache key operation fails.

    Common causes:
    - Operation timeout
    - Connection dropped mid-command
    - Memory limit exceeded on the server
    """
    pass


class CacheDecodeError(CacheError):
    """Raised when a stored payload cannot be decoded back to a value."""
    pass
