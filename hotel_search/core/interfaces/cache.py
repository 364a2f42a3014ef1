"""
Cache Tier Protocols

This module defines the protocols the cache manager depends on, enabling
dependency injection and testability.

Architectural Decision: Protocol-based abstraction
- The cache manager works with any distributed tier (Redis, in-memory fake)
- Tier 2 failures are reported through an injected callable, not printed
- Type-safe interface with runtime checking
"""

import time
from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class DistributedCache(Protocol):
    """
    Protocol for the shared (tier 2) cache store.

    Values are opaque strings: the cache manager encodes and compresses
    payloads before they reach the tier.

    Implementations:
    - RedisTier: Production Redis-backed tier
    - InMemoryDistributedCache: Testing/development stand-in
    """

    async def connect(self) -> None:
        """
        Establish connection to the store.

        Raises:
            CacheConnectionError: If connection fails
        """
        ...

    async def disconnect(self) -> None:
        """Close connection to the store."""
        ...

    async def ping(self) -> bool:
        """Return True if the store answers."""
        ...

    async def get(self, key: str) -> str | None:
        """
        Get a payload.

        Raises:
            CacheKeyError: If operation fails
        """
        ...

    async def setex(self, key: str, ttl: int, value: str) -> None:
        """
        Store a payload with a TTL in seconds.

        Raises:
            CacheKeyError: If operation fails
        """
        ...

    async def delete(self, *keys: str) -> int:
        """Delete keys, returning the number removed."""
        ...

    async def keys(self, pattern: str) -> list[str]:
        """Return every key containing ``pattern`` as a substring."""
        ...

    async def flush(self) -> None:
        """Remove every key."""
        ...

    async def health_check(self) -> dict[str, Any]:
        """Return a health summary."""
        ...


# (operation, key, error) -> None
ErrorReporter = Callable[[str, str | None, Exception], None]


class InMemoryDistributedCache:
    """
    Simple in-memory tier 2 implementation for testing and local runs.

    Implements the DistributedCache protocol without external dependencies.
    Records the TTL of every write so tests can assert per-category TTLs.

    Note: NOT distributed. Use only for tests and development.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._store: dict[str, str] = {}
        self._expires_at: dict[str, float] = {}
        self._clock = clock
        self._connected = False
        self.ttls: dict[str, int] = {}

    async def connect(self) -> None:
        self._connected = True

    async def disconnect(self) -> None:
        self._connected = False

    async def ping(self) -> bool:
        return self._connected

    def _expire(self, key: str) -> None:
        expires_at = self._expires_at.get(key)
        if expires_at is not None and expires_at <= self._clock():
            self._store.pop(key, None)
            self._expires_at.pop(key, None)

    async def get(self, key: str) -> str | None:
        self._expire(key)
        return self._store.get(key)

    async def setex(self, key: str, ttl: int, value: str) -> None:
        self._store[key] = value
        self._expires_at[key] = self._clock() + ttl
        self.ttls[key] = ttl

    async def delete(self, *keys: str) -> int:
        count = 0
        for key in keys:
            if self._store.pop(key, None) is not None:
                self._expires_at.pop(key, None)
                count += 1
        return count

    async def keys(self, pattern: str) -> list[str]:
        for key in list(self._store):
            self._expire(key)
        return [key for key in self._store if pattern in key]

    async def flush(self) -> None:
        self._store.clear()
        self._expires_at.clear()

    async def health_check(self) -> dict[str, Any]:
        return {
            "status": "healthy" if self._connected else "unhealthy",
            "connected": self._connected,
            "keys_count": len(self._store),
        }
