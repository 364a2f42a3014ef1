"""
Cache Test Factory

Creates cache managers, tier 2 stand-ins and error reporters for testing.
"""

from typing import Any

from hotel_search.core.exceptions import CacheConnectionError, CacheKeyError
from hotel_search.core.interfaces.cache import InMemoryDistributedCache
from hotel_search.infrastructure.cache.cache_manager import CacheManager
from hotel_search.infrastructure.cache.codec import PayloadCodec
from hotel_search.infrastructure.cache.memory_tier import MemoryTier


class ManualClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingReporter:
    """Error reporter that keeps every (operation, key, error) it receives."""

    def __init__(self):
        self.reports: list[tuple[str, str | None, Exception]] = []

    def __call__(self, operation: str, key: str | None, error: Exception) -> None:
        self.reports.append((operation, key, error))

    @property
    def operations(self) -> list[str]:
        return [operation for operation, _, _ in self.reports]


class FailingDistributedCache:
    """Tier 2 whose every operation fails, as when Redis is unreachable."""

    def __init__(self, error: Exception | None = None):
        self.error = error or CacheKeyError("Redis connection reset")
        self.calls: list[str] = []

    async def connect(self) -> None:
        self.calls.append("connect")
        raise CacheConnectionError("Failed to connect to Redis")

    async def disconnect(self) -> None:
        self.calls.append("disconnect")

    async def ping(self) -> bool:
        return False

    async def get(self, key: str) -> str | None:
        self.calls.append("get")
        raise self.error

    async def setex(self, key: str, ttl: int, value: str) -> None:
        self.calls.append("setex")
        raise self.error

    async def delete(self, *keys: str) -> int:
        self.calls.append("delete")
        raise self.error

    async def keys(self, pattern: str) -> list[str]:
        self.calls.append("keys")
        raise self.error

    async def flush(self) -> None:
        self.calls.append("flush")
        raise self.error

    async def health_check(self) -> dict[str, Any]:
        return {"status": "unhealthy", "connected": False}


class CacheTestFactory:
    """Factory for creating cache test objects."""

    @staticmethod
    def manager(
        distributed_tier=None,
        max_size: int = 1000,
        clock: ManualClock | None = None,
        reporter: RecordingReporter | None = None,
        default_ttl: int = 1800,
    ) -> CacheManager:
        """CacheManager over a real MemoryTier and the given tier 2."""
        memory_kwargs = {"max_size": max_size}
        if clock is not None:
            memory_kwargs["clock"] = clock

        return CacheManager(
            memory_tier=MemoryTier(**memory_kwargs),
            distributed_tier=distributed_tier,
            codec=PayloadCodec(),
            error_reporter=reporter or RecordingReporter(),
            default_ttl=default_ttl,
        )

    @staticmethod
    def in_memory_tier2(clock: ManualClock | None = None) -> InMemoryDistributedCache:
        if clock is None:
            return InMemoryDistributedCache()
        return InMemoryDistributedCache(clock=clock)

    @staticmethod
    def failing_tier2(error: Exception | None = None) -> FailingDistributedCache:
        return FailingDistributedCache(error)
