#!/usr/bin/env python3
"""
Two-Tier Cache Manager

Architecture:
    CacheManager (Public API)
        ├── MemoryTier (tier 1: in-process LRU with TTL)
        ├── DistributedCache (tier 2: Redis, optional, best-effort)
        ├── PayloadCodec (tier 2 serialization + compression)
        └── ErrorReporter (where tier 2 failures go)

Read path:
    force_refresh → fetch → populate both tiers
    tier 1 hit    → return
    tier 2 hit    → decode → promote to tier 1 at the request's TTL → return
    full miss     → fetch → populate both tiers

Tier 2 never fails a read or a write: its errors are handed to the error
reporter and the call falls through to the next step.

Concurrent misses on the same key each invoke their fetch function; there
is no single-flight de-duplication.
"""

import inspect
from collections.abc import Callable
from dataclasses import asdict, dataclass
from typing import Any

from hotel_search.core.config.constants import CACHE_DEFAULT_TTL, CacheTier
from hotel_search.core.interfaces.cache import DistributedCache, ErrorReporter
from hotel_search.core.logging.logger import get_logger, log_stage
from hotel_search.infrastructure.cache.codec import PayloadCodec
from hotel_search.infrastructure.cache.memory_tier import MemoryTier
from hotel_search.infrastructure.cache.options import CacheOptions
from hotel_search.infrastructure.cache.redis_tier import RedisTier

logger = get_logger(__name__)

FetchFn = Callable[[], Any]


def log_cache_error(operation: str, key: str | None, error: Exception) -> None:
    """Default error reporter: a structured warning per tier 2 failure."""
    log_stage(
        logger,
        f"CACHE.L2_{operation.upper()}",
        "Distributed cache operation failed",
        level="warning",
        cache_key=key,
        error=str(error),
        error_type=error.__class__.__name__,
    )


@dataclass
class CacheStatistics:
    """
    Process-wide cache counters.

    hits and misses live for the lifetime of the manager; key_count and
    approx_memory_bytes describe tier 1 at the moment of the call.
    """

    hits: int
    misses: int
    key_count: int
    approx_memory_bytes: int

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        return round(self.hits / total, 3) if total > 0 else 0.0

    def to_dict(self) -> dict[str, Any]:
        return {**asdict(self), "hit_rate": self.hit_rate}


class CacheManager:
    """
    Two-tier cache with tier 1 (in-memory) and optional tier 2 (Redis).

    Usage:
        cache = CacheManager(MemoryTier(), RedisTier("redis://localhost:6379/0"))
        await cache.initialize()

        hotels = await cache.get(
            "booking:search:london",
            fetch_hotels,
            CacheOptions(ttl_seconds=300),
        )

        await cache.invalidate("search")
        stats = cache.statistics()

        await cache.shutdown()
    """

    def __init__(
        self,
        memory_tier: MemoryTier,
        distributed_tier: DistributedCache | None = None,
        codec: PayloadCodec | None = None,
        error_reporter: ErrorReporter | None = None,
        default_ttl: int = CACHE_DEFAULT_TTL,
    ):
        """
        STAGE-2.0: Cache manager initialization

        Args:
            memory_tier: Tier 1 storage
            distributed_tier: Tier 2 storage, or None to run on tier 1 alone
            codec: Tier 2 payload codec
            error_reporter: Receives (operation, key, error) for tier 2 failures
            default_ttl: TTL used when CacheOptions.ttl_seconds is None
        """
        if default_ttl <= 0:
            raise ValueError(f"default_ttl must be positive, got {default_ttl}")

        self._l1 = memory_tier
        self._l2 = distributed_tier
        self._codec = codec or PayloadCodec()
        self._report_error = error_reporter or log_cache_error
        self._default_ttl = default_ttl

        self._hits = 0
        self._misses = 0
        self._initialized = False

        logger.info(
            "Cache manager initialized",
            stage="2.0",
            l1_max_size=memory_tier.get_max_size(),
            tier2_configured=distributed_tier is not None,
        )

    @property
    def tier2_configured(self) -> bool:
        return self._l2 is not None

    async def initialize(self) -> None:
        """
        Connect tier 2.

        STAGE-2.0.1: Initialize tier 2 connection

        A connection failure is reported and the manager keeps running:
        tier 2 calls fail fast and fall through until the server is back.
        """
        if self._initialized:
            return

        if self._l2 is not None:
            try:
                await self._l2.connect()
                logger.info("Cache manager tier 2 connected", stage="2.0.1")
            except Exception as e:
                self._report_error("connect", None, e)

        self._initialized = True

    async def shutdown(self) -> None:
        """
        Disconnect tier 2 and clear tier 1.

        STAGE-2.0.2: Cleanup cache connections
        """
        self._l1.clear()

        if self._l2 is not None:
            try:
                await self._l2.disconnect()
            except Exception as e:
                self._report_error("disconnect", None, e)

        self._initialized = False
        logger.info("Cache manager shutdown", stage="2.0.2")

    # -------------------------------------------------------------------------
    # Core Cache Operations
    # -------------------------------------------------------------------------

    def _resolve(self, options: CacheOptions | None) -> tuple[CacheOptions, int]:
        options = options or CacheOptions()
        return options, options.ttl_seconds or self._default_ttl

    async def get(self, key: str, fetch_fn: FetchFn, options: CacheOptions | None = None) -> Any:
        """
        Return the cached value for key, fetching and caching it on a miss.

        STAGE-2.1: tier 1 lookup
        STAGE-2.2: tier 2 lookup (if tier 1 miss)
        STAGE-2.5: upstream fetch (if both miss)

        Args:
            key: Cache key
            fetch_fn: Sync or async callable producing the fresh value
            options: Per-call cache behaviour

        Returns:
            Cached or freshly fetched value

        Raises:
            Whatever fetch_fn raises; cache errors are never raised
        """
        options, ttl = self._resolve(options)

        if options.force_refresh:
            log_stage(logger, "2.5", "Forced refresh", level="debug", cache_key=key)
            fresh = await self._fetch(fetch_fn)
            await self.set(key, fresh, options)
            return fresh

        value = self._l1.get(key)
        if value is not None:
            self._hits += 1
            log_stage(logger, "2.1", "Cache hit", level="debug", cache_key=key, tier=CacheTier.L1.value)
            return value

        if options.use_tier2 and self._l2 is not None:
            try:
                payload = await self._l2.get(key)
                if payload is not None:
                    value = self._codec.decode(payload, compress=options.compress)
                    self._l1.set(key, value, ttl)
                    self._hits += 1
                    log_stage(
                        logger, "2.2", "Cache hit", level="debug", cache_key=key, tier=CacheTier.L2.value
                    )
                    return value
            except Exception as e:
                self._report_error("get", key, e)

        self._misses += 1
        log_stage(logger, "2.2", "Cache miss", level="debug", cache_key=key, tier=CacheTier.MISS.value)

        fresh = await self._fetch(fetch_fn)
        await self.set(key, fresh, options)
        return fresh

    async def set(self, key: str, value: Any, options: CacheOptions | None = None) -> None:
        """
        Store value in tier 1, and in tier 2 when enabled and configured.

        STAGE-2.3: Cache population
        """
        options, ttl = self._resolve(options)

        self._l1.set(key, value, ttl)

        if options.use_tier2 and self._l2 is not None:
            try:
                payload = self._codec.encode(value, compress=options.compress)
                await self._l2.setex(key, ttl, payload)
            except Exception as e:
                self._report_error("set", key, e)

        log_stage(logger, "2.3", "Cache set", level="debug", cache_key=key, ttl=ttl)

    async def invalidate(self, pattern: str | None = None) -> dict[str, int | None]:
        """
        Remove cached entries.

        STAGE-2.4: Cache invalidation

        Args:
            pattern: Substring to match; None flushes both tiers entirely

        Returns:
            Count removed per tier (None for a tier 2 full flush, which
            reports no count, or when tier 2 failed or is not configured)
        """
        removed_l2: int | None = None

        if pattern:
            removed_l1 = self._l1.delete_matching(pattern)
            if self._l2 is not None:
                try:
                    keys = await self._l2.keys(pattern)
                    removed_l2 = await self._l2.delete(*keys) if keys else 0
                except Exception as e:
                    self._report_error("invalidate", pattern, e)
        else:
            removed_l1 = len(self._l1)
            self._l1.clear()
            if self._l2 is not None:
                try:
                    await self._l2.flush()
                except Exception as e:
                    self._report_error("flush", None, e)

        log_stage(
            logger,
            "2.4",
            "Cache invalidated",
            pattern=pattern,
            removed_l1=removed_l1,
            removed_l2=removed_l2,
        )
        return {"l1": removed_l1, "l2": removed_l2}

    @staticmethod
    async def _fetch(fetch_fn: FetchFn) -> Any:
        result = fetch_fn()
        if inspect.isawaitable(result):
            result = await result
        return result

    # -------------------------------------------------------------------------
    # Monitoring
    # -------------------------------------------------------------------------

    def statistics(self) -> CacheStatistics:
        """Counters plus a fresh tier 1 key count and memory estimate."""
        return CacheStatistics(
            hits=self._hits,
            misses=self._misses,
            key_count=len(self._l1),
            approx_memory_bytes=self._l1.approx_memory_bytes(),
        )

    async def health_check(self) -> dict[str, Any]:
        """
        Perform health check on both tiers.

        Returns:
            Dict with overall status and per-tier detail
        """
        health: dict[str, Any] = {
            "status": "healthy",
            "l1": {
                "status": "healthy",
                "size": len(self._l1),
                "max_size": self._l1.get_max_size(),
            },
            "l2": {"status": "not_configured"},
        }

        if self._l2 is not None:
            try:
                l2_health = await self._l2.health_check()
                health["l2"] = l2_health
                if l2_health.get("status") != "healthy":
                    health["status"] = "degraded"
            except Exception as e:
                health["status"] = "degraded"
                health["l2"] = {"status": "error", "error": str(e)}

        return health


def create_cache_manager(settings, error_reporter: ErrorReporter | None = None) -> CacheManager:
    """
    Build a CacheManager from settings.

    Tier 2 is configured only when REDIS_URL is set.
    """
    distributed_tier = RedisTier.from_settings(settings) if settings.redis.REDIS_URL else None

    return CacheManager(
        memory_tier=MemoryTier(max_size=settings.cache.CACHE_L1_MAX_SIZE),
        distributed_tier=distributed_tier,
        codec=PayloadCodec(),
        error_reporter=error_reporter,
        default_ttl=settings.cache.CACHE_DEFAULT_TTL,
    )
