"""
Cache Infrastructure

Two-tier cache in front of the Booking.com API.

Components:
-----------
- **keys.py**: Deterministic cache key derivation
- **codec.py**: orjson + gzip + base64 payload codec
- **options.py**: CacheOptions and per-category TTL policy
- **memory_tier.py**: Tier 1 in-process LRU with TTL
- **redis_tier.py**: Tier 2 Redis store
- **cache_manager.py**: Orchestrates both tiers
"""

from hotel_search.infrastructure.cache.cache_manager import (
    CacheManager,
    CacheStatistics,
    create_cache_manager,
    log_cache_error,
)
from hotel_search.infrastructure.cache.codec import PayloadCodec
from hotel_search.infrastructure.cache.keys import derive_cache_key
from hotel_search.infrastructure.cache.memory_tier import MemoryTier
from hotel_search.infrastructure.cache.options import CacheOptions, CacheTTLPolicy
from hotel_search.infrastructure.cache.redis_tier import RedisTier

__all__ = [
    "CacheManager",
    "CacheOptions",
    "CacheStatistics",
    "CacheTTLPolicy",
    "MemoryTier",
    "PayloadCodec",
    "RedisTier",
    "create_cache_manager",
    "derive_cache_key",
    "log_cache_error",
]
