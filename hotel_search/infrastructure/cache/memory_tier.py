"""
Tier 1: in-process LRU cache with per-entry expiry.

STAGE-2.1: L1 in-memory cache

This is a per-instance cache, not shared across workers. For shared
caching, see RedisTier.

Implementation Details:
- OrderedDict for O(1) access and LRU ordering
- Each entry carries its own absolute expiry, checked lazily on access
- Evicts the least recently used entry when at capacity
- Synchronous: every call completes without yielding to the event loop,
  so each operation is atomic with respect to other coroutines
"""

import time
from collections import OrderedDict
from collections.abc import Callable
from typing import Any

import orjson

from hotel_search.core.config.constants import L1_CACHE_MAX_SIZE


class MemoryTier:
    """
    In-memory LRU storage with TTL.

    Values are stored as-is (no serialization). A stored value of None is
    indistinguishable from a miss.
    """

    def __init__(
        self,
        max_size: int = L1_CACHE_MAX_SIZE,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Args:
            max_size: Maximum number of live entries
            clock: Monotonic time source (injectable for tests)
        """
        if max_size <= 0:
            raise ValueError(f"max_size must be positive, got {max_size}")

        self._max_size = max_size
        self._clock = clock
        # key -> (expires_at, value)
        self._entries: OrderedDict[str, tuple[float, Any]] = OrderedDict()

    def get(self, key: str) -> Any | None:
        """Return the live value for key, or None if absent or expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None

        expires_at, value = entry
        if expires_at <= self._clock():
            del self._entries[key]
            return None

        self._entries.move_to_end(key)
        return value

    def set(self, key: str, value: Any, ttl: int) -> None:
        """Store value for ttl seconds, evicting the LRU entry when full."""
        if key in self._entries:
            self._entries.move_to_end(key)

        self._entries[key] = (self._clock() + ttl, value)

        if len(self._entries) > self._max_size:
            self._purge_expired()
        while len(self._entries) > self._max_size:
            self._entries.popitem(last=False)

    def delete_matching(self, substring: str) -> int:
        """Delete every key containing substring. Returns the count removed."""
        matching = [key for key in self._entries if substring in key]
        for key in matching:
            del self._entries[key]
        return len(matching)

    def clear(self) -> None:
        self._entries.clear()

    def approx_memory_bytes(self) -> int:
        """
        Approximate footprint of live entries.

        Sums the UTF-8 length of each key and the JSON length of each value.
        Recomputed on every call.
        """
        self._purge_expired()
        total = 0
        for key, (_, value) in self._entries.items():
            total += len(key.encode("utf-8"))
            total += len(orjson.dumps(value, default=str))
        return total

    def get_max_size(self) -> int:
        return self._max_size

    def __len__(self) -> int:
        self._purge_expired()
        return len(self._entries)

    def _purge_expired(self) -> None:
        now = self._clock()
        expired = [key for key, (expires_at, _) in self._entries.items() if expires_at <= now]
        for key in expired:
            del self._entries[key]
