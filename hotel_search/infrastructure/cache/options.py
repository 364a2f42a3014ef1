"""
Cache options and TTL policy.

CacheOptions replaces loosely-typed option bags with an explicit,
validated struct. CacheTTLPolicy maps each data category to its TTL.
"""

from dataclasses import dataclass

from hotel_search.core.config.constants import CacheCategory


def _check_ttl(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValueError(f"{name} must be a positive integer, got {value!r}")


@dataclass(frozen=True)
class CacheOptions:
    """
    Per-call cache behaviour.

    Attributes:
        ttl_seconds: TTL for both tiers; None uses the manager default
        use_tier2: Read and write the distributed tier
        force_refresh: Skip both tier reads and always fetch
        compress: Gzip + base64 tier 2 payloads
    """

    ttl_seconds: int | None = None
    use_tier2: bool = True
    force_refresh: bool = False
    compress: bool = True

    def __post_init__(self):
        if self.ttl_seconds is not None:
            _check_ttl("ttl_seconds", self.ttl_seconds)


@dataclass(frozen=True)
class CacheTTLPolicy:
    """TTL in seconds per data category."""

    search: int = 300
    details: int = 1800
    static: int = 86400
    reviews: int = 3600
    availability: int = 60

    def __post_init__(self):
        for category in CacheCategory:
            _check_ttl(category.value, getattr(self, category.value))

    def ttl_for(self, category: CacheCategory) -> int:
        return getattr(self, CacheCategory(category).value)

    def options_for(
        self,
        category: CacheCategory,
        force_refresh: bool = False,
        compress: bool = True,
    ) -> CacheOptions:
        """Build CacheOptions carrying the category's TTL."""
        return CacheOptions(
            ttl_seconds=self.ttl_for(category),
            force_refresh=force_refresh,
            compress=compress,
        )

    @classmethod
    def from_settings(cls, settings) -> "CacheTTLPolicy":
        cache = settings.cache
        return cls(
            search=cache.CACHE_TTL_SEARCH,
            details=cache.CACHE_TTL_DETAILS,
            static=cache.CACHE_TTL_STATIC,
            reviews=cache.CACHE_TTL_REVIEWS,
            availability=cache.CACHE_TTL_AVAILABILITY,
        )
