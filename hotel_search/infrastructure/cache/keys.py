"""
Cache Key Derivation

Builds deterministic cache keys of the form ``prefix:type:id`` followed,
when parameters exist, by ``:`` and the parameters serialized as JSON with
sorted keys. Equivalent queries with differently-ordered parameters map to
the same key.

Parameters whose value is None are dropped before serialization, so an
omitted optional filter and an explicit None produce the same key.

The delimiter is not escaped: identifiers must not contain ``:``.
"""

from collections.abc import Mapping
from typing import Any

import orjson

from hotel_search.core.config.constants import CACHE_KEY_DELIMITER, CACHE_KEY_PREFIX


def canonical_params(params: Mapping[str, Any] | None) -> str | None:
    """Serialize parameters with sorted keys, or None when nothing remains."""
    if not params:
        return None

    cleaned = {str(name): value for name, value in params.items() if value is not None}
    if not cleaned:
        return None

    return orjson.dumps(cleaned, option=orjson.OPT_SORT_KEYS).decode("utf-8")


def derive_cache_key(
    resource_type: str,
    resource_id: str | int,
    params: Mapping[str, Any] | None = None,
    prefix: str = CACHE_KEY_PREFIX,
) -> str:
    """
    Derive the cache key for a resource.

    STAGE-2.1.1: Cache key generation

    Args:
        resource_type: Resource kind (e.g., "search", "details")
        resource_id: Resource identifier (destination or hotel ID)
        params: Optional query parameters
        prefix: Key namespace

    Returns:
        Cache key, e.g. ``booking:search:london:{"checkIn":"2024-05-01"}``

    Example:
        >>> derive_cache_key("search", "london", {"b": 2, "a": 1})
        'booking:search:london:{"a":1,"b":2}'
    """
    key = CACHE_KEY_DELIMITER.join((prefix, str(resource_type), str(resource_id)))

    suffix = canonical_params(params)
    if suffix is None:
        return key

    return f"{key}{CACHE_KEY_DELIMITER}{suffix}"
