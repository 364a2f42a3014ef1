"""
Configuration Module

Centralized, type-safe configuration for the hotel search service.

Components:
-----------
- **settings.py**: Pydantic-based configuration with environment variable loading
- **constants.py**: System-wide constants and enums

Usage:
------
```python
from hotel_search.core.config import CacheCategory, get_settings

settings = get_settings()
search_ttl = settings.cache.CACHE_TTL_SEARCH
```

Testing:
-------
```python
import os
from hotel_search.core.config import reload_settings

os.environ["REDIS_URL"] = "redis://test-redis:6379/0"
settings = reload_settings()
```
"""

from hotel_search.core.config.constants import (
    CACHE_DEFAULT_TTL,
    CACHE_KEY_DELIMITER,
    CACHE_KEY_PREFIX,
    HEADER_ADMIN_KEY,
    HEADER_API_KEY,
    HEADER_REQUEST_ID,
    L1_CACHE_MAX_SIZE,
    CacheCategory,
    CacheTier,
)
from hotel_search.core.config.settings import Settings, get_settings, reload_settings

__all__ = [
    # Settings
    "Settings",
    "get_settings",
    "reload_settings",
    # Enums
    "CacheCategory",
    "CacheTier",
    # Cache
    "CACHE_DEFAULT_TTL",
    "CACHE_KEY_DELIMITER",
    "CACHE_KEY_PREFIX",
    "L1_CACHE_MAX_SIZE",
    # HTTP headers
    "HEADER_ADMIN_KEY",
    "HEADER_API_KEY",
    "HEADER_REQUEST_ID",
]
