"""
System Constants and Enumerations

This module defines system-wide constants and enumerations used across
the hotel search service.

Architectural Decision: Centralized constants for maintainability
- Single source of truth for magic numbers
- Type-safe enums for cache categories and tiers
"""

from enum import Enum

# ============================================================================
# Cache Categories
# ============================================================================


class CacheCategory(str, Enum):
    """
    Data categories with their own cache TTL.

    SEARCH: Search results (short-lived, prices move)
    DETAILS: Hotel detail pages
    STATIC: Reference data (photos, facilities, property types)
    REVIEWS: Guest reviews
    AVAILABILITY: Live room availability (very short-lived)
    """

    SEARCH = "search"
    DETAILS = "details"
    STATIC = "static"
    REVIEWS = "reviews"
    AVAILABILITY = "availability"


class CacheTier(str, Enum):
    """Where a cached value was served from."""

    L1 = "l1"  # In-process memory
    L2 = "l2"  # Redis
    MISS = "miss"  # Upstream fetch


# ============================================================================
# Cache Defaults
# ============================================================================

L1_CACHE_MAX_SIZE = 1000
CACHE_DEFAULT_TTL = 1800  # 30 minutes
CACHE_KEY_PREFIX = "booking"
CACHE_KEY_DELIMITER = ":"

# ============================================================================
# Upstream Defaults
# ============================================================================

DEFAULT_LOCALE = "en-gb"
DEFAULT_CURRENCY = "USD"
DEFAULT_ADULTS = "2"
DEFAULT_ROOMS = "1"
DEFAULT_DEST_TYPE = "city"
DEFAULT_ORDER_BY = "popularity"
DEFAULT_PAGE = "0"
DEFAULT_REVIEW_SORT = "SORT_MOST_RELEVANT"
DEFAULT_REVIEW_LANGUAGE = "en"
DEFAULT_NEARBY_RADIUS = 2000  # meters
DEFAULT_NEARBY_TYPES = "landmark,restaurant,shopping"

DATE_FORMAT_HINT = "YYYY-MM-DD"

# ============================================================================
# HTTP Headers
# ============================================================================

HEADER_REQUEST_ID = "X-Request-ID"
HEADER_API_KEY = "X-API-Key"
HEADER_ADMIN_KEY = "X-Admin-Key"
HEADER_RAPIDAPI_KEY = "X-RapidAPI-Key"
HEADER_RAPIDAPI_HOST = "X-RapidAPI-Host"
