"""
Exception Module

Structured exception hierarchy for the hotel search service.
Exceptions are organized by theme for maintainability.

Module Structure:
-----------------
- **base.py**: HotelSearchError base class + ConfigurationError
- **cache.py**: Cache-related exceptions (Redis, codec)
- **validation.py**: Request validation exceptions
- **upstream.py**: Booking.com API exceptions
- **api.py**: Routing and access control exceptions

Usage:
------
```python
from hotel_search.core.exceptions import CacheConnectionError, UpstreamError

from hotel_search.core.exceptions.validation import InvalidDateRangeError
```
"""

from hotel_search.core.exceptions.api import AuthenticationError, ForbiddenError, NotFoundError
from hotel_search.core.exceptions.base import ConfigurationError, HotelSearchError
from hotel_search.core.exceptions.cache import (
    CacheConnectionError,
    CacheDecodeError,
    CacheError,
    CacheKeyError,
)
from hotel_search.core.exceptions.upstream import (
    InvalidUpstreamResponseError,
    UpstreamError,
    UpstreamUnavailableError,
)
from hotel_search.core.exceptions.validation import (
    InvalidDateRangeError,
    InvalidInputError,
    ValidationError,
)

__all__ = [
    # Base
    "HotelSearchError",
    "ConfigurationError",
    # Cache
    "CacheError",
    "CacheConnectionError",
    "CacheKeyError",
    "CacheDecodeError",
    # Validation
    "ValidationError",
    "InvalidInputError",
    "InvalidDateRangeError",
    # Upstream
    "UpstreamError",
    "UpstreamUnavailableError",
    "InvalidUpstreamResponseError",
    # API
    "AuthenticationError",
    "ForbiddenError",
    "NotFoundError",
]
