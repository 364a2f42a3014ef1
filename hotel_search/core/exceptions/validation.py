"""
Validation Exceptions

Exceptions raised when a request's parameters fail validation. All of
them map to HTTP 400.
"""

from hotel_search.core.exceptions.base import HotelSearchError


class ValidationError(HotelSearchError):
    """Base exception for validation errors."""

    status_code = 400


class InvalidInputError(ValidationError):
    """
    Raised when a required parameter is missing or malformed.

    Examples:
    - Missing destination ID
    - Date not in YYYY-MM-DD format
    - Hotel ID containing the cache key delimiter
    """
    pass


class InvalidDateRangeError(ValidationError):
    """Raised when the check-out date is not after the check-in date."""
    pass
