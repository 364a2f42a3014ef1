"""
API Access Exceptions

Exceptions for routing and access control at the HTTP edge.
"""

from hotel_search.core.exceptions.base import HotelSearchError


class NotFoundError(HotelSearchError):
    """Raised when a requested resource does not exist."""

    status_code = 404


class AuthenticationError(HotelSearchError):
    """Raised when an admin route is called without a valid admin key."""

    status_code = 401


class ForbiddenError(HotelSearchError):
    """Raised when the caller is known but not allowed."""

    status_code = 403
