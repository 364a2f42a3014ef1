"""
Upstream Provider Exceptions

Exceptions raised while talking to the Booking.com API. The status code
of an upstream error response is passed through to the caller.
"""

from typing import Any

from hotel_search.core.exceptions.base import HotelSearchError


class UpstreamError(HotelSearchError):
    """
    Base exception for upstream provider errors.

    Carries a per-instance status code: when Booking.com answers with an
    error status, the same status is returned to our client.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        request_id: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, request_id=request_id, details=details)
        self.status_code = status_code


class UpstreamUnavailableError(UpstreamError):
    """Raised when no response was received (timeout, DNS, refused connection)."""

    def __init__(
        self,
        message: str = "No response from Booking.com API",
        request_id: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, status_code=503, request_id=request_id, details=details)


class InvalidUpstreamResponseError(UpstreamError):
    """Raised when the upstream body does not have the expected shape."""

    def __init__(
        self,
        message: str = "Invalid response from Booking.com API",
        request_id: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, status_code=500, request_id=request_id, details=details)
