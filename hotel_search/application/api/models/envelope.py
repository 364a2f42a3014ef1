"""
Response envelope models.

Every response body shares one shape:

    success: {"success": true, "data": ..., "count": N}   (count only for lists)
    failure: {"success": false, "message": "...", "error_type": "..."}
"""

from typing import Any

from pydantic import BaseModel, Field


class SuccessResponse(BaseModel):
    """Successful response envelope."""

    success: bool = Field(default=True)
    data: Any = Field(default=None, description="Payload")
    count: int | None = Field(default=None, description="Number of items when data is a list")


class ErrorResponse(BaseModel):
    """Error response envelope."""

    success: bool = Field(default=False)
    message: str = Field(..., description="Human-readable error message")
    error_type: str | None = Field(default=None, description="Error class name")
    errors: list[Any] | None = Field(default=None, description="Field-level validation errors")
    retry_after: int | None = Field(default=None, description="Seconds until the limit resets")


def envelope(data: Any) -> dict[str, Any]:
    """Wrap data in the success envelope, adding count for lists."""
    body: dict[str, Any] = {"success": True, "data": data}
    if isinstance(data, list):
        body["count"] = len(data)
    return body
