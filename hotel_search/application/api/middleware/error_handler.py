"""
Error Handling
==============

Two layers turn exceptions into the standard error envelope:

1. Exception handlers for errors we raise on purpose:
   - HotelSearchError      → its status_code (400, 401, 404, 503, upstream pass-through...)
   - RequestValidationError → 400 with field-level ``errors``
   - HTTPException          → its status_code (unknown route, wrong method)
2. ErrorHandlingMiddleware as the last line of defense:
   - anything else          → 500

Stack traces are only included when running in development mode.
"""

import traceback
from collections.abc import Callable

from fastapi import FastAPI, Request, Response
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from hotel_search.core.exceptions import HotelSearchError
from hotel_search.core.logging.logger import get_logger, get_request_id

logger = get_logger(__name__)


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """
    Catch-all for exceptions no handler claimed.

    Logs the full error server-side and returns a generic 500 envelope so
    internal details do not leak to clients.
    """

    def __init__(self, app, include_traceback: bool = False):
        """
        Args:
            app: The ASGI application
            include_traceback: Whether to include stack traces in error responses
                              (should be False in production for security)
        """
        super().__init__(app)
        self.include_traceback = include_traceback

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)

        except Exception as e:
            method = request.method
            path = request.url.path
            error_type = type(e).__name__

            logger.error(
                f"Unhandled exception in request: {method} {path}",
                method=method,
                path=path,
                error_type=error_type,
                error_message=str(e),
                exc_info=True,
            )

            error_response = {
                "success": False,
                "message": "An unexpected error occurred while processing your request",
                "error_type": error_type,
            }

            if self.include_traceback:
                error_response["errors"] = traceback.format_exc().splitlines()

            return JSONResponse(status_code=500, content=error_response)


def register_exception_handlers(app: FastAPI, include_traceback: bool = False) -> None:
    """
    Register handlers mapping known exceptions to the error envelope.

    Args:
        app: FastAPI application instance
        include_traceback: Whether to include error details in responses
    """

    @app.exception_handler(HotelSearchError)
    async def hotel_search_error_handler(request: Request, exc: HotelSearchError):
        request_id = exc.request_id or get_request_id()
        log = logger.warning if exc.status_code < 500 else logger.error
        log(
            f"Request failed: {exc.message}",
            stage="API.ERROR",
            error_type=type(exc).__name__,
            status_code=exc.status_code,
            path=request.url.path,
            request_id=request_id,
        )

        content = {
            "success": False,
            "message": exc.message,
            "error_type": type(exc).__name__,
        }
        if include_traceback:
            content["errors"] = [jsonable_encoder(exc.details)] if exc.details else None
            if exc.__traceback__ is not None:
                content["stack"] = traceback.format_exception(exc)

        return JSONResponse(status_code=exc.status_code, content=content)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        logger.warning(
            f"Request failed: {exc.detail}",
            stage="API.HTTP_ERROR",
            status_code=exc.status_code,
            method=request.method,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "message": str(exc.detail), "error_type": "HTTPException"},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        logger.warning(
            "Request validation failed",
            stage="API.VALIDATION",
            path=request.url.path,
            error_count=len(exc.errors()),
        )
        return JSONResponse(
            status_code=400,
            content={
                "success": False,
                "message": "Invalid request parameters",
                "error_type": "ValidationError",
                "errors": jsonable_encoder(exc.errors()),
            },
        )


def add_error_handling(app: FastAPI, include_traceback: bool = False) -> None:
    """
    Add the catch-all middleware and the exception handlers.

    Include tracebacks in development, not in production.
    """
    register_exception_handlers(app, include_traceback=include_traceback)
    app.add_middleware(ErrorHandlingMiddleware, include_traceback=include_traceback)
    logger.info("Error handling registered", include_traceback=include_traceback)
