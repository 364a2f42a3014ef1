"""
Request ID middleware.

Reads X-Request-ID from the incoming request (or generates a uuid4),
stores it in the logging context so every log line carries it, and
echoes it on the response.
"""

import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from hotel_search.core.config.constants import HEADER_REQUEST_ID
from hotel_search.core.logging.logger import clear_request_id, set_request_id


class RequestIDMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(HEADER_REQUEST_ID) or str(uuid.uuid4())
        set_request_id(request_id)

        try:
            response = await call_next(request)
            response.headers[HEADER_REQUEST_ID] = request_id
            return response
        finally:
            clear_request_id()
