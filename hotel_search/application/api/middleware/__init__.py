from hotel_search.application.api.middleware.error_handler import (
    ErrorHandlingMiddleware,
    add_error_handling,
    register_exception_handlers,
)
from hotel_search.application.api.middleware.request_id import RequestIDMiddleware

__all__ = [
    "ErrorHandlingMiddleware",
    "RequestIDMiddleware",
    "add_error_handling",
    "register_exception_handlers",
]
