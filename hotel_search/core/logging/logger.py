"""
Structured logging for the hotel search service (structlog).

Every log line carries the request ID set by the request-ID middleware, so
a cache miss, the upstream call it triggers and the resulting error can be
tied back to one API request. Cache and upstream code tag lines with a
``stage`` such as ``CACHE.L1_HIT`` or ``4.2`` via log_stage().

The service handles two secrets: the RapidAPI key sent upstream and the
admin key guarding the cache routes. redact_secrets keeps both, and guest
email addresses, out of the logs.

Output is JSON in deployed environments and colored console text locally
(LOG_FORMAT).
"""

import logging
import re
import sys
from contextvars import ContextVar
from datetime import datetime, timezone

import structlog
from structlog.types import EventDict, WrappedLogger

from hotel_search.core.config.constants import HEADER_ADMIN_KEY, HEADER_API_KEY, HEADER_RAPIDAPI_KEY
from hotel_search.core.config.settings import get_settings

# Context variable for the current request ID
request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)

SECRET_FIELDS = ("api_key", "rapidapi_key", "admin_key")
SECRET_HEADERS = {h.lower() for h in (HEADER_API_KEY, HEADER_ADMIN_KEY, HEADER_RAPIDAPI_KEY)}


def add_request_id(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """
    Stamp the event with the current API request ID.

    STAGE-L.1: Request ID injection

    Outside a request (startup, shutdown) no request_id field is added.
    """
    request_id = request_id_ctx.get()
    if request_id:
        event_dict["request_id"] = request_id
    return event_dict


def add_timestamp(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """STAGE-L.2: UTC ISO timestamp with a Z suffix."""
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
    return event_dict


def redact_secrets(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """
    Keep the RapidAPI key, admin key and guest emails out of log output.

    STAGE-L.3: Redaction

    - Email addresses in the message -> [EMAIL]
    - 50-character tokens in the message (RapidAPI key shape) -> [REDACTED]
    - api_key / rapidapi_key / admin_key fields -> [REDACTED]
    - X-RapidAPI-Key, X-Admin-Key and X-API-Key inside a logged ``headers`` dict
    """
    message = event_dict.get("event", "")

    if isinstance(message, str):
        message = re.sub(r"\b[\w.-]+@[\w.-]+\.\w+\b", "[EMAIL]", message)
        message = re.sub(r"\b[a-zA-Z0-9]{50}\b", "[REDACTED]", message)
        event_dict["event"] = message

    for field in SECRET_FIELDS:
        if event_dict.get(field):
            event_dict[field] = "[REDACTED]"

    headers = event_dict.get("headers")
    if isinstance(headers, dict):
        event_dict["headers"] = {
            name: "[REDACTED]" if name.lower() in SECRET_HEADERS else value
            for name, value in headers.items()
        }

    return event_dict


def add_log_level_name(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """STAGE-L.4: Upper-case the level name (INFO, WARNING, ...)."""
    if "level" in event_dict:
        event_dict["level"] = event_dict["level"].upper()
    return event_dict


def setup_logging(log_level: str | None = None, log_format: str | None = None) -> None:
    """
    Configure structlog and the stdlib root logger.

    STAGE-L: Logging initialization

    Called once from the app lifespan. Arguments override LOG_LEVEL and
    LOG_FORMAT from settings.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Log format ('json' or 'console')
    """
    settings = get_settings()

    log_level = log_level or settings.logging.LOG_LEVEL
    log_format = log_format or settings.logging.LOG_FORMAT

    logging.basicConfig(
        format="%(message)s", stream=sys.stdout, level=getattr(logging, log_level.upper())
    )

    if log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            add_request_id,
            add_timestamp,
            structlog.stdlib.add_log_level,
            add_log_level_name,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            redact_secrets,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Module-level logger.

    Usage:
        logger = get_logger(__name__)
        logger.info("Cache miss", cache_key=key, stage="CACHE.MISS")
    """
    return structlog.get_logger(name)


def set_request_id(request_id: str) -> None:
    """STAGE-1.1: Bind the request ID for the rest of this request."""
    request_id_ctx.set(request_id)


def get_request_id() -> str | None:
    """Get current request ID from context."""
    return request_id_ctx.get()


def clear_request_id() -> None:
    """STAGE-6: Unbind the request ID once the response is sent."""
    request_id_ctx.set(None)


def log_stage(
    logger: structlog.stdlib.BoundLogger, stage: str, message: str, level: str = "info", **kwargs
) -> None:
    """
    Log a message with stage information.

    Args:
        logger: Logger instance
        stage: Stage identifier (e.g., "CACHE.L2_HIT", "4.2")
        message: Log message
        level: Log level (debug, info, warning, error, critical)
        **kwargs: Additional fields to log

    Usage:
        log_stage(logger, "2.1", "L1 cache hit", cache_key="booking:search:london")
    """
    log_func = getattr(logger, level.lower())
    log_func(message, stage=stage, **kwargs)
