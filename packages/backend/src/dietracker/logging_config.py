"""structlog setup.

local → coloured console output at DEBUG.
dev   → JSON lines at DEBUG.
prod  → JSON lines at WARNING.

Every renderer merges structlog contextvars, so the request_id bound by
RequestLoggingMiddleware shows up on all events of a request.
"""

import logging

import structlog

_LEVELS = {
    "local": logging.DEBUG,
    "dev": logging.DEBUG,
    "prod": logging.WARNING,
}


def configure_logging(environment: str) -> None:
    level = _LEVELS.get(environment, logging.INFO)

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]
    if environment == "local":
        processors.append(structlog.dev.ConsoleRenderer())
    else:
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )
