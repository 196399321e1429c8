"""Structured logging configuration.

Log events are emitted through structlog and rendered by the standard library
logging handlers to stdout, either as ``key=value`` text or as JSON lines.
"""

import logging
import sys

import structlog

DEFAULT_LOG_LEVEL = "debug"

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}


def parse_log_level(name: str) -> int:
    """Convert a level name such as ``"INFO"`` into a logging level.

    Raises:
        ValueError: If the name is not a known level.
    """
    try:
        return _LEVELS[name.strip().lower()]
    except KeyError:
        raise ValueError(f"unknown log level {name!r}") from None


def configure_logging(level: str = DEFAULT_LOG_LEVEL, log_format: str = "text") -> int:
    """Configure structlog and stdlib logging for the process.

    A malformed level is reported through the freshly configured logger and
    the default level is used instead.

    Returns:
        The effective numeric log level
    """
    parse_error: ValueError | None = None
    try:
        numeric_level = parse_log_level(level)
    except ValueError as e:
        parse_error = e
        numeric_level = _LEVELS[DEFAULT_LOG_LEVEL]

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=numeric_level,
        force=True,
    )

    if log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.processors.KeyValueRenderer(
            key_order=["timestamp", "level", "event"],
        )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    if parse_error is not None:
        get_logger(__name__).error(
            "failed_to_parse_log_level",
            value=level,
            error=str(parse_error),
        )

    return numeric_level


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)
