"""Structured logging configuration using structlog.

Provides consistent logging across all kg-dashboard packages with:
- JSON output for production
- Human-readable output for development
- Contextual information (logger name, level, timestamp)
"""

import logging
import sys
from typing import Any, ContextManager

import structlog


def configure_logging(
    level: str = "INFO",
    json_output: bool = False,
) -> None:
    """Configure structured logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_output: If True, output JSON for machine parsing (production)
                    If False, output human-readable format (development)

    Example:
        >>> configure_logging(level="DEBUG", json_output=False)
        >>> logger = get_logger(__name__)
        >>> logger.info("search_session_started", epoch=1, sources=7)
    """
    # Logs go to stderr so CLI output on stdout stays parseable
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level.upper()),
        force=True,
    )

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if json_output:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.extend(
            [
                structlog.dev.set_exc_info,
                structlog.dev.ConsoleRenderer(colors=True),
            ]
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name (typically __name__ of the module)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)


def session_context(**values: Any) -> ContextManager[None]:
    """Bind search session fields (e.g. ``search_epoch``) to log events.

    Fields are bound through structlog contextvars, so timer callbacks
    scheduled and tasks created inside the block carry them too, while the
    caller's context is restored on exit.

    Example:
        >>> with session_context(search_epoch=3):
        ...     loop.call_later(0.3, trigger)  # logs from trigger include search_epoch=3
    """
    return structlog.contextvars.bound_contextvars(**values)
