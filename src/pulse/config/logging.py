"""Structured logging configuration using structlog.

Provides JSON-formatted logs for production environments and
human-readable console logs for development. Every event is stamped with
the backend environment; the signed-in user id is carried as context
while a session is active.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor

from src.pulse.config.settings import get_settings


def add_environment(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Tag events with the backend environment they were produced against."""
    event_dict.setdefault("environment", get_settings().environment)
    return event_dict


def configure_logging(log_level: str | None = None, log_format: str | None = None) -> None:
    """Configure structured logging for the client.

    Sets up structlog with processors selected by format:
    - json: JSON output with timestamps
    - console: Console output with colors

    Args:
        log_level: Level name. If None, loads from settings.
        log_format: "json" or "console". If None, loads from settings.
    """
    settings = get_settings()
    log_level = log_level or settings.log_level
    log_format = log_format or settings.log_format

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        add_environment,
        structlog.processors.format_exc_info,
    ]

    if log_format == "json":
        renderer: Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())

    structlog.configure(
        processors=shared_processors + [renderer],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper()),
    )


def bind_session_context(user_id: str) -> None:
    """Attach the signed-in user id to subsequent events of this context."""
    structlog.contextvars.bind_contextvars(user_id=user_id)


def clear_session_context() -> None:
    structlog.contextvars.unbind_contextvars("user_id")


def get_logger(name: str) -> Any:
    """Get a configured logger instance.

    Args:
        name: Logger name (typically __name__ of the module)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)
