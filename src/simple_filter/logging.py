"""
Centralized logging configuration using structlog
"""

import logging
import sys
from typing import Any

import structlog

from .config import settings


class FilterContext:
    """Bind the model being filtered to every event logged inside a filter call."""

    def __call__(self, logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        _ = logger, method_name

        context = structlog.contextvars.get_contextvars()
        model = context.get("asf_model")
        if model:
            event_dict.setdefault("model", model)

        return event_dict


def configure_logging(debug: bool | None = None, log_level: str | None = None) -> None:
    """Configure structlog for the library.

    Args:
        debug: Human-readable console output when true, JSON otherwise.
            Defaults to ``settings.debug``.
        log_level: Name of the stdlib level. Defaults to DEBUG in debug mode,
            ``settings.log_level`` otherwise.
    """
    if debug is None:
        debug = settings.debug

    if log_level is None:
        log_level = "DEBUG" if debug else settings.log_level

    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        stream=sys.stdout,
        format="%(message)s",
        force=True,
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        FilterContext(),
        structlog.processors.TimeStamper(fmt="ISO", utc=True),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if debug:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    else:
        processors.append(structlog.processors.JSONRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)
