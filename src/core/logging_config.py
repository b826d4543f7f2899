"""Structured logging configuration.

This module initializes structlog with a stable JSON event format.
Events are written to stderr so stdout stays reserved for series records.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from core.errors import TrendStitchConfigError

_CONFIGURED = False
LOG_LEVEL_CHOICES = ("DEBUG", "INFO", "WARNING", "ERROR")


def get_logger(name: str) -> Any:
    """Return a module logger instance.

    Args:
        name: Logger name, usually __name__.

    Returns:
        A structlog bound logger with JSON output.
    """
    _configure_once()
    return structlog.get_logger(name)


def set_log_level(level_name: str) -> None:
    """Change the minimum emitted log level.

    Args:
        level_name: One of ``LOG_LEVEL_CHOICES``, case-insensitive.

    Raises:
        TrendStitchConfigError: If the level name is not supported.
    """
    normalized_name = level_name.upper()
    if normalized_name not in LOG_LEVEL_CHOICES:
        raise TrendStitchConfigError(
            f"Unsupported log level '{level_name}'. Use one of: {', '.join(LOG_LEVEL_CHOICES)}."
        )
    level = logging.getLevelName(normalized_name)
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(level))


def _stderr_logger(*args: Any) -> Any:
    return structlog.PrintLogger(file=sys.stderr)


def _configure_once() -> None:
    global _CONFIGURED
    if _CONFIGURED:
        return
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.INFO),
        logger_factory=_stderr_logger,
        cache_logger_on_first_use=False,
    )
    _CONFIGURED = True
