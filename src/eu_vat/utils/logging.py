"""structlog configuration for scripts and host applications.

The library only ever calls ``structlog.get_logger``; configuring output is
left to whoever embeds it.
"""

from __future__ import annotations

import logging
import sys
from typing import Literal

import structlog

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

LOG_LEVELS: dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def setup_logging(log_level: LogLevel = "INFO", *, json_output: bool = True) -> None:
    """Route eu_vat log events to stderr.

    stderr keeps script results on stdout machine-readable. ``json_output=False``
    switches to structlog's human-readable console renderer.
    """
    renderer = structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer()
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(LOG_LEVELS[log_level]),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


def get_logger(name: str, **initial_values) -> structlog.BoundLogger:
    """Return a logger for *name*, optionally pre-bound with context values."""
    return structlog.get_logger(name, **initial_values)
