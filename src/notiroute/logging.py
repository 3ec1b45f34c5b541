"""
Structured logging setup for notiroute.

Configures structlog for either JSON or console output.  Every log line
includes a timestamp, level and event name; registration and dispatch
context (alert, channel, recipient) is bound where the event happens.
"""

from __future__ import annotations

import logging

import structlog

from notiroute.config import Settings, get_settings


def setup_logging(settings: Settings | None = None) -> None:
    """Configure structlog from *settings* (defaults to :func:`get_settings`).

    Safe to call more than once; the last call wins.
    """
    settings = settings or get_settings()
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    renderer: structlog.types.Processor
    if settings.log_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )
