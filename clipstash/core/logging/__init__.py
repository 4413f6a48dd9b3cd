"""
Logging configuration module for structured logging.

This module configures the application's logging system using structlog.
It provides JSON output for production and human-readable console output
for development.
"""

import logging
from typing import Optional

import structlog

from clipstash.core.config.settings import settings


def configure_logging(log_level: Optional[str] = None, json_logs: Optional[bool] = None) -> None:
    """
    Configures the application's logging system.

    This function sets up structlog with:
    1. ISO format timestamps
    2. Log level inclusion
    3. JSON formatting for production (when ``json_logs`` is set)
    4. Console formatting for development
    5. Standard library logger factory and bound logger

    Arguments left as None fall back to LOG_LEVEL and LOG_JSON from settings.
    """
    log_level = log_level or settings.LOG_LEVEL
    json_logs = settings.LOG_JSON if json_logs is None else json_logs
    logging.basicConfig(format="%(message)s", level=log_level.upper())

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.add_log_level,
        structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer(),
    ]

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


# Singleton logger for modules that do not need their own name
logger = structlog.get_logger()

__all__ = ["configure_logging", "logger"]
