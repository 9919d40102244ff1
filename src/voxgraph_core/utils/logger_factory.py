"""
Logger Factory - Convenience wrapper for LoggingService.

Fills in level and format from settings so entry points can call
configure_logging() with no arguments.

License: MIT
"""

from typing import Optional

import structlog

from voxgraph_core.config import settings
from voxgraph_core.logging_service import LoggingService


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Get a module/component-specific logger.

    Args:
        name: Logger name (typically __name__)

    Raises:
        RuntimeError: If logging not configured yet
        ValueError: If name is empty or too long
    """
    return LoggingService.get_logger(name)


def configure_logging(level: Optional[str] = None, format: Optional[str] = None) -> None:
    """
    Configure structured logging, defaulting to settings.log_level/log_format.

    Raises:
        ValueError: If level or format is invalid
        RuntimeError: If called after logging already configured
    """
    if level is None:
        level = settings.log_level
    if format is None:
        format = settings.log_format

    LoggingService.configure_logging(level=level, format=format)
