"""Structured logging framework using structlog.

This module provides centralized logging configuration with:
- ISO-8601 timestamps
- JSON rendering for structured logs
- Context binding support
- Output on stderr (stdout carries query results) plus optional file logging

Configuration is loaded from stamp_catalog.config.settings:
- LOG_LEVEL: Set log level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Default: WARNING
- STAMP_CATALOG_LOG_TO_FILE: Enable file logging. Default: disabled
- STAMP_CATALOG_LOG_FILE_DIR: Directory for log files. Default: logs/

Usage:
    >>> from stamp_catalog.utils.logging import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.info("catalog.ingestion_completed", stamps=3, queries=1)
"""

import logging
import os
import sys
from datetime import datetime
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Any, Optional

import structlog
from structlog.types import Processor

from stamp_catalog.config import get_settings

_HANDLER_MARKER = "_stamp_catalog_handler"


def _get_log_level() -> int:
    """Get log level from settings.

    Returns:
        Logging level constant (e.g., logging.INFO, logging.DEBUG)
    """
    try:
        level_name = get_settings().LOG_LEVEL.upper()
    except Exception:
        # Fall back to the raw environment when settings fail to validate so
        # that the validation error itself can still be logged.
        level_name = os.getenv("LOG_LEVEL", "WARNING").upper()

    return getattr(logging, level_name, logging.WARNING)


def _should_log_to_file() -> bool:
    """Check if file logging is enabled via settings."""
    try:
        return get_settings().log_to_file
    except Exception:
        return False


def _get_log_file_path() -> Path:
    """Get the log file path with date-based naming."""
    log_dir = get_settings().get_log_file_dir()

    # Format: stamp-catalog-YYYYMMDD.log
    date_str = datetime.now().strftime("%Y%m%d")
    return log_dir / f"stamp-catalog-{date_str}.log"


def _install_handler(handler: logging.Handler, level: int) -> None:
    handler.setLevel(level)
    setattr(handler, _HANDLER_MARKER, True)
    logging.root.addHandler(handler)


def _configure_structlog(level: Optional[int] = None) -> None:
    """Configure structlog with JSON rendering.

    Sets up:
    - ISO-8601 timestamps
    - Logger name
    - Log level
    - JSON renderer
    - stderr output (+ optional rotating file)

    Safe to call repeatedly: handlers installed by a previous call are replaced.
    """
    if level is None:
        level = _get_log_level()

    for handler in list(logging.root.handlers):
        if getattr(handler, _HANDLER_MARKER, False):
            logging.root.removeHandler(handler)
    logging.root.setLevel(level)

    _install_handler(logging.StreamHandler(sys.stderr), level)

    if _should_log_to_file():
        file_handler = TimedRotatingFileHandler(
            filename=str(_get_log_file_path()),
            when="midnight",
            interval=1,
            backupCount=30,
            encoding="utf-8",
        )
        _install_handler(file_handler, level)

    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def set_log_level(level_name: str) -> None:
    """Reconfigure logging at runtime (used by the CLI ``--log-level`` flag)."""
    level = getattr(logging, level_name.upper(), None)
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {level_name!r}")
    _configure_structlog(level)


# Configure structlog on module import
_configure_structlog()


def get_logger(name: str) -> Any:
    """Get a structlog BoundLogger instance.

    Args:
        name: Logger name (typically __name__ of the calling module)

    Returns:
        A structlog BoundLogger configured with JSON rendering
    """
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> Any:
    """Create a logger with bound context fields.

    Args:
        **kwargs: Context fields to bind (e.g., source="stdin")

    Returns:
        A BoundLogger with the specified context already bound

    Example:
        >>> logger = bind_context(source="catalog.txt")
        >>> logger.info("catalog.ingestion_completed", stamps=12)
    """
    return structlog.get_logger().bind(**kwargs)
