"""Logging utilities for the project."""

import logging
import os
import sys
from typing import Optional

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Third-party loggers that are too chatty at INFO
_QUIET_LOGGERS = ("apscheduler.executors.default", "urllib3.connectionpool")


def setup_logging(
    level: Optional[str] = None,
    log_file: Optional[str] = None,
    format_string: Optional[str] = None
) -> None:
    """Setup logging configuration for the project.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
            Falls back to the ``LOG_LEVEL`` environment variable, then INFO.
        log_file: Optional path to log file
        format_string: Custom format string for log messages
    """
    level = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    if format_string is None:
        format_string = DEFAULT_FORMAT

    # Configure root logger
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format=format_string,
        handlers=[
            logging.StreamHandler(sys.stdout),
            *([logging.FileHandler(log_file)] if log_file else [])
        ],
        force=True,
    )
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Return a configured logger for the given name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger instance
    """
    # Ensure basic configuration exists
    if not logging.getLogger().handlers:
        setup_logging()

    return logging.getLogger(name)
