"""
Centralized logging configuration.

Every module of the formatter obtains its logger through
get_logger(__name__); handlers are attached once per logger name.
"""
import logging
import logging.handlers
import os
from pathlib import Path
from typing import Optional

from .constants import (
    LOG_LEVEL, LOG_FORMAT, LOG_FILE,
    LOG_MAX_SIZE_MB, LOG_BACKUP_COUNT
)


def _resolve_level() -> int:
    # FORMATTER_LOG_LEVEL=DEBUG overrides the packaged default
    name = os.environ.get("FORMATTER_LOG_LEVEL", LOG_LEVEL).upper()
    return getattr(logging, name, logging.INFO)


def setup_logger(name: Optional[str] = None, log_file: Optional[str] = LOG_FILE) -> logging.Logger:
    """
    Get or create a configured logger.

    Usage:
        from config.logging_config import setup_logger
        logger = setup_logger(__name__)
        logger.info("Rendering %s", manuscript)

    Args:
        name: Logger name. If None, uses 'formatter'.
        log_file: Rotating log file path. Falsy disables file logging.

    Returns:
        Configured logging.Logger instance.
    """
    logger = logging.getLogger(name or 'formatter')

    # Avoid adding handlers multiple times
    if logger.handlers:
        return logger

    logger.setLevel(_resolve_level())

    console = logging.StreamHandler()
    console.setLevel(logging.INFO)
    console.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(console)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            log_path,
            maxBytes=LOG_MAX_SIZE_MB * 1024 * 1024,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(file_handler)

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Alias for setup_logger for convenience.

    Usage:
        from config.logging_config import get_logger
        logger = get_logger(__name__)
    """
    return setup_logger(name)


# Usage: from config.logging_config import logger
logger = setup_logger('formatter')
