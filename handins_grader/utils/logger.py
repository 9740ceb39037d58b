"""Logging configuration for the application."""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

from handins_grader import config

_logger: Optional[logging.Logger] = None


def _file_handler(path: str, formatter: logging.Formatter) -> RotatingFileHandler:
    log_dir = os.path.dirname(path)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
    handler = RotatingFileHandler(path, maxBytes=1024 * 1024, backupCount=3, encoding='utf-8')
    handler.setLevel(config.LOG_LEVEL)
    handler.setFormatter(formatter)
    return handler


def setup_logger() -> logging.Logger:
    """Sets up and returns the application logger.

    Log records go to stderr, leaving stdout to the grade report. When
    ``HANDINS_LOG_FILE`` is set they are also written to that file. Nothing
    logged here may contain credentials.

    Returns:
        logging.Logger: The configured application logger.
    """
    global _logger
    if _logger:
        return _logger

    logger = logging.getLogger("HandinsGrader")
    logger.setLevel(config.LOG_LEVEL)

    if not logger.handlers:
        formatter = logging.Formatter(config.LOG_FORMAT)

        stderr_handler = logging.StreamHandler(sys.stderr)
        stderr_handler.setLevel(config.LOG_LEVEL)
        stderr_handler.setFormatter(formatter)
        logger.addHandler(stderr_handler)

        if config.LOG_FILE:
            try:
                logger.addHandler(_file_handler(config.LOG_FILE, formatter))
            except OSError as e:
                logger.warning(f"Not logging to {config.LOG_FILE}: {e}")

    _logger = logger
    logger.debug(f"Logger ready for {config.BASE_URL} (log file: {config.LOG_FILE or 'none'}).")

    return logger

def get_logger() -> logging.Logger:
    """Returns the singleton logger instance, setting it up if necessary."""
    if _logger is None:
        return setup_logger()
    return _logger
