"""Utility functions for console logging setup and timing."""

import sys
import logging


class _BelowWarningFilter(logging.Filter):
    """Pass only records below WARNING (they go to stdout)."""

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < logging.WARNING


def setup_logging(log_level: int = logging.INFO) -> logging.Logger:
    """
    Set up the console logger.

    Progress and results go to stdout, warnings and errors to stderr.

    Args:
        log_level: Logging level (default: INFO)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger('fix-images')
    logger.setLevel(log_level)

    # Clear existing handlers
    logger.handlers.clear()

    formatter = logging.Formatter('%(message)s')

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setLevel(log_level)
    stdout_handler.addFilter(_BelowWarningFilter())
    stdout_handler.setFormatter(formatter)

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(max(log_level, logging.WARNING))
    stderr_handler.setFormatter(formatter)

    logger.addHandler(stdout_handler)
    logger.addHandler(stderr_handler)

    return logger


def format_duration(seconds: float) -> str:
    """Format an elapsed time in whole milliseconds, e.g. '42ms'."""
    return f'{round(seconds * 1000)}ms'
