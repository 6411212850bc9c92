"""Logging configuration for the moodlebox package.

Modules obtain their loggers with ``logging.getLogger(__name__)``; only
the CLI calls :func:`setup_logging`.  Library users keep full control of
handlers.
"""

from __future__ import annotations

import logging
import os
import sys

__all__ = ["setup_logging"]

LOGGER_NAME = "moodlebox"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    level: str | None = None,
    format_string: str | None = None,
) -> logging.Logger:
    """Configure and return the package logger.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ...).  Defaults to
            ``MOODLEBOX_LOG_LEVEL``, then ``LOG_LEVEL``, then ``WARNING``.
        format_string: Custom format string.

    Returns:
        The configured ``moodlebox`` logger.
    """
    level = level or os.getenv("MOODLEBOX_LOG_LEVEL") or os.getenv("LOG_LEVEL", "WARNING")
    format_string = format_string or DEFAULT_FORMAT

    logger = logging.getLogger(LOGGER_NAME)

    # Only attach a handler once; later calls just adjust the level.
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        formatter = logging.Formatter(fmt=format_string, datefmt="%Y-%m-%d %H:%M:%S")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.propagate = False

    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))
    return logger
