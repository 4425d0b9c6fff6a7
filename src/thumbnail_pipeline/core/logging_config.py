"""Centralized logging configuration for the thumbnail pipeline.

Log records go to stderr; stdout is reserved for the progress bar and the
run summary, so the summary can be piped or captured on its own.
"""

import os
import sys
import logging
from typing import Optional


def setup_logger(
    name: str = "thumbnail-pipeline",
    level: Optional[str] = None,
    format_type: str = "structured",
) -> logging.Logger:
    """
    Setup centralized logging with environment variable configuration.

    Args:
        name: Logger name (defaults to "thumbnail-pipeline")
        level: Log level override (defaults to env var or WARNING)
        format_type: Logging format ("structured" or "simple")

    Returns:
        Configured logger instance

    Environment Variables:
        LOG_LEVEL: Set logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        LOG_FORMAT: Set format type ("structured" or "simple")
    """
    logger = logging.getLogger(name)

    # Determine log level from parameter, env var, or default
    if level:
        log_level = getattr(logging, level.upper(), logging.WARNING)
    else:
        env_level = os.getenv("LOG_LEVEL", "WARNING").upper()
        log_level = getattr(logging, env_level, logging.WARNING)

    logger.setLevel(log_level)

    # Avoid duplicate handlers
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)

        env_format = os.getenv("LOG_FORMAT", format_type).lower()

        if env_format == "structured":
            formatter = logging.Formatter(
                "%(asctime)s | %(name)s | %(levelname)-8s | "
                "%(filename)s:%(lineno)d | %(funcName)s() | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        else:
            formatter = logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            )

        handler.setFormatter(formatter)
        logger.addHandler(handler)

    # Prevent duplicate log messages
    logger.propagate = False
    return logger


def get_logger(name: str = "thumbnail-pipeline") -> logging.Logger:
    """
    Get a logger instance with consistent configuration.

    Args:
        name: Logger name

    Returns:
        Configured logger instance
    """
    return setup_logger(name)
