"""Logging configuration for the distance matrix client."""

import logging
import sys

from distance_matrix.config import settings

LOGGER_NAME = "distance_matrix"


def setup_logging(level: str | None = None) -> logging.Logger:
    """Set up the package logger with a stdout handler.

    Library modules log through ``logging.getLogger(__name__)`` and inherit
    this configuration. Calling it again replaces the handler instead of
    stacking a second one.

    Args:
        level: Log level name. Defaults to settings.log_level.

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, (level or settings.log_level).upper(), logging.INFO))

    logger.handlers.clear()

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    logger.propagate = False

    return logger
