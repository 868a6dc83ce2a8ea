"""Logging setup for the ``hunkpeek`` logger hierarchy."""

from __future__ import annotations

import logging
import sys

LOGGER_NAME = "hunkpeek"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: int = logging.WARNING) -> logging.Logger:
    """Attach one stderr handler to the package logger.

    Repeated calls only update the level. Propagation is disabled so records
    are not duplicated by root handlers.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False
    if not any(getattr(handler, "_hunkpeek_handler", False) for handler in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._hunkpeek_handler = True
        logger.addHandler(handler)
    return logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
