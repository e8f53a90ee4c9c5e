"""Logging setup. Modules only ever call `logging.getLogger(__name__)`; the entry points call `configure_logging` once."""

import logging
from typing import Optional, TextIO

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%H:%M:%S"
ROOT_LOGGER_NAME = "src"


def configure_logging(level: str = "INFO", stream: Optional[TextIO] = None) -> logging.Logger:
    """Attach a single stream handler to the application's root logger (safe to call more than once)."""
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level.upper())

    logger.handlers.clear()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)
    return logger
