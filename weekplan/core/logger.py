"""
Logging setup shared by services and repositories.
"""

import logging
import sys

from weekplan.core.config import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logger(name: str = "weekplan", level: int | str | None = None) -> logging.Logger:
    """Configure and return a named logger.

    Repeated calls with the same name return the same logger without adding
    another handler.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level or get_settings().LOG_LEVEL)

    if logger.handlers:
        return logger

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)
    return logger
