"""
Logger factory shared by services and repositories.
"""

import logging
import sys

from weekplan.core.config import get_settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d - %(message)s"


def setup_logger(name: str) -> logging.Logger:
    """
    Get a module logger with a console handler attached.

    Handlers are attached once per logger name, so calling this at import time
    in several modules does not duplicate output.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(handler)
        logger.setLevel(get_settings().LOG_LEVEL.upper())
    return logger
