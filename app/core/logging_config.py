"""
Logging setup shared by the API, the CLI and the Celery worker.
"""

import logging
import sys

from app.core.config import LOG_LEVEL

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that are too chatty at the application's level
QUIET_LOGGERS = {
    "uvicorn": logging.WARNING,
    "fastapi": logging.WARNING,
    "celery": logging.INFO,
    "kombu": logging.WARNING,
    "redis": logging.WARNING,
}


def setup_logging(log_level=None):
    """
    Send all log records to stdout in a single format.

    Safe to call more than once: earlier root handlers are replaced, so the
    CLI can switch to DEBUG for --verbose after the API or tests configured it.

    Args:
        log_level: Level for the root logger; defaults to LOG_LEVEL from the environment
    """
    if log_level is None:
        log_level = getattr(logging, LOG_LEVEL, logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    root_logger.addHandler(handler)

    for name, level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(level)

    return root_logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
