"""
utils/logger.py
---------------
Logging setup for the API process.

Application modules call ``get_logger(__name__)``. ``configure_logging``
installs one stdout handler on the root logger and routes uvicorn's
server and access loggers through it, so request lines and application
lines share a format.
"""

import logging
import sys

from config import LOG_LEVEL

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Loggers that uvicorn configures for itself unless told otherwise.
SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")

_HANDLER_NAME = "bountyboard"


def configure_logging(level: str = LOG_LEVEL) -> logging.Handler:
    """
    Attach the stdout handler to the root logger, once.

    Calling it again only changes the level.

    Returns:
        The installed handler.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    for handler in root.handlers:
        if handler.get_name() == _HANDLER_NAME:
            return handler

    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    root.addHandler(handler)

    for name in SERVER_LOGGERS:
        server_logger = logging.getLogger(name)
        server_logger.handlers.clear()
        server_logger.propagate = True
    return handler


def get_logger(name: str) -> logging.Logger:
    """Named logger; logging is configured on first use."""
    configure_logging()
    return logging.getLogger(name)
