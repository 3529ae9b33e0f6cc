"""
Chat API - Logging Setup

Installs a single stream handler on the ``chatapi`` logger tree.
Modules log through ``logging.getLogger(__name__)``.
"""

import logging
import sys


LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """
    Configure the application logger.

    Safe to call more than once; the handler is only installed the first time.
    """
    logger = logging.getLogger("chatapi")
    logger.setLevel(level.upper())

    if not any(getattr(h, "_chatapi", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._chatapi = True
        logger.addHandler(handler)

    logger.propagate = False
    return logger
