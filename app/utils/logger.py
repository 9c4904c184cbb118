# app/utils/logger.py
"""
Logging for the lorry-bay yard service.

Gatehouse workflow steps, backend failures and the prebooking job all log
through get_logger(). The shared handlers print to the console and append to
logs/yard.log, which rolls over at LOG_MAX_BYTES keeping LOG_BACKUPS old files.
"""

import logging
import os
from logging.handlers import RotatingFileHandler

from app.config import settings

LOG_LEVEL = settings.LOG_LEVEL.upper()
LOG_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(__file__))), "logs")
LOG_FILE = "yard.log"
LOG_MAX_BYTES = 5 * 1024 * 1024
LOG_BACKUPS = 10
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

_configured = False


def _install_yard_handlers():
    global _configured
    if _configured:
        return
    _configured = True
    os.makedirs(LOG_DIR, exist_ok=True)
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    yard_file = RotatingFileHandler(
        filename=os.path.join(LOG_DIR, LOG_FILE),
        maxBytes=LOG_MAX_BYTES,
        backupCount=LOG_BACKUPS,
        encoding="utf-8",
    )
    root = logging.getLogger()
    root.setLevel(LOG_LEVEL)
    for handler in (logging.StreamHandler(), yard_file):
        handler.setLevel(LOG_LEVEL)
        handler.setFormatter(formatter)
        root.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Logger for one yard module, e.g. get_logger(__name__) in a service."""
    _install_yard_handlers()
    return logging.getLogger(name)
