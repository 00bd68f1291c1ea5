"""
Logging configuration shared by the engine, the CLI and the UI.
Logs to the console and, when SEATING_LOG_FILE is set, to a rotating file.
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional

from .config import settings

FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_configured = False
_handlers: list = []


def configure_logging(level: Optional[str] = None, log_file: Optional[str] = None) -> None:
    """(Re)install the package handlers on the root logger."""
    global _configured
    _configured = True

    level = (level or settings.LOG_LEVEL).upper()
    log_file = log_file or settings.LOG_FILE
    fmt = logging.Formatter(fmt=FORMAT, datefmt=DATE_FORMAT)

    root = logging.getLogger()
    for handler in _handlers:
        root.removeHandler(handler)
        handler.close()
    _handlers.clear()

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(fmt)
    _handlers.append(console)

    if log_file:
        directory = os.path.dirname(os.path.abspath(log_file))
        os.makedirs(directory, exist_ok=True)
        file_handler = RotatingFileHandler(
            filename=log_file,
            maxBytes=settings.LOG_MAX_BYTES,
            backupCount=settings.LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(fmt)
        _handlers.append(file_handler)

    root.setLevel(level)
    for handler in _handlers:
        root.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Get a named logger. Call this at the top of every module."""
    if not _configured:
        configure_logging()
    return logging.getLogger(name)
