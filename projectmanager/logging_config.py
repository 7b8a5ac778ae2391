"""Logging setup shared by every module of the application."""

import logging
from typing import Optional

from projectmanager.config import settings

LOGGER_NAME = "projectmanager"


def configure_logging(level: Optional[str] = None, fmt: Optional[str] = None) -> logging.Logger:
    """Attach a single stream handler to the package logger.

    Calling it again only updates the level and format of the existing handler.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel((level or settings.LOG_LEVEL).upper())

    formatter = logging.Formatter(fmt or settings.LOG_FORMAT)
    handler = next((h for h in logger.handlers if getattr(h, "_projectmanager", False)), None)
    if handler is None:
        handler = logging.StreamHandler()
        handler._projectmanager = True
        logger.addHandler(handler)
    handler.setFormatter(formatter)
    return logger
