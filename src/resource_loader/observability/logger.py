"""Logging for the loader package.

Every module logs through a ``resource_loader.<area>`` logger created here.
Library code logs at DEBUG; entrypoints pick the level with ``set_level``.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

ROOT_LOGGER_NAME = "resource_loader"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _has_stream_handler(logger: logging.Logger) -> bool:
    return any(isinstance(h, logging.StreamHandler) for h in logger.handlers)


def get_logger(name: str = ROOT_LOGGER_NAME, level: Optional[str] = None) -> logging.Logger:
    """Return the logger ``name`` with a single stderr handler attached.

    Args:
        name: Logger name, normally ``resource_loader.<area>``.
        level: Optional level name (e.g. "DEBUG"). New loggers default to INFO;
            existing ones keep their level when omitted.
    """

    logger = logging.getLogger(name)
    logger.propagate = False

    if level is not None:
        logger.setLevel(level.upper())
    elif logger.level == logging.NOTSET:
        logger.setLevel(logging.INFO)

    if not _has_stream_handler(logger):
        handler = logging.StreamHandler(stream=sys.stderr)
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT))
        logger.addHandler(handler)

    return logger


def set_level(level: str, prefix: str = ROOT_LOGGER_NAME) -> None:
    """Apply ``level`` to every logger already created under ``prefix``."""

    for name in list(logging.root.manager.loggerDict):
        if name == prefix or name.startswith(prefix + "."):
            logging.getLogger(name).setLevel(level.upper())
