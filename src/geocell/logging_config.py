"""Logging setup for the geocell package logger."""

from __future__ import annotations

import logging
import sys
from typing import TextIO

PACKAGE_LOGGER = "geocell"
_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _package_handler(logger: logging.Logger) -> logging.StreamHandler | None:
    for handler in logger.handlers:
        if getattr(handler, "_geocell_handler", False):
            return handler
    return None


def setup_logging(level: str = "INFO", stream: TextIO | None = None) -> logging.Logger:
    """Set the `geocell` logger level and attach one stream handler to it.

    Repeated calls adjust the level, and the stream when one is given, without
    stacking handlers. Root logger configuration is left to the host application.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(log_level)

    handler = _package_handler(logger)
    if handler is None:
        handler = logging.StreamHandler(stream or sys.stderr)
        handler._geocell_handler = True  # type: ignore[attr-defined]
        handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(handler)
    elif stream is not None:
        handler.setStream(stream)
    handler.setLevel(log_level)
    return logger
