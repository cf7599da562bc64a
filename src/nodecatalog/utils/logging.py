"""Logging utilities built on top of :mod:`loguru`."""
from __future__ import annotations

import inspect
import logging
import sys
from typing import Optional

from loguru import logger


class LoguruBridge(logging.Handler):
    """Forward standard-library records to loguru, keeping level and caller."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        frame, depth = inspect.currentframe(), 0
        while frame and (depth == 0 or frame.f_code.co_filename == logging.__file__):
            frame = frame.f_back
            depth += 1
        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def configure_logging(level: str = "INFO") -> None:
    """Send loguru output to stderr and route stdlib logging through it."""

    logger.remove()
    logger.add(lambda msg: print(msg, end="", file=sys.stderr), level=level)
    logging.basicConfig(handlers=[LoguruBridge()], level=level, force=True)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a standard-library logger tied to loguru."""

    return logging.getLogger(name or __name__)
