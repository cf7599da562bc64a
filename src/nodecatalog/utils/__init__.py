"""Utility helpers shared across the node catalog codebase."""

from .logging import configure_logging, get_logger
from .paths import resolve_under, to_posix_relative

__all__ = [
    "configure_logging",
    "get_logger",
    "resolve_under",
    "to_posix_relative",
]
