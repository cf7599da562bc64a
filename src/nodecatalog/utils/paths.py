"""Path utility helpers."""
from __future__ import annotations

import os
from pathlib import Path


def to_posix_relative(path: Path, start: Path) -> str:
    """Return ``path`` relative to ``start`` using forward slashes on every host."""

    rel = os.path.relpath(path, start)
    return rel.replace("\\", "/")


def resolve_under(base: Path, path: Path) -> Path:
    """Resolve ``path`` against ``base`` unless it is already absolute."""

    path = Path(path).expanduser()
    return path if path.is_absolute() else Path(base) / path
