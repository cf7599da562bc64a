"""Render the sorted catalog as JSON and as a Markdown table."""
from __future__ import annotations

import json
import os
import stat
import tempfile
from pathlib import Path
from typing import Iterator, Sequence, Tuple

from ..utils.logging import get_logger
from .schema import CatalogEntry


LOGGER = get_logger(__name__)

DEFAULT_TITLE = "Flowise Node Catalog"
TABLE_HEADER = ("Category", "Node", "Description", "Inputs", "Outputs", "Path")


def render_structured(entries: Sequence[CatalogEntry]) -> str:
    """Return the catalog as pretty-printed JSON."""

    records = [entry.as_record() for entry in entries]
    return json.dumps(records, indent=2, ensure_ascii=False) + "\n"


def escape_cell(value: str) -> str:
    """Make ``value`` safe for a single Markdown table cell."""

    flattened = " ".join(value.splitlines())
    return flattened.replace("|", "\\|")


def _row(cells: Sequence[str]) -> str:
    return "| " + " | ".join(cells) + " |"


def render_table(entries: Sequence[CatalogEntry], title: str = DEFAULT_TITLE) -> str:
    """Return the catalog as a Markdown document with one row per entry."""

    lines = [
        f"# {title}",
        f"Total: **{len(entries)}**",
        "",
        _row(TABLE_HEADER),
        "|" + "---|" * len(TABLE_HEADER),
    ]
    for entry in entries:
        cells = (
            entry.category,
            entry.label,
            entry.description,
            entry.inputs_summary,
            entry.outputs_summary,
            entry.path,
        )
        lines.append(_row([escape_cell(cell) for cell in cells]))
    return "\n".join(lines) + "\n"


def _target_mode(path: Path) -> int:
    """Keep the mode of an existing target, else the umask default for new files."""

    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def write_atomic(path: Path, text: str) -> None:
    """Write ``text`` to ``path`` through a temporary file and a rename."""

    path.parent.mkdir(parents=True, exist_ok=True)
    mode = _target_mode(path)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as handle:
            handle.write(text)
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise


class CatalogWriter:
    """Persist the catalog to its structured and tabular artifacts."""

    def __init__(self, json_path: Path, markdown_path: Path, title: str = DEFAULT_TITLE) -> None:
        self.json_path = Path(json_path)
        self.markdown_path = Path(markdown_path)
        self.title = title

    def write(self, entries: Sequence[CatalogEntry]) -> Tuple[Path, Path]:
        write_atomic(self.json_path, render_structured(entries))
        write_atomic(self.markdown_path, render_table(entries, self.title))
        LOGGER.info("Wrote %s and %s", self.json_path, self.markdown_path)
        return self.json_path, self.markdown_path


def read_catalog(path: Path) -> Iterator[CatalogEntry]:
    """Load a structured catalog written by :func:`render_structured`."""

    records = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(records, list):
        raise ValueError(f"Catalog {path} does not contain a JSON array")
    for record in records:
        yield CatalogEntry.model_validate(record)
