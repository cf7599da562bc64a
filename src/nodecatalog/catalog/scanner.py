"""Filesystem scanning utilities for building the node catalog."""
from __future__ import annotations

import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Sequence

from ..utils.logging import get_logger
from ..utils.paths import resolve_under, to_posix_relative
from .extractors import NodeExtractor
from .schema import SUMMARY_LIMIT, CatalogEntry


LOGGER = get_logger(__name__)

CLONE_HINT = "Clone Flowise first: git clone https://github.com/FlowiseAI/Flowise.git"


class CatalogError(Exception):
    """Base class for catalog failures surfaced to the user."""


class NodesDirectoryNotFound(CatalogError, FileNotFoundError):
    """Raised when the walk root is missing, before anything is read."""

    def __init__(self, path: Path, hint: str = CLONE_HINT) -> None:
        super().__init__(f"Nodes directory not found: {path}")
        self.path = path
        self.hint = hint


@dataclass(slots=True)
class ScanConfig:
    """Configuration parameters controlling scan behaviour."""

    base_dir: Path = field(default_factory=Path.cwd)
    nodes_dir: Path = Path("Flowise/packages/components/nodes")
    extension: str = ".ts"
    contract_name: str = "INode"
    anchor: str = "nodes"
    summary_limit: int = SUMMARY_LIMIT
    exclude_dirs: Sequence[str] = ()
    follow_symlinks: bool = False
    workers: int = 1

    def __post_init__(self) -> None:
        self.base_dir = Path(self.base_dir)
        self.nodes_dir = resolve_under(self.base_dir, Path(self.nodes_dir))
        if self.workers < 1:
            raise ValueError("workers must be >= 1")
        if not 0 <= self.summary_limit <= SUMMARY_LIMIT:
            raise ValueError(f"summary_limit must be between 0 and {SUMMARY_LIMIT}")


def walk_sources(
    root: Path,
    extension: str = ".ts",
    exclude_dirs: Sequence[str] = (),
    follow_symlinks: bool = False,
) -> Iterator[Path]:
    """Yield every regular file under ``root`` whose name ends with ``extension``."""

    excluded = set(exclude_dirs)

    def on_walk_error(err: OSError) -> None:
        LOGGER.warning("Error walking directory %s: %s", err.filename, err)

    for dirpath, dirnames, filenames in os.walk(root, followlinks=follow_symlinks, onerror=on_walk_error):
        dirnames[:] = sorted(d for d in dirnames if d not in excluded)
        for filename in sorted(filenames):
            if not filename.endswith(extension):
                continue
            path = Path(dirpath) / filename
            if path.is_file():
                yield path


def sort_catalog(entries: Iterable[CatalogEntry]) -> List[CatalogEntry]:
    """Return ``entries`` in catalog order: category, then label, then path."""

    return sorted(entries, key=CatalogEntry.sort_key)


def read_source(path: Path) -> str:
    """Return the file text, or an empty string when it cannot be read."""

    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        LOGGER.warning("Unable to read %s: %s", path, exc)
        return ""


class CatalogScanner:
    """Walk a nodes tree and turn every node source into a catalog entry."""

    def __init__(self, extractor: Optional[NodeExtractor] = None) -> None:
        self.extractor = extractor

    def _extractor_for(self, config: ScanConfig) -> NodeExtractor:
        if self.extractor is not None:
            return self.extractor
        return NodeExtractor(
            contract_name=config.contract_name,
            anchor=config.anchor,
            extension=config.extension,
            summary_limit=config.summary_limit,
        )

    def scan(self, config: ScanConfig) -> Iterator[CatalogEntry]:
        """Yield entries in walk order; use :meth:`build` for the sorted catalog."""

        root = config.nodes_dir
        if not root.is_dir():
            raise NodesDirectoryNotFound(root)

        extractor = self._extractor_for(config)
        paths = walk_sources(root, config.extension, config.exclude_dirs, config.follow_symlinks)

        def process(path: Path) -> Optional[CatalogEntry]:
            rel_path = to_posix_relative(path, config.base_dir)
            entry = extractor.extract(read_source(path), rel_path)
            if entry is None:
                LOGGER.debug("Skipping %s: no %s contract marker", rel_path, config.contract_name)
            return entry

        if config.workers > 1:
            with ThreadPoolExecutor(max_workers=config.workers) as executor:
                for entry in executor.map(process, paths):
                    if entry is not None:
                        yield entry
        else:
            for path in paths:
                entry = process(path)
                if entry is not None:
                    yield entry

    def build(self, config: ScanConfig) -> List[CatalogEntry]:
        """Return every entry sorted by category, label and path."""

        entries = sort_catalog(self.scan(config))
        LOGGER.info("Catalogued %d nodes under %s", len(entries), config.nodes_dir)
        return entries
