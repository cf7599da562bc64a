"""Catalog package providing scanning, extraction and emission utilities."""

from .emitters import CatalogWriter, read_catalog, render_structured, render_table
from .scanner import CatalogError, CatalogScanner, NodesDirectoryNotFound, ScanConfig, sort_catalog, walk_sources
from .schema import CatalogEntry, CatalogSummary

__all__ = [
    "CatalogEntry",
    "CatalogError",
    "CatalogScanner",
    "CatalogSummary",
    "CatalogWriter",
    "NodesDirectoryNotFound",
    "ScanConfig",
    "read_catalog",
    "render_structured",
    "render_table",
    "sort_catalog",
    "walk_sources",
]
