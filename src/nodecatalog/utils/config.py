"""Configuration helpers for the node catalog."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Tuple

import yaml
from pydantic import BaseModel, ConfigDict, Field

from ..catalog.scanner import ScanConfig
from ..catalog.schema import SUMMARY_LIMIT


class CatalogSettings(BaseModel):
    """Application level configuration."""

    model_config = ConfigDict(extra="forbid")

    nodes_dir: Path = Field(default=Path("Flowise/packages/components/nodes"))
    json_output: Path = Field(default=Path("catalog.flowise.nodes.json"))
    markdown_output: Path = Field(default=Path("catalog.flowise.nodes.md"))
    extension: str = ".ts"
    contract_name: str = "INode"
    anchor: str = "nodes"
    summary_limit: int = Field(default=SUMMARY_LIMIT, ge=0, le=SUMMARY_LIMIT)
    exclude_dirs: Tuple[str, ...] = ()
    follow_symlinks: bool = False
    workers: int = Field(default=1, ge=1)
    title: str = "Flowise Node Catalog"
    log_level: str = "INFO"

    def to_scan_config(self, base_dir: Path) -> ScanConfig:
        return ScanConfig(
            base_dir=base_dir,
            nodes_dir=self.nodes_dir,
            extension=self.extension,
            contract_name=self.contract_name,
            anchor=self.anchor,
            summary_limit=self.summary_limit,
            exclude_dirs=self.exclude_dirs,
            follow_symlinks=self.follow_symlinks,
            workers=self.workers,
        )


def load_config(path: Path) -> CatalogSettings:
    """Load configuration from a YAML file."""

    data: Dict[str, Any] = {}
    if path.exists():
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"malformed YAML: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"expected a mapping, got {type(data).__name__}")
    return CatalogSettings(**data)
