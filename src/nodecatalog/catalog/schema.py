"""Pydantic models describing the on-disk catalog schema."""
from __future__ import annotations

from typing import Any, Dict, Iterable, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


SUMMARY_LIMIT = 400


class CatalogEntry(BaseModel):
    """Metadata describing a single component node discovered on disk."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    category: str = ""
    label: str = Field(min_length=1)
    description: str = ""
    inputs_summary: str = Field(default="", alias="inputsSummary", max_length=SUMMARY_LIMIT)
    outputs_summary: str = Field(default="", alias="outputsSummary", max_length=SUMMARY_LIMIT)
    path: str

    @field_validator("path")
    @classmethod
    def validate_path(cls, value: str) -> str:
        if "\\" in value:
            raise ValueError(f"path must use forward slashes; got {value!r}")
        return value

    def sort_key(self) -> Tuple[str, str, str]:
        return (self.category, self.label, self.path)

    def as_record(self) -> Dict[str, Any]:
        """Return a JSON-serialisable mapping using the published field names."""

        return self.model_dump(by_alias=True)


class CatalogSummary(BaseModel):
    """Aggregate summary information of a catalog."""

    total_entries: int
    categories: Dict[str, int]

    @classmethod
    def from_entries(cls, entries: Iterable[CatalogEntry]) -> "CatalogSummary":
        entries_list = list(entries)
        counts: Dict[str, int] = {}
        for entry in entries_list:
            counts[entry.category] = counts.get(entry.category, 0) + 1
        return cls(total_entries=len(entries_list), categories=dict(sorted(counts.items())))
