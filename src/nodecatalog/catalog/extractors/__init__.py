"""Heuristic extractors for node metadata."""

from .base import ContractFilter, ExtractionRule, FieldExtractor
from .rules import NodeExtractor, derive_category, flatten_array_body

__all__ = [
    "ContractFilter",
    "ExtractionRule",
    "FieldExtractor",
    "NodeExtractor",
    "derive_category",
    "flatten_array_body",
]
