"""Rule chains used to pull node metadata out of Flowise TypeScript sources."""
from __future__ import annotations

import re
from functools import partial
from typing import Optional

from ...utils.logging import get_logger
from ..schema import SUMMARY_LIMIT, CatalogEntry
from .base import ContractFilter, ExtractionRule, FieldExtractor


LOGGER = get_logger(__name__)

QUOTED = r"""(['"`])([\s\S]*?)\1"""
TYPE_ANNOTATION = r"(?::\s*[\w$.<>]+(?:\[\])*\s*)?"
_WHITESPACE = re.compile(r"\s+")


def flatten_array_body(body: str, limit: int = SUMMARY_LIMIT) -> str:
    """Collapse a bracketed body into one line of at most ``limit`` characters."""

    lines = (line.strip() for line in body.splitlines())
    joined = " ".join(line for line in lines if line)
    return _WHITESPACE.sub(" ", joined)[:limit]


def derive_category(rel_path: str, anchor: str = "nodes") -> str:
    """Return the path segment following ``anchor`` or an empty string."""

    parts = rel_path.split("/")
    try:
        index = parts.index(anchor)
    except ValueError:
        return ""
    if index + 1 < len(parts):
        return parts[index + 1]
    return ""


def strip_extension(filename: str, extension: str) -> str:
    if extension and filename.endswith(extension) and filename != extension:
        return filename[: -len(extension)]
    return filename


def assignment_rule(attribute: str) -> ExtractionRule:
    return ExtractionRule.compile(
        f"{attribute}-assignment",
        rf"\b{attribute}\s*{TYPE_ANNOTATION}=\s*{QUOTED}",
        group=2,
    )


def key_rule(key: str) -> ExtractionRule:
    return ExtractionRule.compile(f"{key}-key", rf"\b{key}\s*:\s*{QUOTED}", group=2)


def array_rules(attribute: str, limit: int = SUMMARY_LIMIT) -> list[ExtractionRule]:
    flatten = partial(flatten_array_body, limit=limit)
    return [
        ExtractionRule.compile(
            f"qualified-{attribute}",
            rf"[\w$]+\.{attribute}\s*=\s*\[([\s\S]*?)\]",
            transform=flatten,
        ),
        ExtractionRule.compile(
            f"bare-{attribute}",
            rf"\b{attribute}\s*{TYPE_ANNOTATION}=\s*\[([\s\S]*?)\]",
            transform=flatten,
        ),
    ]


def label_extractor() -> FieldExtractor:
    return FieldExtractor("label", [assignment_rule("label"), key_rule("name")])


def description_extractor() -> FieldExtractor:
    return FieldExtractor("description", [assignment_rule("description"), key_rule("description")])


def summary_extractor(attribute: str, limit: int = SUMMARY_LIMIT) -> FieldExtractor:
    return FieldExtractor(f"{attribute}_summary", array_rules(attribute, limit))


class NodeExtractor:
    """Decide whether a source text is a node and build its catalog entry."""

    def __init__(
        self,
        contract_name: str = "INode",
        anchor: str = "nodes",
        extension: str = ".ts",
        summary_limit: int = SUMMARY_LIMIT,
    ) -> None:
        self.contract = ContractFilter(contract_name)
        self.anchor = anchor
        self.extension = extension
        self.label = label_extractor()
        self.description = description_extractor()
        self.inputs = summary_extractor("inputs", summary_limit)
        self.outputs = summary_extractor("outputs", summary_limit)

    def extract(self, text: str, rel_path: str) -> Optional[CatalogEntry]:
        """Return the entry for ``text`` or ``None`` when it is not a node."""

        if not self.contract.matches(text):
            return None
        filename = rel_path.rsplit("/", 1)[-1]
        fallback = strip_extension(filename, self.extension)
        label = self.label.extract(text)
        if not label:
            LOGGER.debug("No label in %s, using file name", rel_path)
            label = fallback or filename
        return CatalogEntry(
            category=derive_category(rel_path, self.anchor),
            label=label,
            description=self.description.extract(text),
            inputs_summary=self.inputs.extract(text),
            outputs_summary=self.outputs.extract(text),
            path=rel_path,
        )
