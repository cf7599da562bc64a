"""Named pattern rules applied in precedence order to raw source text."""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Callable, Optional, Pattern, Sequence, Tuple

from ...utils.logging import get_logger


LOGGER = get_logger(__name__)


def _strip(value: str) -> str:
    return value.strip()


@dataclass(frozen=True)
class ExtractionRule:
    """A single heuristic: ``pattern`` captures the raw value in group ``group``."""

    name: str
    pattern: Pattern[str]
    transform: Callable[[str], str] = _strip
    group: int = 1

    @classmethod
    def compile(
        cls, name: str, regex: str, transform: Callable[[str], str] = _strip, group: int = 1
    ) -> "ExtractionRule":
        return cls(name=name, pattern=re.compile(regex), transform=transform, group=group)

    def apply(self, text: str) -> Optional[str]:
        """Return the transformed capture, or ``None`` when the pattern does not match."""

        match = self.pattern.search(text)
        if match is None:
            return None
        return self.transform(match.group(self.group))


@dataclass(frozen=True)
class FieldExtractor:
    """Try ``rules`` in order; the first match wins, even when its value is empty."""

    field: str
    rules: Sequence[ExtractionRule]
    default: str = ""

    def _first(self, text: str) -> Tuple[Optional[str], Optional[str]]:
        for rule in self.rules:
            value = rule.apply(text)
            if value is None:
                continue
            return rule.name, value
        return None, None

    def extract(self, text: str, default: Optional[str] = None) -> str:
        name, value = self._first(text)
        if name is None:
            LOGGER.debug("No rule matched for field %s", self.field)
            return self.default if default is None else default
        return value  # type: ignore[return-value]

    def explain(self, text: str) -> Optional[str]:
        """Return the name of the rule that would supply the value, if any."""

        return self._first(text)[0]


@dataclass(frozen=True)
class ContractFilter:
    """Textual check that a file declares ``implements <contract_name>``."""

    contract_name: str = "INode"
    pattern: Pattern[str] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        regex = rf"implements\s+{re.escape(self.contract_name)}\b"
        object.__setattr__(self, "pattern", re.compile(regex))

    def matches(self, text: str) -> bool:
        return self.pattern.search(text) is not None
