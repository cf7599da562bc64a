from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from tests.sources import CHAT_NODE, HELPER, OPENAI_NODE


@pytest.fixture
def write_file() -> Callable[[Path, str], Path]:
    def _write(path: Path, text: str) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def flowise_root(tmp_path: Path, write_file: Callable[[Path, str], Path]) -> Path:
    """A base directory holding a miniature Flowise nodes tree."""

    nodes = tmp_path / "Flowise" / "packages" / "components" / "nodes"
    write_file(nodes / "chatmodels" / "ChatOpenAI" / "ChatOpenAI.ts", OPENAI_NODE)
    write_file(nodes / "chat" / "ChatNode.ts", CHAT_NODE)
    write_file(nodes / "chat" / "utils.ts", HELPER)
    write_file(nodes / "chat" / "README.md", "implements INode")
    return tmp_path
