from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable

import pytest

from nodecatalog.catalog import CatalogScanner, NodesDirectoryNotFound, ScanConfig, walk_sources
from nodecatalog.catalog.scanner import read_source


def test_build_catalogs_only_nodes(flowise_root: Path) -> None:
    entries = CatalogScanner().build(ScanConfig(base_dir=flowise_root))
    assert [entry.label for entry in entries] == ["Chat Node", "ChatOpenAI"]
    assert [entry.category for entry in entries] == ["chat", "chatmodels"]
    assert entries[0].path == "Flowise/packages/components/nodes/chat/ChatNode.ts"
    assert all("\\" not in entry.path for entry in entries)


def test_paths_relative_to_base_dir(tmp_path: Path, write_file: Callable[[Path, str], Path]) -> None:
    write_file(tmp_path / "nodes" / "chat" / "ChatNode.ts", "class ChatNode implements INode {}")
    entries = CatalogScanner().build(ScanConfig(base_dir=tmp_path, nodes_dir=Path("nodes")))
    assert len(entries) == 1
    assert entries[0].path == "nodes/chat/ChatNode.ts"
    assert entries[0].label == "ChatNode"


def test_missing_root_is_fatal(tmp_path: Path) -> None:
    with pytest.raises(NodesDirectoryNotFound) as info:
        CatalogScanner().build(ScanConfig(base_dir=tmp_path))
    assert isinstance(info.value, FileNotFoundError)
    assert info.value.path == tmp_path / "Flowise" / "packages" / "components" / "nodes"
    assert "git clone" in info.value.hint


def test_file_as_root_is_fatal(tmp_path: Path, write_file: Callable[[Path, str], Path]) -> None:
    write_file(tmp_path / "nodes", "not a directory")
    with pytest.raises(NodesDirectoryNotFound):
        CatalogScanner().build(ScanConfig(base_dir=tmp_path, nodes_dir=Path("nodes")))


def test_empty_root_gives_empty_catalog(tmp_path: Path) -> None:
    (tmp_path / "nodes").mkdir()
    assert CatalogScanner().build(ScanConfig(base_dir=tmp_path, nodes_dir=Path("nodes"))) == []


def test_worker_count_does_not_change_output(flowise_root: Path, write_file: Callable[[Path, str], Path]) -> None:
    nodes = flowise_root / "Flowise" / "packages" / "components" / "nodes"
    for index in range(20):
        write_file(nodes / f"cat{index % 3}" / f"Node{index}.ts", f"class N implements INode {{ label = 'Node {index:02d}' }}")
    serial = CatalogScanner().build(ScanConfig(base_dir=flowise_root))
    threaded = CatalogScanner().build(ScanConfig(base_dir=flowise_root, workers=4))
    assert serial == threaded
    assert len(serial) == 22


def test_duplicate_labels_are_kept_and_ordered_by_path(tmp_path: Path, write_file: Callable[[Path, str], Path]) -> None:
    for name in ("B.ts", "A.ts"):
        write_file(tmp_path / "nodes" / "x" / name, "class N implements INode { label = 'Same' }")
    entries = CatalogScanner().build(ScanConfig(base_dir=tmp_path, nodes_dir=Path("nodes")))
    assert [entry.path for entry in entries] == ["nodes/x/A.ts", "nodes/x/B.ts"]


def test_exclude_dirs(flowise_root: Path) -> None:
    config = ScanConfig(base_dir=flowise_root, exclude_dirs=("chatmodels",))
    assert [entry.label for entry in CatalogScanner().build(config)] == ["Chat Node"]


def test_invalid_workers() -> None:
    with pytest.raises(ValueError):
        ScanConfig(workers=0)


def test_walk_sources_filters_extension(flowise_root: Path) -> None:
    root = flowise_root / "Flowise" / "packages" / "components" / "nodes"
    names = [path.name for path in walk_sources(root)]
    assert names == ["ChatNode.ts", "utils.ts", "ChatOpenAI.ts"]


def test_walk_errors_are_logged(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING):
        assert list(walk_sources(tmp_path / "missing")) == []
    assert "Error walking directory" in caplog.text


def test_unlistable_subtree_does_not_stop_the_walk(
    flowise_root: Path, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    real_scandir = os.scandir

    def fake_scandir(path="."):
        if os.path.basename(os.fspath(path)) == "chatmodels":
            raise PermissionError(13, "Permission denied", os.fspath(path))
        return real_scandir(path)

    monkeypatch.setattr(os, "scandir", fake_scandir)
    with caplog.at_level(logging.WARNING):
        entries = CatalogScanner().build(ScanConfig(base_dir=flowise_root))
    assert [entry.label for entry in entries] == ["Chat Node"]
    assert "Error walking directory" in caplog.text
    assert "chatmodels" in caplog.text


def test_unreadable_file_is_skipped(
    flowise_root: Path, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    original = Path.read_text

    def fake_read_text(self: Path, *args, **kwargs) -> str:
        if self.name == "ChatNode.ts":
            raise PermissionError("denied")
        return original(self, *args, **kwargs)

    monkeypatch.setattr(Path, "read_text", fake_read_text)
    with caplog.at_level(logging.WARNING):
        entries = CatalogScanner().build(ScanConfig(base_dir=flowise_root))
    assert [entry.label for entry in entries] == ["ChatOpenAI"]
    assert "Unable to read" in caplog.text


def test_read_source_replaces_invalid_bytes(tmp_path: Path) -> None:
    path = tmp_path / "bad.ts"
    path.write_bytes(b"implements INode \xff")
    assert read_source(path).startswith("implements INode")
