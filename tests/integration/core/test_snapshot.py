from __future__ import annotations

"""
Integration tests for snapshot persistence.
"""

from pathlib import Path

import pytest

from fstree.core.services.snapshot import load_snapshot, save_snapshot
from fstree.domain.errors import MalformedEncodingError
from fstree.domain.tree_models import DirectoryNode, FileNode


def test_save_and_load_snapshot(nested_tree, tmp_path: Path) -> None:
    target = tmp_path / "snaps" / "project.fst"

    written = save_snapshot(nested_tree, str(target))

    assert written == str(target)
    assert target.read_text(encoding="utf-8").startswith("FST1|D7:project4[")
    loaded = load_snapshot(str(target))
    assert loaded == nested_tree
    assert loaded.display() == nested_tree.display()


def test_newlines_in_names_survive_the_file(tmp_path: Path) -> None:
    tree = DirectoryNode("d", [FileNode("a\r\nb", 1)])
    target = tmp_path / "crlf.fst"
    save_snapshot(tree, str(target))
    assert load_snapshot(str(target)) == tree


def test_load_corrupted_snapshot(tmp_path: Path) -> None:
    target = tmp_path / "bad.fst"
    target.write_text("FST1|D1:a1[", encoding="utf-8")
    with pytest.raises(MalformedEncodingError):
        load_snapshot(str(target))


def test_load_missing_snapshot(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_snapshot(str(tmp_path / "missing.fst"))


def test_load_non_utf8_snapshot(tmp_path: Path) -> None:
    target = tmp_path / "binary.fst"
    target.write_bytes(b"FST1|F1:\xff1;")
    with pytest.raises(MalformedEncodingError) as exc_info:
        load_snapshot(str(target))
    assert "not valid UTF-8" in str(exc_info.value)
