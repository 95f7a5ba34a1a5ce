from __future__ import annotations

"""
Integration tests for the Directory Tree Generator.

Builds real directory layouts under tmp_path and verifies the resulting
snapshot tree: depth-first name order, file sizes, exclusions, symlink
handling and persistence of the rendered text.
"""

import os
from pathlib import Path

import pytest

from fstree.core.analysis.tree_generator import build_tree, generate_directory_tree
from fstree.domain.tree_models import DirectoryNode, FileNode


@pytest.fixture
def project_structure(tmp_path: Path) -> Path:
    """
    Structure:
    /root
      /a
        x.bin      (3 bytes)
      /.git
        config     (6 bytes)
      /empty
      b.txt        (5 bytes)
    """
    root = tmp_path / "root"
    root.mkdir()
    (root / "a").mkdir()
    (root / "a" / "x.bin").write_bytes(b"abc")
    (root / ".git").mkdir()
    (root / ".git" / "config").write_bytes(b"[core]")
    (root / "empty").mkdir()
    (root / "b.txt").write_bytes(b"hello")
    return root


def test_build_tree_maps_filesystem(project_structure: Path) -> None:
    tree = build_tree(str(project_structure), exclude_patterns=[r"^\.git$"])

    assert tree.get_name() == "root"
    assert [c.name for c in tree.children] == ["a", "b.txt", "empty"]
    assert tree.get_size() == 8

    a, b_txt, empty = tree.children
    assert isinstance(a, DirectoryNode)
    assert a.children == [FileNode("x.bin", 3)]
    assert b_txt == FileNode("b.txt", 5)
    assert isinstance(empty, DirectoryNode) and empty.children == []


def test_build_tree_without_exclusions_includes_hidden(project_structure: Path) -> None:
    tree = build_tree(str(project_structure))
    assert [c.name for c in tree.children] == [".git", "a", "b.txt", "empty"]
    assert tree.get_size() == 14


def test_build_tree_custom_root_name(project_structure: Path) -> None:
    tree = build_tree(str(project_structure), root_name=".")
    assert tree.display().startswith(". (total")


def test_build_tree_rejects_non_directory(project_structure: Path) -> None:
    with pytest.raises(NotADirectoryError):
        build_tree(str(project_structure / "b.txt"))


def test_invalid_exclusion_pattern_is_ignored(project_structure: Path) -> None:
    tree = build_tree(str(project_structure), exclude_patterns=["(", r"^\.git$"])
    assert ".git" not in [c.name for c in tree.children]


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
def test_symlinks_skipped_unless_followed(project_structure: Path) -> None:
    try:
        os.symlink(project_structure / "b.txt", project_structure / "link.txt")
    except OSError:
        pytest.skip("cannot create symlinks here")

    skipped = build_tree(str(project_structure), exclude_patterns=[r"^\.git$"])
    assert "link.txt" not in [c.name for c in skipped.children]

    followed = build_tree(str(project_structure), exclude_patterns=[r"^\.git$"], follow_symlinks=True)
    assert FileNode("link.txt", 5) in followed.children


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
def test_symlink_loop_terminates(project_structure: Path) -> None:
    try:
        os.symlink(project_structure, project_structure / "a" / "loop", target_is_directory=True)
    except OSError:
        pytest.skip("cannot create symlinks here")

    tree = build_tree(str(project_structure), follow_symlinks=True)
    a = tree.children[1]
    assert [c.name for c in a.children] == ["x.bin"]


def test_generate_directory_tree_saves_rendering(project_structure: Path, tmp_path: Path) -> None:
    save_file = tmp_path / "out" / "tree.txt"

    lines = generate_directory_tree(
        str(project_structure),
        exclude_patterns=[r"^\.git$"],
        save_path=str(save_file),
    )

    assert lines[0] == "root/ (total 8 bytes)"
    assert "    x.bin (3 bytes)" in lines
    assert save_file.read_text(encoding="utf-8") == "\n".join(lines) + "\n"


def test_generate_directory_tree_ascii_style(project_structure: Path) -> None:
    lines = generate_directory_tree(
        str(project_structure), exclude_patterns=[r"^\.git$"], style="ascii"
    )
    assert lines == [
        "root/ (total 8 bytes)",
        "├── a/ (total 3 bytes)",
        "│   └── x.bin (3 bytes)",
        "├── b.txt (5 bytes)",
        "└── empty/ (total 0 bytes)",
    ]
