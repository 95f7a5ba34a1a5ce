from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Isolation of the user data directory and the logging subsystem.
3. Shared snapshot trees used across unit tests.
"""

import os
import sys
from pathlib import Path

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from fstree.domain.tree_models import DirectoryNode, FileNode  # noqa: E402
from fstree.infra.logging import shutdown_logging  # noqa: E402


# -----------------------------------------------------------------------------
# Environment Isolation
# -----------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def isolated_data_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the user data directory at a per-test temporary folder."""
    home = tmp_path / "fstree_home"
    monkeypatch.setenv("FSTREE_HOME", str(home))
    return home


@pytest.fixture(autouse=True)
def reset_logging():
    """Tear down any logging infrastructure a test installed."""
    yield
    shutdown_logging()


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def flat_tree() -> DirectoryNode:
    """
    Directory "root" holding two files.

    Structure:
    root/
      a.txt (10)
      b.txt (20)
    """
    root = DirectoryNode("root")
    root.add(FileNode("a.txt", 10))
    root.add(FileNode("b.txt", 20))
    return root


@pytest.fixture
def nested_tree() -> DirectoryNode:
    """
    Mixed tree with nesting, an empty directory and duplicate names.

    Structure:
    project/
      src/
        main.py (120)
        util/
          helpers.py (30)
      docs/
      README.md (7)
      README.md (8)
    """
    util = DirectoryNode("util", [FileNode("helpers.py", 30)])
    src = DirectoryNode("src", [FileNode("main.py", 120), util])
    return DirectoryNode(
        "project",
        [src, DirectoryNode("docs"), FileNode("README.md", 7), FileNode("README.md", 8)],
    )


def make_chain(depth: int, leaf_size: int = 1) -> DirectoryNode:
    """Build a directory chain 'depth' levels deep ending in one file."""
    root = DirectoryNode("d0")
    current = root
    for i in range(1, depth):
        nxt = DirectoryNode(f"d{i}")
        current.add(nxt)
        current = nxt
    current.add(FileNode("leaf", leaf_size))
    return root


@pytest.fixture
def deep_tree() -> DirectoryNode:
    """A chain far deeper than the default interpreter recursion limit."""
    return make_chain(10_000, leaf_size=42)
