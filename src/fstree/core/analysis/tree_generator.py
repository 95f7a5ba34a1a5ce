from __future__ import annotations

"""
Directory Tree Generator.

Walks a real directory and builds the matching snapshot tree. Entries are
visited depth-first in name order: every subdirectory is fully populated
before its next sibling is added. Filesystem failures are logged and the
affected entry is degraded (empty directory, zero-byte file) rather than
aborting the scan.
"""

import logging
import os
import re
from dataclasses import dataclass
from typing import Iterator, List, Optional, Set, Tuple

from fstree.core.analysis.tree_renderer import render_tree_structure
from fstree.core.filters import compile_patterns, matches_any
from fstree.domain.constants import DEFAULT_INDENT_UNIT, DEFAULT_RENDER_STYLE
from fstree.domain.tree_models import DirectoryNode, FileNode
from fstree.infra.fs import write_text

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def build_tree(
        input_path: str,
        exclude_patterns: Optional[List[str]] = None,
        follow_symlinks: bool = False,
        root_name: Optional[str] = None,
) -> DirectoryNode:
    """
    Scan a directory into a DirectoryNode.

    Args:
        input_path: Directory to scan.
        exclude_patterns: Regexes; entries whose name matches any are skipped.
        follow_symlinks: Treat symlinks as their targets instead of skipping them.
        root_name: Label of the root node; defaults to the directory base name.

    Returns:
        DirectoryNode: Root of the scanned tree.

    Raises:
        NotADirectoryError: If input_path is not a directory.
    """
    abs_path = os.path.abspath(input_path)
    if not os.path.isdir(abs_path):
        raise NotADirectoryError(f"Not a directory: {input_path}")

    exclude_rx = compile_patterns(exclude_patterns or [])
    root = DirectoryNode(name=root_name or os.path.basename(abs_path) or abs_path)
    logger.info(f"Scanning directory: {abs_path}")

    visited: Set[Tuple[int, int]] = set()
    _mark_visited(abs_path, visited)

    stack: List[_Frame] = [_Frame(root, _iter_entries(abs_path, exclude_rx))]
    files = 0
    dirs = 0

    while stack:
        frame = stack[-1]
        entry = next(frame.entries, None)
        if entry is None:
            stack.pop()
            continue

        is_link = _safe_is_symlink(entry)
        if is_link and not follow_symlinks:
            logger.debug(f"Skipping symlink: {entry.path}")
            continue

        if _safe_is_dir(entry, follow_symlinks):
            if follow_symlinks and not _mark_visited(entry.path, visited):
                logger.warning(f"Skipping already visited directory (symlink loop?): {entry.path}")
                continue
            sub = DirectoryNode(name=entry.name)
            frame.node.add(sub)
            dirs += 1
            stack.append(_Frame(sub, _iter_entries(entry.path, exclude_rx)))
        elif _safe_is_file(entry, follow_symlinks):
            frame.node.add(FileNode(name=entry.name, size=_file_size(entry, follow_symlinks)))
            files += 1
        else:
            logger.debug(f"Skipping special entry: {entry.path}")

    logger.info(f"Scan finished: {dirs} directories, {files} files.")
    return root


def generate_directory_tree(
        input_path: str,
        exclude_patterns: Optional[List[str]] = None,
        follow_symlinks: bool = False,
        style: str = DEFAULT_RENDER_STYLE,
        indent_unit: int = DEFAULT_INDENT_UNIT,
        print_to_log: bool = False,
        save_path: str = "",
) -> List[str]:
    """
    Scan a directory and return its rendered tree.

    Args:
        input_path: Directory to scan.
        exclude_patterns: Exclusion regexes.
        follow_symlinks: Whether symlinks are followed.
        style: Render style ("indent" or "ascii").
        indent_unit: Spaces per level for the indent style.
        print_to_log: Whether to log the rendered tree at INFO.
        save_path: Optional file path to persist the rendered text.

    Returns:
        List[str]: Rendered lines.
    """
    root = build_tree(input_path, exclude_patterns, follow_symlinks)

    lines: List[str] = []
    render_tree_structure(root, lines, style=style, indent_unit=indent_unit)

    if print_to_log:
        logger.info("Tree Preview:\n" + "\n".join(lines))

    if save_path:
        write_text(save_path, "\n".join(lines) + "\n")
        logger.info(f"Tree saved to file: {save_path}")

    return lines

# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

@dataclass
class _Frame:
    node: DirectoryNode
    entries: Iterator[os.DirEntry]


def _iter_entries(path: str, exclude_rx: List[re.Pattern]) -> Iterator[os.DirEntry]:
    """List a directory sorted by name, dropping excluded names."""
    try:
        with os.scandir(path) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as e:
        logger.warning(f"Cannot read directory '{path}': {e}")
        return iter(())
    return iter([e for e in entries if not matches_any(e.name, exclude_rx)])


def _mark_visited(path: str, visited: Set[Tuple[int, int]]) -> bool:
    """Record a directory identity; False if it was already seen."""
    try:
        st = os.stat(path)
    except OSError:
        return True
    key = (st.st_dev, st.st_ino)
    if key in visited:
        return False
    visited.add(key)
    return True


def _safe_is_symlink(entry: os.DirEntry) -> bool:
    try:
        return entry.is_symlink()
    except OSError:
        return False


def _safe_is_dir(entry: os.DirEntry, follow_symlinks: bool) -> bool:
    try:
        return entry.is_dir(follow_symlinks=follow_symlinks)
    except OSError:
        return False


def _safe_is_file(entry: os.DirEntry, follow_symlinks: bool) -> bool:
    try:
        return entry.is_file(follow_symlinks=follow_symlinks)
    except OSError:
        return False


def _file_size(entry: os.DirEntry, follow_symlinks: bool) -> int:
    try:
        return entry.stat(follow_symlinks=follow_symlinks).st_size
    except OSError as e:
        logger.warning(f"Could not get size for file '{entry.path}': {e}")
        return 0
