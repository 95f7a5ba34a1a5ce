from __future__ import annotations

"""
Scan Engine.

Runs one end-to-end job from a validated configuration: obtain a tree
(scan a directory or load a snapshot), render it, and optionally persist
it as a snapshot.
"""

import logging
from typing import Any, Dict, List, Optional

from fstree.core.analysis.tree_generator import build_tree
from fstree.core.analysis.tree_renderer import render_tree_structure
from fstree.core.services.snapshot import load_snapshot, save_snapshot
from fstree.domain.scan_models import ScanResult, create_success_result
from fstree.domain.tree_models import FilesystemNode

logger = logging.getLogger(__name__)


def run_scan(cfg: Dict[str, Any], load_path: Optional[str] = None) -> ScanResult:
    """
    Execute a scan (or snapshot load) described by a validated configuration.

    Args:
        cfg: Output of validate_config.
        load_path: If given, render this snapshot instead of scanning.

    Returns:
        ScanResult: Successful result.

    Raises:
        OSError: On unreadable input or unwritable snapshot destination.
        FsTreeError: If a loaded snapshot is malformed.
    """
    root: FilesystemNode
    if load_path:
        source = load_path
        root = load_snapshot(load_path)
    else:
        source = cfg["input_path"]
        root = build_tree(
            source,
            exclude_patterns=cfg["exclude_patterns"],
            follow_symlinks=cfg["follow_symlinks"],
        )

    lines: List[str] = []
    render_tree_structure(
        root, lines, style=cfg["render_style"], indent_unit=cfg["indent_unit"]
    )

    saved_path = ""
    if cfg["snapshot_path"]:
        saved_path = save_snapshot(root, cfg["snapshot_path"])

    logger.debug(f"Rendered {len(lines)} lines for '{root.get_name()}'.")
    return create_success_result(source, root, lines, snapshot_path=saved_path)
