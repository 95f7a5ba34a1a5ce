from __future__ import annotations

"""
Scan Result Data Models.

Defines the result object handed from the scan engine to the interface
layer, and the factories that build it.
"""

from dataclasses import dataclass, field
from typing import List

from fstree.domain.tree_models import FilesystemNode

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ScanResult:
    """
    Outcome of one scan or snapshot load.

    Attributes:
        ok: Flag indicating success or failure.
        error: Descriptive message in case of failure.
        source: Scanned directory or loaded snapshot path.
        root_name: Name of the root node.
        total_size: Recursive size of the root.
        node_count: Number of nodes in the tree, root included.
        lines: Rendered tree.
        snapshot_path: Where the snapshot was saved, if it was.
    """
    ok: bool
    error: str
    source: str
    root_name: str = ""
    total_size: int = 0
    node_count: int = 0
    lines: List[str] = field(default_factory=list)
    snapshot_path: str = ""

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_success_result(
        source: str,
        root: FilesystemNode,
        lines: List[str],
        snapshot_path: str = "",
) -> ScanResult:
    """Build a successful result from a finished tree."""
    node_count = sum(1 for _ in root.iter_nodes())
    return ScanResult(
        ok=True,
        error="",
        source=source,
        root_name=root.get_name(),
        total_size=root.get_size(),
        node_count=node_count,
        lines=list(lines),
        snapshot_path=snapshot_path,
    )


def create_error_result(error: str, source: str) -> ScanResult:
    """Build a failed result carrying only the error description."""
    return ScanResult(ok=False, error=error, source=source)
