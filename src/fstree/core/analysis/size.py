from __future__ import annotations

"""
Size Aggregation Service.

Folds file sizes over a snapshot subtree. Both entry points walk the tree
with an explicit stack so tree depth is bounded only by memory, never by the
interpreter recursion limit.
"""

import logging
from typing import Dict, List, Tuple

from fstree.domain.tree_models import DirectoryNode, FileNode, FilesystemNode

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def compute_size(node: FilesystemNode) -> int:
    """
    Return the total byte count of a subtree.

    Args:
        node: File or directory at the top of the subtree.

    Returns:
        int: The stored size for a file, the sum over all descendant files
             for a directory (0 when it holds no files).
    """
    if isinstance(node, FileNode):
        return node.size

    total = 0
    stack: List[FilesystemNode] = [node]
    while stack:
        current = stack.pop()
        if isinstance(current, FileNode):
            total += current.size
        elif isinstance(current, DirectoryNode):
            stack.extend(current.children)
    return total


def compute_subtree_sizes(root: FilesystemNode) -> Dict[int, int]:
    """
    Compute the size of every directory of a subtree in one post-order pass.

    Used by the renderer so that printing a tree stays linear in its size
    instead of re-folding each directory from scratch.

    Args:
        root: Top of the subtree.

    Returns:
        Dict[int, int]: Mapping of id(directory) to its total size.
    """
    sizes: Dict[int, int] = {}
    if not isinstance(root, DirectoryNode):
        return sizes

    # (directory, children_expanded)
    stack: List[Tuple[DirectoryNode, bool]] = [(root, False)]
    while stack:
        directory, expanded = stack.pop()
        if not expanded:
            stack.append((directory, True))
            for child in directory.children:
                if isinstance(child, DirectoryNode):
                    stack.append((child, False))
            continue

        total = 0
        for child in directory.children:
            if isinstance(child, FileNode):
                total += child.size
            else:
                total += sizes[id(child)]
        sizes[id(directory)] = total

    logger.debug(f"Aggregated sizes for {len(sizes)} directories.")
    return sizes
