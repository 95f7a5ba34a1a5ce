from __future__ import annotations

"""
Tree Renderer.

Converts snapshot trees into human-readable text. Two layouts are offered:
plain space indentation (the layout used by FilesystemNode.display) and
ASCII connectors (├──, └──). Rendering is display-only and is never parsed
back; the snapshot codec is the reversible representation.
"""

from typing import Dict, List, Tuple

from fstree.core.analysis.size import compute_subtree_sizes
from fstree.domain.constants import DEFAULT_INDENT_UNIT, DEFAULT_RENDER_STYLE, ROOT_DOT_LABEL
from fstree.domain.tree_models import DirectoryNode, FileNode, FilesystemNode

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def render_tree_structure(
        node: FilesystemNode,
        lines: List[str],
        style: str = DEFAULT_RENDER_STYLE,
        indent_level: int = 0,
        indent_unit: int = DEFAULT_INDENT_UNIT,
) -> None:
    """
    Append the rendering of a subtree to an accumulator list.

    Args:
        node: Top of the subtree to render.
        lines: Accumulator list for output lines.
        style: "indent" for space indentation, "ascii" for connectors.
        indent_level: Starting depth (indent style only).
        indent_unit: Spaces per depth level (indent style only).

    Raises:
        ValueError: If the style is unknown.
    """
    if style == "indent":
        lines.extend(render_indented(node, indent_level, indent_unit))
    elif style == "ascii":
        lines.extend(render_ascii(node))
    else:
        raise ValueError(f"Unknown render style: {style!r}")


def render_indented(
        node: FilesystemNode,
        indent_level: int = 0,
        indent_unit: int = DEFAULT_INDENT_UNIT,
) -> List[str]:
    """
    Render a subtree with indent_level * indent_unit leading spaces per line.

    Children appear after their directory, one level deeper, in child order.

    Returns:
        List[str]: One line per node, in pre-order.
    """
    sizes = compute_subtree_sizes(node)
    lines: List[str] = []

    stack: List[Tuple[FilesystemNode, int]] = [(node, indent_level)]
    while stack:
        current, level = stack.pop()
        lines.append(" " * (level * indent_unit) + _label(current, sizes))
        if isinstance(current, DirectoryNode):
            for child in reversed(current.children):
                stack.append((child, level + 1))

    return lines


def render_ascii(node: FilesystemNode) -> List[str]:
    """
    Render a subtree using box-drawing connectors.

    The top node is printed bare; descendants use "├── " / "└── " with
    "│   " continuation columns for open ancestors.

    Returns:
        List[str]: One line per node, in pre-order.
    """
    sizes = compute_subtree_sizes(node)
    lines: List[str] = [_label(node, sizes)]
    if not isinstance(node, DirectoryNode):
        return lines

    # (node, prefix, is_last)
    stack: List[Tuple[FilesystemNode, str, bool]] = []
    _push_children(stack, node, "")
    while stack:
        current, prefix, is_last = stack.pop()
        connector = "└── " if is_last else "├── "
        lines.append(f"{prefix}{connector}{_label(current, sizes)}")
        if isinstance(current, DirectoryNode):
            _push_children(stack, current, prefix + ("    " if is_last else "│   "))

    return lines

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _push_children(
        stack: List[Tuple[FilesystemNode, str, bool]],
        directory: DirectoryNode,
        prefix: str,
) -> None:
    total = len(directory.children)
    for i in range(total - 1, -1, -1):
        stack.append((directory.children[i], prefix, i == total - 1))


def _label(node: FilesystemNode, sizes: Dict[int, int]) -> str:
    """Format the single-line description of a node."""
    if isinstance(node, FileNode):
        return f"{node.name} ({node.size} bytes)"

    total = sizes[id(node)]
    # The scan root "." reads better without a trailing slash
    if node.name == ROOT_DOT_LABEL:
        return f"{node.name} (total {total} bytes)"
    return f"{node.name}/ (total {total} bytes)"
