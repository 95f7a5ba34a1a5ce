from __future__ import annotations

"""
Filesystem Snapshot Tree Data Models.

Provides the composite node types used to describe a filesystem snapshot:
a FileNode leaf and a DirectoryNode that exclusively owns an ordered list of
children. Size aggregation, rendering and the snapshot codec live in the
core layer; the node methods are thin facades over those services.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Iterator, List

from fstree.domain.constants import DEFAULT_INDENT_UNIT
from fstree.domain.errors import InvalidFieldError

# -----------------------------------------------------------------------------
# COMPONENT INTERFACE
# -----------------------------------------------------------------------------

class FilesystemNode(ABC):
    """
    Common interface of every entry in the snapshot tree.

    Attributes:
        name: Non-empty label of the entry. Siblings may share a name.
    """
    name: str

    def get_name(self) -> str:
        return self.name

    @abstractmethod
    def get_size(self) -> int:
        """Return the byte count of this entry (recursive for directories)."""

    def display(self, indent_level: int = 0, indent_unit: int = DEFAULT_INDENT_UNIT) -> str:
        """
        Render this entry and its descendants as indented text.

        Args:
            indent_level: Depth of this entry; each level adds indent_unit spaces.
            indent_unit: Number of spaces per indentation level.

        Returns:
            str: Newline-joined lines, without a trailing newline.
        """
        from fstree.core.analysis.tree_renderer import render_indented

        return "\n".join(render_indented(self, indent_level, indent_unit))

    def serialize(self) -> str:
        """Encode this subtree into a self-delimiting snapshot string."""
        from fstree.core.codec.serializer import encode

        return encode(self)

    def deserialize(self, data: str) -> None:
        """
        Reset this node in place from a snapshot string.

        The string is decoded completely before anything is replaced, so a
        failure leaves the node untouched.

        Raises:
            MalformedEncodingError: If the string violates the grammar.
            VariantMismatchError: If the encoded root is of the other variant.
        """
        from fstree.core.codec.parser import decode_into

        decode_into(self, data)

    def iter_nodes(self) -> Iterator[FilesystemNode]:
        """Yield this node and all of its descendants in pre-order."""
        stack: List[FilesystemNode] = [self]
        while stack:
            node = stack.pop()
            yield node
            if isinstance(node, DirectoryNode):
                stack.extend(reversed(node.children))


# -----------------------------------------------------------------------------
# LEAF
# -----------------------------------------------------------------------------

@dataclass
class FileNode(FilesystemNode):
    """
    Leaf entry with a fixed byte count.

    Attributes:
        name: File name.
        size: Non-negative size in bytes.
    """
    name: str
    size: int = 0

    def __post_init__(self) -> None:
        _validate_name(self.name)
        if isinstance(self.size, bool) or not isinstance(self.size, int):
            raise InvalidFieldError(
                f"File size must be an integer, received {type(self.size).__name__}."
            )
        if self.size < 0:
            raise InvalidFieldError(f"File size must be non-negative, received {self.size}.")

    def get_size(self) -> int:
        return self.size


# -----------------------------------------------------------------------------
# COMPOSITE
# -----------------------------------------------------------------------------

@dataclass(repr=False)
class DirectoryNode(FilesystemNode):
    """
    Composite entry owning an ordered sequence of children.

    The directory size is never stored; it is folded from the children on
    every call so it cannot diverge from its contents.

    Attributes:
        name: Directory name ("." is rendered without a trailing slash).
        children: Owned child nodes in insertion order.
    """
    name: str
    children: List[FilesystemNode] = field(default_factory=list)

    def __post_init__(self) -> None:
        _validate_name(self.name)
        initial = list(self.children)
        self.children = []
        for child in initial:
            self.add(child)

    def __repr__(self) -> str:
        return f"DirectoryNode(name={self.name!r}, children={len(self.children)})"

    def __len__(self) -> int:
        return len(self.children)

    def add(self, child: FilesystemNode) -> None:
        """
        Append a child to this directory.

        Raises:
            InvalidFieldError: If child is None, not a node, or this directory.
        """
        if child is None:
            raise InvalidFieldError("Cannot add a missing child to a directory.")
        if not isinstance(child, FilesystemNode):
            raise InvalidFieldError(
                f"Directory children must be nodes, received {type(child).__name__}."
            )
        if child is self:
            raise InvalidFieldError(f"Directory '{self.name}' cannot contain itself.")
        self.children.append(child)

    def get_size(self) -> int:
        from fstree.core.analysis.size import compute_size

        return compute_size(self)


# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _validate_name(name: object) -> None:
    if not isinstance(name, str):
        raise InvalidFieldError(f"Node name must be a string, received {type(name).__name__}.")
    if not name:
        raise InvalidFieldError("Node name must not be empty.")
