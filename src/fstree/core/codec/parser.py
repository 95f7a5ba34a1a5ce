from __future__ import annotations

"""
Snapshot Parser.

Rebuilds snapshot trees from strings produced by the serializer. The parser
moves a single cursor left to right, reads the variant tag first and then
every field in the order the serializer wrote it. Directory child lists are
delimited twice (declared count and closing bracket) and the two must agree.

Open directories are kept on an explicit stack, so nesting depth is not
limited by the interpreter recursion limit.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from fstree.domain.constants import (
    CHILDREN_CLOSE,
    CHILDREN_OPEN,
    FILE_TERMINATOR,
    FORMAT_MAGIC,
    HEADER_TERMINATOR,
    NAME_LENGTH_TERMINATOR,
    SUPPORTED_FORMAT_VERSIONS,
    TAG_DIRECTORY,
    TAG_FILE,
)
from fstree.domain.errors import (
    MalformedEncodingError,
    UnsupportedFormatVersionError,
    VariantMismatchError,
)
from fstree.domain.tree_models import DirectoryNode, FileNode, FilesystemNode

logger = logging.getLogger(__name__)

# Below the interpreter's int() conversion limit (4300 digits)
_MAX_INT_DIGITS = 4000

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def decode(data: str) -> FilesystemNode:
    """
    Parse a snapshot document into a fresh tree.

    Args:
        data: String previously produced by the serializer.

    Returns:
        FilesystemNode: The reconstructed root (file or directory).

    Raises:
        MalformedEncodingError: On any tag, length, count or terminator that
                                does not follow the grammar, on truncation,
                                and on trailing data.
        UnsupportedFormatVersionError: If the header version is unknown.
        InvalidFieldError: If a decoded name is empty.
    """
    if not isinstance(data, str):
        raise MalformedEncodingError(f"expected str, received {type(data).__name__}")

    cursor = _Cursor(data)
    _read_header(cursor)
    root = _read_tree(cursor)

    if not cursor.at_end():
        raise MalformedEncodingError("unexpected data after the root node", cursor.pos)

    logger.debug(f"Decoded snapshot rooted at '{root.name}' ({len(data)} chars).")
    return root


def decode_into(target: FilesystemNode, data: str) -> None:
    """
    Reset an existing node from a snapshot document.

    The document is decoded into a fresh tree first; the target is modified
    only once decoding and the variant check have both succeeded. A directory
    loses all of its previous children.

    Raises:
        VariantMismatchError: If the encoded root is not of the target's variant.
        MalformedEncodingError: If the document is malformed.
    """
    decoded = decode(data)

    if isinstance(target, FileNode):
        if not isinstance(decoded, FileNode):
            raise VariantMismatchError(expected="file", received="directory")
        target.name = decoded.name
        target.size = decoded.size
        return

    if isinstance(target, DirectoryNode):
        if not isinstance(decoded, DirectoryNode):
            raise VariantMismatchError(expected="directory", received="file")
        target.name = decoded.name
        target.children = decoded.children
        return

    raise TypeError(f"Cannot deserialize into object of type {type(target).__name__}.")

# -----------------------------------------------------------------------------
# CURSOR
# -----------------------------------------------------------------------------

class _Cursor:
    """Read position over the encoded string."""

    def __init__(self, data: str) -> None:
        self.data = data
        self.pos = 0

    def at_end(self) -> bool:
        return self.pos >= len(self.data)

    def peek(self) -> Optional[str]:
        if self.at_end():
            return None
        return self.data[self.pos]

    def expect(self, token: str, what: str) -> None:
        end = self.pos + len(token)
        if self.data[self.pos:end] != token:
            if end > len(self.data):
                raise MalformedEncodingError(f"truncated input, expected {what}", self.pos)
            raise MalformedEncodingError(f"expected {what} {token!r}", self.pos)
        self.pos = end

    def read_int(self, what: str) -> int:
        start = self.pos
        while self.pos < len(self.data) and self.data[self.pos] in "0123456789":
            self.pos += 1
        if self.pos == start:
            if self.at_end():
                raise MalformedEncodingError(f"truncated input, expected {what}", start)
            raise MalformedEncodingError(f"expected digits for {what}", start)
        if self.pos - start > _MAX_INT_DIGITS:
            raise MalformedEncodingError(f"{what} too long", start)
        return int(self.data[start:self.pos])

    def read_chars(self, count: int, what: str) -> str:
        end = self.pos + count
        if end > len(self.data):
            raise MalformedEncodingError(
                f"truncated input, {what} declares {count} characters "
                f"but only {len(self.data) - self.pos} remain",
                self.pos,
            )
        chunk = self.data[self.pos:end]
        self.pos = end
        return chunk

# -----------------------------------------------------------------------------
# GRAMMAR
# -----------------------------------------------------------------------------

@dataclass
class _OpenDirectory:
    node: DirectoryNode
    declared: int
    seen: int = 0


def _read_header(cursor: _Cursor) -> None:
    cursor.expect(FORMAT_MAGIC, "format marker")
    version = cursor.read_int("format version")
    if version not in SUPPORTED_FORMAT_VERSIONS:
        raise UnsupportedFormatVersionError(version)
    cursor.expect(HEADER_TERMINATOR, "header terminator")


def _read_tree(cursor: _Cursor) -> FilesystemNode:
    root: Optional[FilesystemNode] = None
    open_dirs: List[_OpenDirectory] = []

    while True:
        if open_dirs:
            top = open_dirs[-1]
            if top.seen == top.declared:
                cursor.expect(CHILDREN_CLOSE, f"list terminator of '{top.node.name}'")
                open_dirs.pop()
                if not open_dirs:
                    break
                continue
            if cursor.peek() == CHILDREN_CLOSE:
                raise MalformedEncodingError(
                    f"directory '{top.node.name}' declares {top.declared} children "
                    f"but its list ends after {top.seen}",
                    cursor.pos,
                )

        node, declared = _read_node_head(cursor)

        if open_dirs:
            open_dirs[-1].node.add(node)
            open_dirs[-1].seen += 1
        else:
            root = node

        if isinstance(node, DirectoryNode):
            open_dirs.append(_OpenDirectory(node=node, declared=declared))
        elif not open_dirs:
            break

    assert root is not None
    return root


def _read_node_head(cursor: _Cursor) -> Tuple[FilesystemNode, int]:
    """
    Read one node up to (but excluding) its children.

    Returns:
        Tuple[FilesystemNode, int]: The node and its declared child count
                                    (0 for files).
    """
    tag_pos = cursor.pos
    tag = cursor.peek()
    if tag is None:
        raise MalformedEncodingError("truncated input, expected a node tag", tag_pos)
    if tag not in (TAG_FILE, TAG_DIRECTORY):
        raise MalformedEncodingError(f"unknown node tag {tag!r}", tag_pos)
    cursor.pos += 1

    name_length = cursor.read_int("name length")
    cursor.expect(NAME_LENGTH_TERMINATOR, "name length terminator")
    name = cursor.read_chars(name_length, "name")

    if tag == TAG_FILE:
        size = cursor.read_int("file size")
        cursor.expect(FILE_TERMINATOR, "file terminator")
        return FileNode(name=name, size=size), 0

    declared = cursor.read_int("child count")
    cursor.expect(CHILDREN_OPEN, "child list opener")
    return DirectoryNode(name=name), declared
