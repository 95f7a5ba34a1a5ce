from __future__ import annotations

"""
Snapshot Serializer.

Encodes a snapshot subtree into a self-delimiting string:

    document  := "FST" version "|" node
    file      := "F" <name length> ":" <name> <size> ";"
    directory := "D" <name length> ":" <name> <child count> "[" node* "]"

Every name is length-prefixed, so names may contain any character,
including the delimiters of the format itself.
"""

import logging
from typing import List, Union

from fstree.domain.constants import (
    CHILDREN_CLOSE,
    CHILDREN_OPEN,
    FILE_TERMINATOR,
    FORMAT_MAGIC,
    FORMAT_VERSION,
    HEADER_TERMINATOR,
    NAME_LENGTH_TERMINATOR,
    TAG_DIRECTORY,
    TAG_FILE,
)
from fstree.domain.errors import InvalidFieldError
from fstree.domain.tree_models import DirectoryNode, FileNode, FilesystemNode

logger = logging.getLogger(__name__)

# Marker pushed after a directory's children to emit its list terminator
_CLOSE = object()

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def encode(node: FilesystemNode) -> str:
    """
    Serialize a subtree into a versioned snapshot document.

    Args:
        node: Top of the subtree.

    Returns:
        str: The opaque snapshot string.

    Raises:
        InvalidFieldError: If the tree contains something other than nodes.
    """
    parts: List[str] = [f"{FORMAT_MAGIC}{FORMAT_VERSION}{HEADER_TERMINATOR}"]
    count = 0

    stack: List[Union[FilesystemNode, object]] = [node]
    while stack:
        item = stack.pop()
        if item is _CLOSE:
            parts.append(CHILDREN_CLOSE)
            continue

        if isinstance(item, FileNode):
            parts.append(_encode_file(item))
        elif isinstance(item, DirectoryNode):
            parts.append(_encode_directory_head(item))
            stack.append(_CLOSE)
            stack.extend(reversed(item.children))
        else:
            raise InvalidFieldError(f"Cannot serialize object of type {type(item).__name__}.")
        count += 1

    logger.debug(f"Serialized {count} nodes rooted at '{node.name}'.")
    return "".join(parts)

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _encode_name(name: str) -> str:
    return f"{len(name)}{NAME_LENGTH_TERMINATOR}{name}"


def _encode_file(node: FileNode) -> str:
    return f"{TAG_FILE}{_encode_name(node.name)}{node.size}{FILE_TERMINATOR}"


def _encode_directory_head(node: DirectoryNode) -> str:
    return f"{TAG_DIRECTORY}{_encode_name(node.name)}{len(node.children)}{CHILDREN_OPEN}"
