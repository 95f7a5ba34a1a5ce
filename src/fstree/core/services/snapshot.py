from __future__ import annotations

"""
Snapshot Persistence Service.

Stores encoded snapshot documents on disk and loads them back into trees.
"""

import logging
import os

from fstree.core.codec import decode, encode
from fstree.domain.errors import MalformedEncodingError
from fstree.domain.tree_models import FilesystemNode
from fstree.infra.fs import read_text, write_text

logger = logging.getLogger(__name__)


def save_snapshot(node: FilesystemNode, path: str) -> str:
    """
    Serialize a tree and write it to a UTF-8 file.

    Args:
        node: Root of the tree to persist.
        path: Destination file; parent directories are created.

    Returns:
        str: Absolute path of the written snapshot.

    Raises:
        OSError: If the file cannot be written.
    """
    abs_path = os.path.abspath(path)
    data = encode(node)
    write_text(abs_path, data)
    logger.info(f"Snapshot saved to: {abs_path} ({len(data)} chars)")
    return abs_path


def load_snapshot(path: str) -> FilesystemNode:
    """
    Read a snapshot file and rebuild its tree.

    Raises:
        OSError: If the file cannot be read.
        MalformedEncodingError: If the file is not UTF-8 text or its content
                                is not a valid snapshot.
    """
    try:
        data = read_text(path)
    except UnicodeDecodeError as e:
        raise MalformedEncodingError(f"snapshot is not valid UTF-8: {e.reason}") from e
    node = decode(data)
    logger.info(f"Snapshot loaded from: {os.path.abspath(path)}")
    return node
