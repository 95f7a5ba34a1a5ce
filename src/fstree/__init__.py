from __future__ import annotations

from fstree.domain.errors import (
    FsTreeError,
    InvalidFieldError,
    MalformedEncodingError,
    UnsupportedFormatVersionError,
    VariantMismatchError,
)
from fstree.domain.tree_models import DirectoryNode, FileNode, FilesystemNode

__version__ = "0.1.0"

__all__ = [
    "FilesystemNode",
    "FileNode",
    "DirectoryNode",
    "FsTreeError",
    "InvalidFieldError",
    "MalformedEncodingError",
    "UnsupportedFormatVersionError",
    "VariantMismatchError",
    "__version__",
]
