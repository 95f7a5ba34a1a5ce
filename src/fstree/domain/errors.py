from __future__ import annotations

"""
Snapshot Tree Error Hierarchy.

Every failure raised by the tree model and its codec derives from
FsTreeError. The concrete classes also inherit the matching builtin
(ValueError/TypeError) so callers can catch them generically.
"""

from typing import Optional


class FsTreeError(Exception):
    """Base exception for all fstree errors."""


class InvalidFieldError(FsTreeError, ValueError):
    """Raised when a node field holds a disallowed value (empty name, negative size)."""


class VariantMismatchError(FsTreeError, TypeError):
    """Raised when directory data is loaded into a file node or vice versa."""

    def __init__(self, expected: str, received: str) -> None:
        super().__init__(
            f"Cannot deserialize {received} data into a {expected} node."
        )
        self.expected = expected
        self.received = received


class MalformedEncodingError(FsTreeError, ValueError):
    """
    Raised when an encoded snapshot violates the grammar.

    Attributes:
        position: Cursor offset at which the violation was detected, if known.
    """

    def __init__(self, reason: str, position: Optional[int] = None) -> None:
        msg = f"Malformed snapshot encoding: {reason}"
        if position is not None:
            msg += f" (at offset {position})"
        super().__init__(msg)
        self.reason = reason
        self.position = position


class UnsupportedFormatVersionError(MalformedEncodingError):
    """Raised when the snapshot header declares a version this codec cannot read."""

    def __init__(self, version: int) -> None:
        super().__init__(f"unsupported format version {version}", position=3)
        self.version = version
