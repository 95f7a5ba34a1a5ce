from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides cross-platform resolution of the application data directory, path
normalization and safe text persistence used by the configuration, logging
and snapshot services.
"""

import os
from typing import Optional

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "fstree"
UNIX_APP_DIR_NAME = ".fstree"
DATA_DIR_ENV_VAR = "FSTREE_HOME"

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the standard OS-specific directory for persistent application data.

    Standards:
    - $FSTREE_HOME when set
    - Windows: %LOCALAPPDATA%/fstree
    - Linux/Mac: ~/.fstree

    Returns:
        str: Absolute path to the application data directory.
    """
    path: str = os.environ.get(DATA_DIR_ENV_VAR, "")

    # Windows specific resolution
    if not path and os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    # Posix fallback (Linux/Mac)
    if not path:
        path = os.path.join(os.path.expanduser("~"), UNIX_APP_DIR_NAME)

    return os.path.abspath(path)


def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a path string into an absolute filesystem path.

    Handles environment variable expansion ($VAR/%VAR%) and user home
    shortcuts (~/). Reverts to fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use when the input is blank.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    p = os.path.expandvars(os.path.expanduser(p))
    return os.path.abspath(p)

# -----------------------------------------------------------------------------
# PERSISTENCE HELPERS
# -----------------------------------------------------------------------------

def ensure_parent_dir(path: str) -> None:
    """Create the parent directory hierarchy of a target file if missing."""
    parent = os.path.dirname(os.path.abspath(path))
    if parent:
        os.makedirs(parent, exist_ok=True)


def write_text(path: str, content: str) -> None:
    """
    Write UTF-8 text to a file, creating parent directories as needed.

    Raises:
        OSError: If the file cannot be written.
    """
    ensure_parent_dir(path)
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(content)


def read_text(path: str) -> str:
    """
    Read a UTF-8 text file verbatim.

    Raises:
        OSError: If the file cannot be read.
    """
    with open(path, "r", encoding="utf-8", newline="") as f:
        return f.read()
