from __future__ import annotations

"""
Configuration Domain Management.

Handles the session defaults that drive scanning, rendering and snapshot
persistence, and stores the last session as JSON in the user data directory.
"""

import json
import logging
import os
from typing import Any, Dict, List, Optional

from fstree.domain.constants import DEFAULT_INDENT_UNIT, DEFAULT_RENDER_STYLE
from fstree.infra.fs import ensure_parent_dir, get_user_data_dir

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
CONFIG_FILE_NAME = "config.json"
CURRENT_CONFIG_VERSION = "1.0.0"


def default_exclude_patterns() -> List[str]:
    """
    Get the default exclusion regexes applied to entry names while scanning.

    Returns:
        List[str]: Regex patterns for version-control and cache directories.
    """
    return [
        r"^(\.git|\.hg|\.svn|__pycache__)$",
    ]


def get_config_file() -> str:
    """Absolute path of the persisted configuration file."""
    return os.path.join(get_user_data_dir(), CONFIG_FILE_NAME)


# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------
def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration (Session State).

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Scanning
        "input_path": os.getcwd(),
        "exclude_patterns": default_exclude_patterns(),
        "follow_symlinks": False,

        # Rendering
        "render_style": DEFAULT_RENDER_STYLE,
        "indent_unit": DEFAULT_INDENT_UNIT,

        # Persistence
        "snapshot_path": "",

        # Diagnostics
        "log_level": "INFO",
        "log_file": "",
    }


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load the last session configuration, merged over the defaults.

    A missing or unreadable file yields the defaults; unknown keys in the
    file are dropped.

    Args:
        path: Optional explicit config file; defaults to get_config_file().

    Returns:
        Dict[str, Any]: The merged configuration.
    """
    config_file = path or get_config_file()
    config = get_default_config()

    if not os.path.exists(config_file):
        logger.debug("Config file not found. Returning defaults.")
        return config

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load config '{config_file}': {e}. Using defaults.")
        return config

    if not isinstance(data, dict):
        logger.warning("Corrupted config file. Resetting to defaults.")
        return config

    session = data.get("last_session", {})
    if not isinstance(session, dict):
        logger.warning("Corrupted 'last_session' section. Resetting to defaults.")
        return config

    for key, value in session.items():
        if key in config:
            config[key] = value
    return config


def save_config(config: Dict[str, Any], path: Optional[str] = None) -> None:
    """
    Persist the provided config as the 'last_session'.

    Raises:
        OSError: If the file cannot be written.
    """
    config_file = path or get_config_file()
    ensure_parent_dir(config_file)
    state = {
        "version": CURRENT_CONFIG_VERSION,
        "last_session": config,
    }
    with open(config_file, "w", encoding="utf-8") as f:
        json.dump(state, f, ensure_ascii=False, indent=4)
    logger.debug(f"Configuration saved to {config_file}")
