from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema and translates parsed arguments into
configuration overrides.
"""

import argparse
from typing import Any, Dict, List, Optional

from fstree import __version__
from fstree.domain.constants import RENDER_STYLES

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the fstree CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="fstree",
        description="Scan a directory into a size-annotated tree, render it, "
                    "and save or load it as a snapshot.",
    )

    # --- Sources ---
    p.add_argument(
        "-i", "--input",
        dest="input_path",
        default=None,
        help="Directory to scan (default: current directory).",
    )
    p.add_argument(
        "--load",
        dest="load_path",
        default=None,
        help="Render a saved snapshot instead of scanning.",
    )
    p.add_argument(
        "--save",
        dest="snapshot_path",
        default=None,
        help="Write the tree as a snapshot to this file.",
    )

    # --- Scanning ---
    p.add_argument(
        "--exclude",
        dest="exclude_patterns",
        default=None,
        help="Comma-separated regexes of entry names to skip.",
    )
    p.add_argument(
        "--follow-symlinks",
        action="store_true",
        help="Follow symbolic links instead of skipping them.",
    )

    # --- Rendering ---
    p.add_argument(
        "--style",
        dest="render_style",
        choices=RENDER_STYLES,
        default=None,
        help="Tree layout: plain indentation or ASCII connectors.",
    )
    p.add_argument(
        "--indent",
        dest="indent_unit",
        type=int,
        default=None,
        help="Spaces per depth level for the indent style.",
    )
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the result as JSON.",
    )

    # --- Configuration and Diagnostics ---
    p.add_argument(
        "--use-defaults",
        action="store_true",
        help="Ignore the persisted configuration.",
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the effective configuration and exit.",
    )
    p.add_argument(
        "--remember",
        action="store_true",
        help="Store the effective configuration as the last session after a successful run.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write diagnostics to this rotating log file.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    p.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into configuration overrides.

    Only options the user actually passed produce a key; None values are
    left for the persisted configuration or defaults to fill.
    """
    overrides: Dict[str, Any] = {
        "input_path": args.input_path,
        "snapshot_path": args.snapshot_path,
        "render_style": args.render_style,
        "indent_unit": args.indent_unit,
        "log_file": args.log_file,
    }

    if args.exclude_patterns is not None:
        overrides["exclude_patterns"] = _split_csv(args.exclude_patterns)
    if args.follow_symlinks:
        overrides["follow_symlinks"] = True
    if args.debug:
        overrides["log_level"] = "DEBUG"

    return {k: v for k, v in overrides.items() if v is not None}

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _split_csv(value: Optional[str]) -> Optional[List[str]]:
    """Convert a comma-separated string into a list of stripped items."""
    if value is None:
        return None
    parts = [x.strip() for x in value.split(",")]
    return [x for x in parts if x]
