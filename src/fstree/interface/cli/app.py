from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: argument parsing, configuration merging
(defaults, persisted state and command-line overrides), logging bootstrap,
scan execution and result rendering.
"""

import json
import os
import sys
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from fstree.core.engine import run_scan
from fstree.core.validator import validate_config
from fstree.domain.config import get_default_config, load_config, save_config
from fstree.domain.errors import FsTreeError
from fstree.domain.scan_models import ScanResult, create_error_result
from fstree.infra.logging import LoggingConfig, configure_logging, get_logger, shutdown_logging
from fstree.interface.cli import args as cli_args

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INPUT_MISSING = 2
EXIT_BAD_SNAPSHOT = 3
EXIT_INTERRUPTED = 130

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code.
    """
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 1. Resolve base configuration (Default vs Persistent state)
    base_conf = get_default_config() if args.use_defaults else load_config()

    # 2. Merge command-line overrides and normalize
    raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))
    clean_conf, warnings = validate_config(raw_conf, strict=False)

    # 3. Logging bootstrap (console on stderr, optional rotating file)
    configure_logging(
        LoggingConfig(
            level=clean_conf["log_level"],
            console=True,
            log_file=clean_conf["log_file"] or None,
        ),
        force=True,
    )
    try:
        for w in warnings:
            logger.warning(f"Configuration Constraint: {w}")
        return _run(args, clean_conf)
    finally:
        shutdown_logging()


def _run(args: Any, conf: Dict[str, Any]) -> int:
    if args.dump_config:
        print(json.dumps(conf, ensure_ascii=False, indent=2))
        return EXIT_OK

    source = args.load_path or conf["input_path"]

    # Pre-flight input verification
    if not args.load_path and not os.path.isdir(conf["input_path"]):
        msg = f"Input directory does not exist: {conf['input_path']}"
        logger.error(msg)
        _emit_error(args, msg, source)
        return EXIT_INPUT_MISSING

    logger.debug(f"Targeting source: {source}")
    try:
        result = run_scan(conf, load_path=args.load_path)
    except KeyboardInterrupt:
        logger.warning("Interrupted by user.")
        return EXIT_INTERRUPTED
    except FsTreeError as e:
        logger.error(f"Invalid snapshot '{source}': {e}")
        _emit_error(args, str(e), source)
        return EXIT_BAD_SNAPSHOT
    except OSError as e:
        logger.error(f"I/O failure: {e}")
        _emit_error(args, str(e), source)
        return EXIT_FAILURE

    if args.json_output:
        print(json.dumps(asdict(result), ensure_ascii=False, indent=2))
    else:
        _print_human_summary(result)

    if args.remember:
        _remember_session(conf)
    return EXIT_OK

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Shallow-merge override values into the base configuration.

    Only keys known to the base configuration are merged.
    """
    out = dict(base)
    for k, v in overrides.items():
        if k in out and v is not None:
            out[k] = v
    return out


def _remember_session(conf: Dict[str, Any]) -> None:
    """Persist the effective configuration; a write failure does not fail the run."""
    try:
        save_config(conf)
    except OSError as e:
        logger.error(f"Failed to save configuration: {e}")
        return
    logger.info("Configuration stored as the last session.")

# -----------------------------------------------------------------------------
# VIEW RENDERING
# -----------------------------------------------------------------------------

def _emit_error(args: Any, msg: str, source: str) -> None:
    if args.json_output:
        print(json.dumps(asdict(create_error_result(msg, source)), ensure_ascii=False, indent=2))
    else:
        print(f"ERROR: {msg}", file=sys.stderr)


def _print_human_summary(result: ScanResult) -> None:
    """Print the rendered tree followed by a short summary."""
    for line in result.lines:
        print(line)
    print()
    print(f"Total: {result.total_size:,} bytes in {result.node_count} entries")
    if result.snapshot_path:
        print(f"Snapshot saved to: {result.snapshot_path}")


if __name__ == "__main__":
    sys.exit(main())
