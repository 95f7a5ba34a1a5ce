from __future__ import annotations

"""
Main Entry Point.

Routes execution to the CLI controller and traps unexpected crashes so
they are logged and reported with a non-zero exit code.
"""

import logging
import sys
import traceback
from typing import List, Optional


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the fstree CLI.

    Returns:
        int: Standard process exit code.
    """
    from fstree.interface.cli.app import main as cli_main

    try:
        return cli_main(argv)
    except Exception as e:
        stack_trace = "".join(traceback.format_exception(type(e), e, e.__traceback__))
        logging.getLogger("fstree.supervisor").critical(f"FATAL EXCEPTION DETECTED: {e}")
        print("CRITICAL ERROR (FSTREE CLI)", file=sys.stderr)
        print(stack_trace, file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
