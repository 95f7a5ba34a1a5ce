from __future__ import annotations

"""
Entry Name Filtering.

Compiles user supplied exclusion regexes and matches scanned entry names
against them.
"""

import logging
import re
from typing import List

logger = logging.getLogger(__name__)


def compile_patterns(patterns: List[str]) -> List[re.Pattern]:
    """
    Transform raw regex strings into compiled Pattern objects.

    Malformed expressions are discarded with a warning so that one bad
    pattern does not abort a whole scan.

    Args:
        patterns: List of raw regex strings.

    Returns:
        List[re.Pattern]: Compiled regex objects.
    """
    compiled: List[re.Pattern] = []
    for p in patterns:
        try:
            compiled.append(re.compile(p))
        except re.error as e:
            logger.warning(f"Ignoring invalid pattern '{p}': {e}")
    return compiled


def matches_any(name: str, compiled_patterns: List[re.Pattern]) -> bool:
    """
    Verify if a name matches at least one compiled regex pattern.

    Args:
        name: File or directory name to evaluate.
        compiled_patterns: Pre-compiled regex objects.
    """
    return any(rx.search(name) for rx in compiled_patterns)
