from __future__ import annotations

"""
Domain Constants.

Wire-format markers, rendering defaults and application identifiers shared
across the codec, renderer and interface layers.
"""

from typing import Tuple

# -----------------------------------------------------------------------------
# SNAPSHOT WIRE FORMAT
# -----------------------------------------------------------------------------
FORMAT_MAGIC = "FST"
FORMAT_VERSION = 1
SUPPORTED_FORMAT_VERSIONS: Tuple[int, ...] = (1,)
HEADER_TERMINATOR = "|"

TAG_FILE = "F"
TAG_DIRECTORY = "D"
NAME_LENGTH_TERMINATOR = ":"
FILE_TERMINATOR = ";"
CHILDREN_OPEN = "["
CHILDREN_CLOSE = "]"

# -----------------------------------------------------------------------------
# RENDERING
# -----------------------------------------------------------------------------
DEFAULT_INDENT_UNIT = 2
ROOT_DOT_LABEL = "."
RENDER_STYLES: Tuple[str, ...] = ("indent", "ascii")
DEFAULT_RENDER_STYLE = "indent"
