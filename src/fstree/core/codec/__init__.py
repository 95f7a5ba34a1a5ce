from __future__ import annotations

from .parser import decode, decode_into
from .serializer import encode

__all__ = [
    "encode",
    "decode",
    "decode_into",
]
