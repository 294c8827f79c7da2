"""MessagePack codec for msgpackvalue.

This module provides packing of values to their canonical MessagePack bytes
and unpacking of byte buffers back into values.
"""

from __future__ import annotations

from .decoder import (
    DEFAULT_MAX_DEPTH,
    StreamItem,
    UnpackResult,
    iter_unpack,
    unpack,
    unpack_all,
)
from .encoder import pack

__all__ = [
    "pack",
    "unpack",
    "unpack_all",
    "iter_unpack",
    "UnpackResult",
    "StreamItem",
    "DEFAULT_MAX_DEPTH",
]
