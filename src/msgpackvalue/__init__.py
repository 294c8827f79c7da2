"""msgpackvalue: MessagePack Value Codec

A Python library implementing the MessagePack binary serialization format
around a closed, self-describing value model.

Key Features:
- Pydantic-based immutable value model with width-checked integer variants
- Canonical (minimal) encoding: every value uses the smallest exact wire form
- Bounds-checked decoding that returns the unconsumed remainder
- Cross-width numeric equality (``UInt8(5) == Int64(5)``)

Quick Start:
    >>> from msgpackvalue import Array, Str, UInt8, pack, unpack
    >>>
    >>> data = pack(Array([UInt8(1), Str("depth")]))
    >>> data
    b'\\x92\\x01\\xa5depth'
    >>> value, remainder = unpack(data)
    >>> value == Array([UInt8(1), Str("depth")])
    True
    >>> remainder
    b''

For the wire format, see: https://github.com/msgpack/msgpack/blob/master/spec.md
"""

from __future__ import annotations

from .codec import (
    DEFAULT_MAX_DEPTH,
    StreamItem,
    UnpackResult,
    iter_unpack,
    pack,
    unpack,
    unpack_all,
)
from .exceptions import (
    InsufficientDataError,
    InvalidArgumentError,
    InvalidDataError,
    MessagePackError,
)
from .models import (
    Array,
    Bin,
    Bool,
    Ext,
    Float32,
    Float64,
    FloatValue,
    Int8,
    Int16,
    Int32,
    Int64,
    IntegerValue,
    Map,
    Nil,
    Str,
    UInt8,
    UInt16,
    UInt32,
    UInt64,
    Value,
    to_python,
    to_value,
)
from .utils import packed_size

__version__ = "0.1.0"

__all__ = [
    # Core API
    "pack",
    "unpack",
    "unpack_all",
    "iter_unpack",
    "UnpackResult",
    "StreamItem",
    "DEFAULT_MAX_DEPTH",
    # Value model
    "Value",
    "Nil",
    "Bool",
    "IntegerValue",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "UInt8",
    "UInt16",
    "UInt32",
    "UInt64",
    "FloatValue",
    "Float32",
    "Float64",
    "Str",
    "Bin",
    "Array",
    "Map",
    "Ext",
    # Conversion
    "to_value",
    "to_python",
    # Exceptions
    "MessagePackError",
    "InvalidArgumentError",
    "InsufficientDataError",
    "InvalidDataError",
    # Sizing
    "packed_size",
    # Version
    "__version__",
]
