"""MessagePack value model and native-object conversion."""

from __future__ import annotations

from .convert import to_python, to_value
from .value import (
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
)

__all__ = [
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
    "to_value",
    "to_python",
]
