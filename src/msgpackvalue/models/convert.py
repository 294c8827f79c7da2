"""Conversion between native Python objects and MessagePack values.

``to_value`` is the literal-style constructor: bare non-negative integers
default to the unsigned 64-bit variant, negative ones to the signed 64-bit
variant, and floats to double precision.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .value import (
    Array,
    Bin,
    Bool,
    Ext,
    Float64,
    FloatValue,
    Int64,
    IntegerValue,
    Map,
    Nil,
    Str,
    UInt64,
    Value,
    integer_bounds,
)


def to_value(obj: Any) -> Value:
    """Convert a native Python object into a Value.

    Args:
        obj: None, bool, int, float, str, bytes-like, list/tuple, dict, or an
            existing Value (returned unchanged)

    Returns:
        The equivalent Value

    Raises:
        TypeError: If obj (or a nested element) has no MessagePack equivalent
        ValueError: If an integer is outside the 64-bit ranges

    Examples:
        >>> to_value([0, 1, 2]) == Array([UInt64(0), UInt64(1), UInt64(2)])
        True
        >>> print(to_value({"depth": -5}))
        map({string(depth): int64(-5)})
    """
    if isinstance(obj, Value):
        return obj
    if obj is None:
        return Nil()
    # bool before int: bool is an int subclass
    if isinstance(obj, bool):
        return Bool(obj)
    if isinstance(obj, int):
        if obj >= 0:
            if obj > integer_bounds(64, False)[1]:
                raise ValueError(f"integer {obj} does not fit in 64 bits")
            return UInt64(obj)
        if obj < integer_bounds(64, True)[0]:
            raise ValueError(f"integer {obj} does not fit in 64 bits")
        return Int64(obj)
    if isinstance(obj, float):
        return Float64(obj)
    if isinstance(obj, str):
        return Str(obj)
    if isinstance(obj, (bytes, bytearray, memoryview)):
        return Bin(obj)
    if isinstance(obj, (list, tuple)):
        return Array(to_value(item) for item in obj)
    if isinstance(obj, Mapping):
        return Map((to_value(key), to_value(item)) for key, item in obj.items())
    raise TypeError(f"cannot convert {type(obj).__name__} to a MessagePack value")


def to_python(value: Value) -> Any:
    """Convert a Value back into native Python objects.

    Integers, floats, strings and bytes map to their Python types, Array to
    list, Map to dict and Ext to an ``(ext_type, data)`` tuple.

    Raises:
        TypeError: If a Map key converts to an unhashable object (an Array or
            Map used as a key)
    """
    if isinstance(value, Nil):
        return None
    if isinstance(value, (Bool, IntegerValue, FloatValue, Str, Bin)):
        return value.value
    if isinstance(value, Array):
        return [to_python(item) for item in value.items]
    if isinstance(value, Map):
        return {to_python(key): to_python(item) for key, item in value.entries.items()}
    if isinstance(value, Ext):
        return (value.ext_type, value.data)
    raise TypeError(f"cannot convert {type(value).__name__} to a Python object")
