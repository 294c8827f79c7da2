"""Packed size calculation utilities.

This module provides functions to calculate the encoded size of values
without actually encoding them.
"""

from __future__ import annotations

from ..codec import formats
from ..exceptions import InvalidArgumentError
from ..models.value import (
    Array,
    Bin,
    Bool,
    Ext,
    Float32,
    Float64,
    IntegerValue,
    Map,
    Nil,
    Str,
    Value,
)


def packed_size(value: Value) -> int:
    """Calculate the size of a value's MessagePack encoding in bytes.

    The result always equals ``len(pack(value))``.

    Args:
        value: Value to measure

    Returns:
        Size in bytes

    Raises:
        InvalidArgumentError: If the value cannot be packed (a length beyond 2^32-1)
        TypeError: If value is not a Value

    Example:
        >>> packed_size(Array([Nil()] * 16))
        19  # 3-byte array16 header + 16 nil bytes
        >>> packed_size(UInt16(5))
        1  # positive fixint, whatever the declared width
    """
    if isinstance(value, (Nil, Bool)):
        return 1
    if isinstance(value, IntegerValue):
        return 1 + integer_payload_size(value.value)
    if isinstance(value, Float32):
        return 5
    if isinstance(value, Float64):
        return 9
    if isinstance(value, Str):
        length = len(value.value.encode("utf-8"))
        if length <= formats.FIXSTR_MAX_LEN:
            return 1 + length
        return 1 + _length_field_size("str", length) + length
    if isinstance(value, Bin):
        length = len(value.value)
        return 1 + _length_field_size("bin", length) + length
    if isinstance(value, Array):
        header = _container_header_size("array", len(value.items), formats.FIXARRAY_MAX_LEN)
        return header + sum(packed_size(item) for item in value.items)
    if isinstance(value, Map):
        header = _container_header_size("map", len(value.entries), formats.FIXMAP_MAX_LEN)
        return header + sum(
            packed_size(key) + packed_size(item) for key, item in value.entries.items()
        )
    if isinstance(value, Ext):
        length = len(value.data)
        if length in formats.FIXEXT_TAGS:
            return 2 + length
        return 2 + _length_field_size("ext", length) + length
    raise TypeError(f"cannot size {type(value).__name__}: not a MessagePack value")


def integer_payload_size(number: int) -> int:
    """Return the bytes following the tag in an integer's minimal encoding.

    Example:
        >>> integer_payload_size(100)
        0  # positive fixint
        >>> integer_payload_size(-33)
        1  # int8
    """
    if formats.NEGATIVE_FIXINT_MIN <= number <= formats.POSITIVE_FIXINT_MAX:
        return 0
    for width in (1, 2, 4):
        if number > 0 and number >> (8 * width) == 0:
            return width
        if number < 0 and number >= -(1 << (8 * width - 1)):
            return width
    return 8


def _length_field_size(kind: str, length: int) -> int:
    try:
        return formats.length_width(length)
    except ValueError as err:
        raise InvalidArgumentError(f"{kind} of length {length} is too large to pack") from err


def _container_header_size(kind: str, count: int, fix_max: int) -> int:
    if count <= fix_max:
        return 1
    # No 8-bit tier for containers
    return 1 + max(2, _length_field_size(kind, count))
