"""MessagePack decoder.

This module provides the unpack() function that parses one MessagePack value
from the front of a byte buffer and returns it with the unconsumed suffix,
and unpack_all() / iter_unpack() for buffers holding several concatenated
values.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import NamedTuple

from structlog import get_logger

from ..exceptions import InsufficientDataError, InvalidDataError, MessagePackError
from ..models.value import (
    Array,
    Bin,
    Bool,
    Ext,
    Float32,
    Float64,
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
from . import formats
from .bytebuf import ByteReader

logger = get_logger()

# Deepest array/map nesting accepted by default
DEFAULT_MAX_DEPTH = 256

# Wire integer tag -> variant holding exactly that width
_INT_VARIANTS: dict[int, type[IntegerValue]] = {
    formats.UINT8: UInt8,
    formats.UINT16: UInt16,
    formats.UINT32: UInt32,
    formats.UINT64: UInt64,
    formats.INT8: Int8,
    formats.INT16: Int16,
    formats.INT32: Int32,
    formats.INT64: Int64,
}

_STR_TAGS = (formats.STR8, formats.STR16, formats.STR32)
_BIN_TAGS = (formats.BIN8, formats.BIN16, formats.BIN32)
_EXT_TAGS = (formats.EXT8, formats.EXT16, formats.EXT32)
_ARRAY_TAGS = (formats.ARRAY16, formats.ARRAY32)
_MAP_TAGS = (formats.MAP16, formats.MAP32)


class UnpackResult(NamedTuple):
    """A decoded value and the bytes that followed it."""

    value: Value
    remainder: bytes


class StreamItem(NamedTuple):
    """A value decoded from a stream, with its byte offset and packed size."""

    offset: int
    size: int
    value: Value


def unpack(
    data: bytes | bytearray | memoryview, *, max_depth: int = DEFAULT_MAX_DEPTH
) -> UnpackResult:
    """Decode one MessagePack value from the front of a buffer.

    Never consumes more than one top-level value; anything after it is
    returned as the remainder so back-to-back values can be read by calling
    unpack() again on it. Integers decode into the variant of their exact
    wire width (a wire uint16 becomes UInt16 even if it would fit in 8 bits);
    positive fixints decode to UInt64 and negative fixints to Int64.

    Args:
        data: Buffer to decode; it is read in place and must not be mutated
            during the call
        max_depth: Deepest array/map nesting to accept

    Returns:
        UnpackResult(value, remainder)

    Raises:
        InsufficientDataError: If the buffer ends before the value is complete
        InvalidDataError: If a reserved tag byte or invalid UTF-8 string is
            found, or nesting exceeds max_depth
        ValueError: If max_depth is less than 1

    Examples:
        ```python
        from msgpackvalue import unpack

        value, rest = unpack(b"\\x95\\x00\\x01\\x02\\x03\\x04\\xc0")
        print(value)  # array([uint64(0), uint64(1), uint64(2), uint64(3), uint64(4)])
        print(rest)   # b'\\xc0'
        ```
    """
    if max_depth < 1:
        raise ValueError(f"max_depth must be at least 1, got {max_depth}")

    reader = ByteReader(data)
    value = _unpack_logged(reader, max_depth)
    return UnpackResult(value, reader.remainder())


def unpack_all(
    data: bytes | bytearray | memoryview, *, max_depth: int = DEFAULT_MAX_DEPTH
) -> list[Value]:
    """Decode every value of a buffer holding concatenated MessagePack values.

    Args:
        data: Buffer to decode; an empty buffer yields an empty list
        max_depth: Deepest array/map nesting to accept in each value

    Returns:
        Decoded values in buffer order

    Raises:
        InsufficientDataError: If the last value is truncated
        InvalidDataError: If any value is malformed
    """
    return [item.value for item in iter_unpack(data, max_depth=max_depth)]


def iter_unpack(
    data: bytes | bytearray | memoryview, *, max_depth: int = DEFAULT_MAX_DEPTH
) -> Iterator[StreamItem]:
    """Lazily decode the concatenated values of a buffer.

    The buffer is read in place through a single reader, so walking a long
    stream never copies its tail.

    Args:
        data: Buffer to decode
        max_depth: Deepest array/map nesting to accept in each value

    Yields:
        StreamItem(offset, size, value) for each value in buffer order

    Raises:
        InsufficientDataError: If the last value is truncated
        InvalidDataError: If any value is malformed
        ValueError: If max_depth is less than 1
    """
    if max_depth < 1:
        raise ValueError(f"max_depth must be at least 1, got {max_depth}")

    reader = ByteReader(data)
    while reader.bytes_remaining():
        offset = reader.position()
        value = _unpack_logged(reader, max_depth)
        yield StreamItem(offset, reader.position() - offset, value)


def _unpack_logged(reader: ByteReader, max_depth: int) -> Value:
    """Decode one top-level value, logging the failure before re-raising it."""
    start = reader.position()
    try:
        return _unpack_value(reader, max_depth)
    except MessagePackError as e:
        logger.debug(
            "unpack failed",
            error=type(e).__name__,
            start=start,
            offset=reader.position(),
            size=reader.position() + reader.bytes_remaining(),
        )
        raise


def _unpack_value(reader: ByteReader, depth_left: int) -> Value:
    """Decode a single value at the reader's position.

    Args:
        reader: ByteReader positioned on a tag byte
        depth_left: Remaining array/map nesting allowance

    Returns:
        Decoded value

    Raises:
        InsufficientDataError: If data is truncated
        InvalidDataError: If data is malformed
    """
    tag = reader.read_uint(1)

    # Single-byte forms
    if tag <= formats.POSITIVE_FIXINT_MAX:
        return UInt64(tag)
    if tag >= formats.NEGATIVE_FIXINT:
        return Int64(tag - 0x100)
    if formats.FIXSTR <= tag <= formats.FIXSTR | formats.FIXSTR_MAX_LEN:
        return _read_str(reader, tag & formats.FIXSTR_MAX_LEN)
    if formats.FIXARRAY <= tag <= formats.FIXARRAY | formats.FIXARRAY_MAX_LEN:
        return _read_array(reader, tag & formats.FIXARRAY_MAX_LEN, depth_left)
    if formats.FIXMAP <= tag <= formats.FIXMAP | formats.FIXMAP_MAX_LEN:
        return _read_map(reader, tag & formats.FIXMAP_MAX_LEN, depth_left)

    if tag == formats.NIL:
        return Nil()
    if tag == formats.FALSE:
        return Bool(False)
    if tag == formats.TRUE:
        return Bool(True)

    # Fixed-width numbers
    variant = _INT_VARIANTS.get(tag)
    if variant is not None:
        width = variant.bits // 8
        number = reader.read_int(width) if variant.signed else reader.read_uint(width)
        return variant(number)
    if tag == formats.FLOAT32:
        return Float32(reader.read_float32())
    if tag == formats.FLOAT64:
        return Float64(reader.read_float64())

    # Fixed-size extensions: type byte then payload
    fixext_length = formats.FIXEXT_LENGTHS.get(tag)
    if fixext_length is not None:
        return _read_ext(reader, fixext_length)

    # Length-prefixed forms
    width = formats.LENGTH_WIDTHS.get(tag)
    if width is not None:
        length = reader.read_uint(width)
        if tag in _STR_TAGS:
            return _read_str(reader, length)
        if tag in _BIN_TAGS:
            return Bin(reader.read_bytes(length))
        if tag in _EXT_TAGS:
            return _read_ext(reader, length)
        if tag in _ARRAY_TAGS:
            return _read_array(reader, length, depth_left)
        if tag in _MAP_TAGS:
            return _read_map(reader, length, depth_left)

    # Only 0xc1 is left unassigned
    raise InvalidDataError(
        f"Invalid tag byte 0x{tag:02x} at offset {reader.position() - 1}"
    )


def _read_str(reader: ByteReader, length: int) -> Str:
    raw_bytes = reader.read_bytes(length)
    try:
        return Str(raw_bytes.decode("utf-8"))
    except UnicodeDecodeError as e:
        raise InvalidDataError(f"Invalid UTF-8 in string: {e}") from e


def _read_ext(reader: ByteReader, length: int) -> Ext:
    ext_type = reader.read_int(1)
    return Ext(ext_type, reader.read_bytes(length))


def _read_array(reader: ByteReader, count: int, depth_left: int) -> Array:
    """Decode count elements in order; any failure aborts the whole array."""
    if depth_left < 1:
        raise InvalidDataError("Maximum nesting depth exceeded")
    # Every element takes at least one byte
    _require(reader, count)
    return Array([_unpack_value(reader, depth_left - 1) for _ in range(count)])


def _read_map(reader: ByteReader, count: int, depth_left: int) -> Map:
    """Decode count key/value pairs; a repeated key keeps its last value."""
    if depth_left < 1:
        raise InvalidDataError("Maximum nesting depth exceeded")
    _require(reader, 2 * count)
    entries: dict[Value, Value] = {}
    for _ in range(count):
        key = _unpack_value(reader, depth_left - 1)
        entries[key] = _unpack_value(reader, depth_left - 1)
    return Map(entries)


def _require(reader: ByteReader, num_bytes: int) -> None:
    """Fail early when a declared count cannot possibly fit in the buffer."""
    if num_bytes > reader.bytes_remaining():
        raise InsufficientDataError(
            f"Not enough data: declared {num_bytes} bytes of content, "
            f"have {reader.bytes_remaining()} at offset {reader.position()}"
        )
