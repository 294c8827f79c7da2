"""MessagePack encoder.

This module provides the pack() function that converts a Value to its
canonical MessagePack encoding: for every value, the smallest wire format
that represents it exactly.
"""

from __future__ import annotations

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
from . import formats
from .bytebuf import ByteWriter


def pack(value: Value) -> bytes:
    """Encode a Value to MessagePack bytes.

    The declared width of an integer variant does not influence the output;
    integers, strings, binaries, arrays, maps and extensions always use the
    narrowest tag that holds them.

    Args:
        value: Value to encode

    Returns:
        Canonical MessagePack encoding

    Raises:
        InvalidArgumentError: If a str/bin/ext payload or an array/map count
            exceeds 2^32-1
        TypeError: If value is not a Value

    Examples:
        ```python
        from msgpackvalue import Array, Nil, UInt8, pack

        pack(Array([UInt8(0), UInt8(1), UInt8(2), UInt8(3), UInt8(4)]))
        # b'\\x95\\x00\\x01\\x02\\x03\\x04'

        pack(Array([Nil()] * 16))
        # b'\\xdc\\x00\\x10' + b'\\xc0' * 16
        ```
    """
    writer = ByteWriter()
    _pack_value(writer, value)
    return writer.to_bytes()


def _pack_value(writer: ByteWriter, value: Value) -> None:
    """Append the encoding of a single value.

    Raises:
        InvalidArgumentError: If a length exceeds the largest tier
    """
    if isinstance(value, Nil):
        writer.write_uint(formats.NIL, 1)
        return

    if isinstance(value, Bool):
        writer.write_uint(formats.TRUE if value.value else formats.FALSE, 1)
        return

    if isinstance(value, IntegerValue):
        _pack_integer(writer, value.value)
        return

    if isinstance(value, Float32):
        writer.write_uint(formats.FLOAT32, 1)
        writer.write_float32(value.value)
        return

    if isinstance(value, Float64):
        writer.write_uint(formats.FLOAT64, 1)
        writer.write_float64(value.value)
        return

    if isinstance(value, Str):
        data = value.value.encode("utf-8")
        if len(data) <= formats.FIXSTR_MAX_LEN:
            writer.write_uint(formats.FIXSTR | len(data), 1)
        else:
            _write_header(writer, "str", len(data), (formats.STR8, formats.STR16, formats.STR32))
        writer.write_bytes(data)
        return

    if isinstance(value, Bin):
        _write_header(
            writer, "bin", len(value.value), (formats.BIN8, formats.BIN16, formats.BIN32)
        )
        writer.write_bytes(value.value)
        return

    if isinstance(value, Array):
        count = len(value.items)
        if count <= formats.FIXARRAY_MAX_LEN:
            writer.write_uint(formats.FIXARRAY | count, 1)
        else:
            # No 8-bit tier for containers
            _write_header(writer, "array", count, (None, formats.ARRAY16, formats.ARRAY32))
        for item in value.items:
            _pack_value(writer, item)
        return

    if isinstance(value, Map):
        count = len(value.entries)
        if count <= formats.FIXMAP_MAX_LEN:
            writer.write_uint(formats.FIXMAP | count, 1)
        else:
            _write_header(writer, "map", count, (None, formats.MAP16, formats.MAP32))
        for key, item in value.entries.items():
            _pack_value(writer, key)
            _pack_value(writer, item)
        return

    if isinstance(value, Ext):
        _pack_ext(writer, value)
        return

    raise TypeError(f"cannot pack {type(value).__name__}: not a MessagePack value")


def _pack_integer(writer: ByteWriter, number: int) -> None:
    """Write an integer with the narrowest tag of its sign family."""
    if 0 <= number <= formats.POSITIVE_FIXINT_MAX:
        writer.write_uint(number, 1)
    elif formats.NEGATIVE_FIXINT_MIN <= number < 0:
        writer.write_int(number, 1)
    elif number > 0:
        if number <= 0xFF:
            writer.write_uint(formats.UINT8, 1)
            writer.write_uint(number, 1)
        elif number <= 0xFFFF:
            writer.write_uint(formats.UINT16, 1)
            writer.write_uint(number, 2)
        elif number <= 0xFFFFFFFF:
            writer.write_uint(formats.UINT32, 1)
            writer.write_uint(number, 4)
        else:
            writer.write_uint(formats.UINT64, 1)
            writer.write_uint(number, 8)
    else:
        if number >= -(1 << 7):
            writer.write_uint(formats.INT8, 1)
            writer.write_int(number, 1)
        elif number >= -(1 << 15):
            writer.write_uint(formats.INT16, 1)
            writer.write_int(number, 2)
        elif number >= -(1 << 31):
            writer.write_uint(formats.INT32, 1)
            writer.write_int(number, 4)
        else:
            writer.write_uint(formats.INT64, 1)
            writer.write_int(number, 8)


def _write_header(
    writer: ByteWriter,
    kind: str,
    length: int,
    tags: tuple[int | None, int, int],
) -> None:
    """Write the tag and length field of a length-prefixed value.

    Args:
        writer: ByteWriter to write to
        kind: Name of the value kind, for error messages
        length: Payload byte length or element count
        tags: Tags of the 8-, 16- and 32-bit length tiers (None if the kind
            has no 8-bit tier)

    Raises:
        InvalidArgumentError: If length exceeds 2^32-1
    """
    try:
        width = formats.length_width(length)
    except ValueError as err:
        raise InvalidArgumentError(f"{kind} of length {length} is too large to pack") from err

    tag8, tag16, tag32 = tags
    if width == 1 and tag8 is None:
        width = 2
    tag = {1: tag8, 2: tag16, 4: tag32}[width]
    assert tag is not None
    writer.write_uint(tag, 1)
    writer.write_uint(length, width)


def _pack_ext(writer: ByteWriter, value: Ext) -> None:
    """Write an extension value, preferring a fixext tag when the size matches."""
    length = len(value.data)
    fixext_tag = formats.FIXEXT_TAGS.get(length)
    if fixext_tag is not None:
        writer.write_uint(fixext_tag, 1)
    else:
        _write_header(writer, "ext", length, (formats.EXT8, formats.EXT16, formats.EXT32))
    writer.write_int(value.ext_type, 1)
    writer.write_bytes(value.data)
