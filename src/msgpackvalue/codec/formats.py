"""MessagePack wire format constants.

Tag byte values and length-tier limits as defined by the public MessagePack
specification: https://github.com/msgpack/msgpack/blob/master/spec.md
"""

from __future__ import annotations

# Single-byte forms carrying their payload in the tag's low bits
POSITIVE_FIXINT_MAX = 0x7F
NEGATIVE_FIXINT_MIN = -32
NEGATIVE_FIXINT = 0xE0
FIXMAP = 0x80
FIXARRAY = 0x90
FIXSTR = 0xA0

FIXMAP_MAX_LEN = 15
FIXARRAY_MAX_LEN = 15
FIXSTR_MAX_LEN = 31

NIL = 0xC0
NEVER_USED = 0xC1
FALSE = 0xC2
TRUE = 0xC3

BIN8 = 0xC4
BIN16 = 0xC5
BIN32 = 0xC6

EXT8 = 0xC7
EXT16 = 0xC8
EXT32 = 0xC9

FLOAT32 = 0xCA
FLOAT64 = 0xCB

UINT8 = 0xCC
UINT16 = 0xCD
UINT32 = 0xCE
UINT64 = 0xCF

INT8 = 0xD0
INT16 = 0xD1
INT32 = 0xD2
INT64 = 0xD3

FIXEXT1 = 0xD4
FIXEXT2 = 0xD5
FIXEXT4 = 0xD6
FIXEXT8 = 0xD7
FIXEXT16 = 0xD8

STR8 = 0xD9
STR16 = 0xDA
STR32 = 0xDB

ARRAY16 = 0xDC
ARRAY32 = 0xDD

MAP16 = 0xDE
MAP32 = 0xDF

# Largest length/count each tier can declare
MAX_LEN8 = 0xFF
MAX_LEN16 = 0xFFFF
MAX_LEN32 = 0xFFFFFFFF

# Payload length -> fixext tag
FIXEXT_TAGS: dict[int, int] = {
    1: FIXEXT1,
    2: FIXEXT2,
    4: FIXEXT4,
    8: FIXEXT8,
    16: FIXEXT16,
}

# fixext tag -> payload length
FIXEXT_LENGTHS: dict[int, int] = {tag: length for length, tag in FIXEXT_TAGS.items()}

# Length-prefixed tags -> width of their length field in bytes
LENGTH_WIDTHS: dict[int, int] = {
    BIN8: 1,
    BIN16: 2,
    BIN32: 4,
    EXT8: 1,
    EXT16: 2,
    EXT32: 4,
    STR8: 1,
    STR16: 2,
    STR32: 4,
    ARRAY16: 2,
    ARRAY32: 4,
    MAP16: 2,
    MAP32: 4,
}


def length_width(length: int) -> int:
    """Return the narrowest length-field width (1, 2 or 4 bytes) for a length.

    Raises:
        ValueError: If length needs more than 4 bytes
    """
    if length <= MAX_LEN8:
        return 1
    if length <= MAX_LEN16:
        return 2
    if length <= MAX_LEN32:
        return 4
    raise ValueError(f"length {length} exceeds {MAX_LEN32}")
