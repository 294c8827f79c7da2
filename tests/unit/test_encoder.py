"""Unit tests for packing."""

from __future__ import annotations

import pytest

from msgpackvalue import (
    Array,
    Bin,
    Bool,
    Ext,
    Float32,
    Float64,
    InvalidArgumentError,
    Int8,
    Int16,
    Int32,
    Int64,
    Map,
    Nil,
    Str,
    UInt8,
    UInt16,
    UInt32,
    UInt64,
    Value,
    pack,
)
from msgpackvalue.codec import formats


class TestPackScalars:
    """Test scalar encodings."""

    def test_nil_and_bool(self) -> None:
        assert pack(Nil()) == b"\xc0"
        assert pack(Bool(False)) == b"\xc2"
        assert pack(Bool(True)) == b"\xc3"

    def test_floats(self) -> None:
        assert pack(Float32(1.5)) == b"\xca\x3f\xc0\x00\x00"
        assert pack(Float64(1.5)) == b"\xcb\x3f\xf8\x00\x00\x00\x00\x00\x00"


class TestPackIntegers:
    """Test integers always use the narrowest exact encoding."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (UInt8(0), b"\x00"),
            (UInt64(127), b"\x7f"),
            (UInt8(128), b"\xcc\x80"),
            (Int64(255), b"\xcc\xff"),
            (Int16(256), b"\xcd\x01\x00"),
            (UInt64(65535), b"\xcd\xff\xff"),
            (UInt32(65536), b"\xce\x00\x01\x00\x00"),
            (UInt64(2**32 - 1), b"\xce\xff\xff\xff\xff"),
            (UInt64(2**32), b"\xcf\x00\x00\x00\x01\x00\x00\x00\x00"),
            (UInt64(2**64 - 1), b"\xcf" + b"\xff" * 8),
            (Int8(-1), b"\xff"),
            (Int64(-32), b"\xe0"),
            (Int8(-33), b"\xd0\xdf"),
            (Int8(-128), b"\xd0\x80"),
            (Int16(-129), b"\xd1\xff\x7f"),
            (Int32(-32768), b"\xd1\x80\x00"),
            (Int32(-32769), b"\xd2\xff\xff\x7f\xff"),
            (Int64(-(2**31)), b"\xd2\x80\x00\x00\x00"),
            (Int64(-(2**31) - 1), b"\xd3\xff\xff\xff\xff\x7f\xff\xff\xff"),
            (Int64(-(2**63)), b"\xd3\x80" + b"\x00" * 7),
        ],
        ids=str,
    )
    def test_minimal(self, value: Value, expected: bytes) -> None:
        assert pack(value) == expected

    def test_declared_width_ignored(self) -> None:
        """Test equal numbers encode identically whatever their variant."""
        assert pack(UInt8(5)) == pack(Int64(5)) == pack(UInt64(5)) == b"\x05"
        assert pack(Int64(200)) == pack(UInt8(200))


class TestPackStrAndBin:
    """Test length tiers for strings and binaries."""

    @pytest.mark.parametrize(
        ("length", "header"),
        [
            (0, b"\xa0"),
            (31, b"\xbf"),
            (32, b"\xd9\x20"),
            (255, b"\xd9\xff"),
            (256, b"\xda\x01\x00"),
            (65535, b"\xda\xff\xff"),
            (65536, b"\xdb\x00\x01\x00\x00"),
        ],
    )
    def test_str_tiers(self, length: int, header: bytes) -> None:
        text = "a" * length
        assert pack(Str(text)) == header + text.encode()

    def test_str_length_counts_utf8_bytes(self) -> None:
        assert pack(Str("é")) == b"\xa2\xc3\xa9"

    @pytest.mark.parametrize(
        ("length", "header"),
        [
            (0, b"\xc4\x00"),
            (255, b"\xc4\xff"),
            (256, b"\xc5\x01\x00"),
            (65535, b"\xc5\xff\xff"),
            (65536, b"\xc6\x00\x01\x00\x00"),
        ],
    )
    def test_bin_tiers(self, length: int, header: bytes) -> None:
        data = b"\x00" * length
        assert pack(Bin(data)) == header + data


class TestPackContainers:
    """Test array and map encodings."""

    def test_fixarray(self, small_uints: list[UInt8]) -> None:
        assert pack(Array(small_uints)) == bytes([0x95, 0x00, 0x01, 0x02, 0x03, 0x04])

    def test_empty_array(self) -> None:
        assert pack(Array([])) == b"\x90"

    def test_fixarray_boundary(self) -> None:
        assert pack(Array([Nil()] * 15)) == b"\x9f" + b"\xc0" * 15

    def test_array16(self, array16_payload: bytes) -> None:
        assert pack(Array([Nil()] * 16)) == array16_payload

    def test_array32(self) -> None:
        packed = pack(Array([Nil()] * 65536))
        assert packed[:5] == b"\xdd\x00\x01\x00\x00"
        assert len(packed) == 5 + 65536

    def test_nested_array(self) -> None:
        assert pack(Array([Array([]), Array([Nil()])])) == b"\x92\x90\x91\xc0"

    def test_fixmap(self) -> None:
        assert pack(Map({})) == b"\x80"
        assert pack(Map({Str("a"): UInt8(1)})) == b"\x81\xa1a\x01"

    def test_map16(self) -> None:
        value = Map({UInt8(i): Nil() for i in range(16)})
        packed = pack(value)

        assert packed[:3] == b"\xde\x00\x10"
        assert len(packed) == 3 + 16 * 2

    def test_map15(self) -> None:
        value = Map({UInt8(i): Nil() for i in range(15)})
        assert pack(value)[:1] == b"\x8f"


class TestPackExt:
    """Test extension encodings."""

    @pytest.mark.parametrize(
        ("length", "tag"),
        [(1, 0xD4), (2, 0xD5), (4, 0xD6), (8, 0xD7), (16, 0xD8)],
    )
    def test_fixext(self, length: int, tag: int) -> None:
        data = bytes(range(length))
        assert pack(Ext(5, data)) == bytes([tag, 0x05]) + data

    def test_negative_type(self) -> None:
        assert pack(Ext(-1, b"\xaa")) == b"\xd4\xff\xaa"

    @pytest.mark.parametrize(
        ("length", "header"),
        [
            (0, b"\xc7\x00"),
            (3, b"\xc7\x03"),
            (255, b"\xc7\xff"),
            (256, b"\xc8\x01\x00"),
            (65536, b"\xc9\x00\x01\x00\x00"),
        ],
    )
    def test_ext_tiers(self, length: int, header: bytes) -> None:
        data = b"\x01" * length
        assert pack(Ext(7, data)) == header + b"\x07" + data


class TestPackErrors:
    """Test packing failures."""

    def test_payload_too_long(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test lengths beyond the largest tier raise InvalidArgumentError."""
        # Shrink the 32-bit tier so the test doesn't need 4 GiB payloads
        monkeypatch.setattr(formats, "MAX_LEN32", 0x10000)
        oversized = b"\x00" * 0x10001

        with pytest.raises(InvalidArgumentError, match="bin of length 65537"):
            pack(Bin(oversized))
        with pytest.raises(InvalidArgumentError, match="str of length 65537"):
            pack(Str("a" * 0x10001))
        with pytest.raises(InvalidArgumentError, match="ext of length 65537"):
            pack(Ext(1, oversized))

    def test_nested_payload_too_long(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(formats, "MAX_LEN32", 0x10000)

        with pytest.raises(InvalidArgumentError):
            pack(Array([Nil(), Bin(b"\x00" * 0x10001)]))

    def test_not_a_value(self) -> None:
        with pytest.raises(TypeError, match="cannot pack str"):
            pack("hello")  # type: ignore[arg-type]
