"""Unit tests for byte buffer utilities."""

from __future__ import annotations

import pytest

from msgpackvalue.codec.bytebuf import ByteReader, ByteWriter
from msgpackvalue.exceptions import InsufficientDataError


class TestByteWriter:
    """Test ByteWriter functionality."""

    def test_write_uint(self) -> None:
        """Test writing unsigned integers big-endian."""
        writer = ByteWriter()
        writer.write_uint(0xDC, 1)
        writer.write_uint(16, 2)
        writer.write_uint(0x01020304, 4)

        assert len(writer) == 7
        assert writer.to_bytes() == b"\xdc\x00\x10\x01\x02\x03\x04"

    def test_write_uint_bounds(self) -> None:
        """Test uint bounds checking."""
        writer = ByteWriter()

        # Valid values
        writer.write_uint(0, 1)
        writer.write_uint(255, 1)

        # Out of bounds
        with pytest.raises(ValueError, match="negative"):
            writer.write_uint(-1, 1)

        with pytest.raises(ValueError, match="more than"):
            writer.write_uint(256, 1)

    def test_write_int(self) -> None:
        """Test writing signed integers."""
        writer = ByteWriter()
        writer.write_int(-1, 1)  # 0xff (two's complement)
        writer.write_int(-129, 2)  # 0xff7f

        assert writer.to_bytes() == b"\xff\xff\x7f"

    def test_write_int_bounds(self) -> None:
        """Test signed int bounds."""
        writer = ByteWriter()

        # 1-byte signed: -128 to 127
        writer.write_int(-128, 1)
        writer.write_int(127, 1)

        with pytest.raises(ValueError, match="doesn't fit"):
            writer.write_int(-129, 1)

        with pytest.raises(ValueError, match="doesn't fit"):
            writer.write_int(128, 1)

    def test_write_floats(self) -> None:
        """Test IEEE-754 floats are big-endian."""
        writer = ByteWriter()
        writer.write_float32(1.5)
        writer.write_float64(1.5)

        assert writer.to_bytes() == b"\x3f\xc0\x00\x00" + b"\x3f\xf8" + b"\x00" * 6

    def test_empty(self) -> None:
        """Test an unused writer yields no bytes."""
        assert ByteWriter().to_bytes() == b""


class TestByteReader:
    """Test ByteReader functionality."""

    def test_read_uint(self) -> None:
        """Test reading unsigned integers."""
        reader = ByteReader(b"\xcd\x01\x00")

        assert reader.read_uint(1) == 0xCD
        assert reader.read_uint(2) == 256
        assert reader.bytes_remaining() == 0

    def test_read_int(self) -> None:
        """Test reading signed integers."""
        reader = ByteReader(b"\xff\xff\x7f\x7f")

        assert reader.read_int(1) == -1
        assert reader.read_int(2) == -129
        assert reader.read_int(1) == 127

    def test_read_floats(self) -> None:
        """Test reading floats."""
        reader = ByteReader(b"\x3f\xc0\x00\x00" + b"\x3f\xf8" + b"\x00" * 6)

        assert reader.read_float32() == 1.5
        assert reader.read_float64() == 1.5

    def test_read_bytes_and_remainder(self) -> None:
        """Test reading raw bytes leaves the rest as remainder."""
        reader = ByteReader(b"abcdef")

        assert reader.read_bytes(2) == b"ab"
        assert reader.position() == 2
        assert reader.remainder() == b"cdef"

    def test_read_past_end(self) -> None:
        """Test reading beyond the buffer raises instead of reading out of bounds."""
        reader = ByteReader(b"\x01\x02")

        with pytest.raises(InsufficientDataError, match="need 4 bytes, have 2"):
            reader.read_uint(4)

        # The failed read consumed nothing
        assert reader.position() == 0
        assert reader.read_bytes(2) == b"\x01\x02"

        with pytest.raises(InsufficientDataError):
            reader.read_uint(1)

    def test_accepts_bytes_like(self) -> None:
        """Test bytearray and memoryview inputs."""
        assert ByteReader(bytearray(b"\x2a")).read_uint(1) == 42
        assert ByteReader(memoryview(b"\x00\x2a")[1:]).read_uint(1) == 42
