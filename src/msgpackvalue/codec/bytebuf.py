"""Byte-level packing and unpacking utilities.

This module provides the low-level buffer primitives the codec is built on.
All multi-byte integers are big-endian.
"""

from __future__ import annotations

import struct

from ..exceptions import InsufficientDataError

_FLOAT32 = struct.Struct(">f")
_FLOAT64 = struct.Struct(">d")


class ByteWriter:
    """Appends big-endian primitives to a growing byte buffer.

    Example:
        >>> writer = ByteWriter()
        >>> writer.write_uint(0xDC, 1)
        >>> writer.write_uint(16, 2)
        >>> writer.to_bytes()
        b'\\xdc\\x00\\x10'
    """

    def __init__(self) -> None:
        self._buffer = bytearray()

    def write_uint(self, value: int, num_bytes: int) -> None:
        """Write an unsigned integer using the specified number of bytes.

        Args:
            value: Unsigned integer value to write (must be >= 0)
            num_bytes: Number of bytes to use for encoding (1, 2, 4 or 8)

        Raises:
            ValueError: If value is negative or doesn't fit in num_bytes
        """
        if value < 0:
            raise ValueError(f"write_uint requires non-negative value, got {value}")
        if value >> (8 * num_bytes):
            raise ValueError(f"Value {value} requires more than {num_bytes} bytes")
        self._buffer += value.to_bytes(num_bytes, "big")

    def write_int(self, value: int, num_bytes: int) -> None:
        """Write a signed integer using two's complement encoding.

        Raises:
            ValueError: If value doesn't fit in num_bytes using two's complement
        """
        limit = 1 << (8 * num_bytes - 1)
        if value < -limit or value >= limit:
            raise ValueError(
                f"Value {value} doesn't fit in {num_bytes} bytes (range: {-limit} to {limit - 1})"
            )
        self._buffer += value.to_bytes(num_bytes, "big", signed=True)

    def write_float32(self, value: float) -> None:
        self._buffer += _FLOAT32.pack(value)

    def write_float64(self, value: float) -> None:
        self._buffer += _FLOAT64.pack(value)

    def write_bytes(self, data: bytes) -> None:
        """Write raw bytes."""
        self._buffer += data

    def __len__(self) -> int:
        return len(self._buffer)

    def to_bytes(self) -> bytes:
        """Return the bytes written so far."""
        return bytes(self._buffer)


class ByteReader:
    """Reads big-endian primitives from a byte buffer without copying it.

    Every read checks the bytes remaining first, so a truncated buffer
    raises InsufficientDataError and never reads out of bounds.

    Example:
        >>> reader = ByteReader(b"\\xcd\\x01\\x00")
        >>> reader.read_uint(1)
        205
        >>> reader.read_uint(2)
        256
    """

    def __init__(self, data: bytes | bytearray | memoryview) -> None:
        """Initialize a reader over the given data.

        Args:
            data: Any bytes-like object; it is not copied and must not be
                mutated while the reader is in use
        """
        self._view = memoryview(data).cast("B")
        self._position = 0

    def _take(self, num_bytes: int) -> memoryview:
        remaining = len(self._view) - self._position
        if num_bytes > remaining:
            raise InsufficientDataError(
                f"Not enough data: need {num_bytes} bytes, have {remaining} "
                f"at offset {self._position}"
            )
        chunk = self._view[self._position : self._position + num_bytes]
        self._position += num_bytes
        return chunk

    def read_uint(self, num_bytes: int) -> int:
        """Read an unsigned big-endian integer of the given byte width.

        Raises:
            InsufficientDataError: If not enough bytes are available
        """
        return int.from_bytes(self._take(num_bytes), "big")

    def read_int(self, num_bytes: int) -> int:
        """Read a signed (two's complement) big-endian integer.

        Raises:
            InsufficientDataError: If not enough bytes are available
        """
        return int.from_bytes(self._take(num_bytes), "big", signed=True)

    def read_float32(self) -> float:
        value: float = _FLOAT32.unpack(self._take(4))[0]
        return value

    def read_float64(self) -> float:
        value: float = _FLOAT64.unpack(self._take(8))[0]
        return value

    def read_bytes(self, num_bytes: int) -> bytes:
        """Read raw bytes.

        Raises:
            InsufficientDataError: If not enough bytes are available
        """
        return self._take(num_bytes).tobytes()

    def bytes_remaining(self) -> int:
        """Return the number of unread bytes."""
        return len(self._view) - self._position

    def position(self) -> int:
        """Return the current read offset in bytes."""
        return self._position

    def remainder(self) -> bytes:
        """Return a copy of the unread suffix of the buffer."""
        return self._view[self._position :].tobytes()
