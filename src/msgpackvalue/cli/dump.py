"""Stream inspection CLI command."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TextIO

from structlog import get_logger

from ..codec.decoder import DEFAULT_MAX_DEPTH, iter_unpack

logger = get_logger()


def read_input(source: str, hex_input: bool = False) -> bytes:
    """Read packed bytes from a file path, or from stdin when source is ``-``.

    Args:
        source: File path or ``-``
        hex_input: If True, the input is hexadecimal text (whitespace ignored)

    Returns:
        Raw packed bytes

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If hex_input is set and the text is not valid hexadecimal
    """
    raw = sys.stdin.buffer.read() if source == "-" else Path(source).read_bytes()
    if hex_input:
        return bytes.fromhex("".join(raw.decode("ascii").split()))
    return raw


def dump_stream(
    data: bytes, out: TextIO = sys.stdout, *, max_depth: int = DEFAULT_MAX_DEPTH
) -> int:
    """Decode every value in data and print one line per value.

    Each line carries the value's byte offset and size on the wire followed
    by its textual rendering.

    Args:
        data: Concatenated packed values
        out: Stream to print to
        max_depth: Decoder nesting limit

    Returns:
        Number of values decoded

    Raises:
        InsufficientDataError: If the last value is truncated
        InvalidDataError: If a value is malformed
    """
    logger.debug("inspecting stream", size=len(data))

    print("|" * 7, "msgpackvalue: MessagePack Inspector", "|" * 7, file=out)

    count = 0
    for offset, size, value in iter_unpack(data, max_depth=max_depth):
        print(f"[{offset:>6}] {size:>6} bytes  {value}", file=out)
        count += 1

    print(file=out)
    print(f"{count} value{'s' if count != 1 else ''} decoded, {len(data)} bytes total.", file=out)
    return count
