"""Exception hierarchy for msgpackvalue.

This module defines the three failure kinds shared by packing and unpacking.
All exceptions inherit from MessagePackError for easy catching of any
msgpackvalue-specific error.
"""

from __future__ import annotations


class MessagePackError(Exception):
    """Base exception for all msgpackvalue errors."""

    pass


class InvalidArgumentError(MessagePackError):
    """Raised when a value cannot be represented within the wire format limits.

    Examples:
        - String or binary payload longer than 2^32-1 bytes
        - Extended-type payload longer than 2^32-1 bytes
        - Array or map with more than 2^32-1 entries
    """

    pass


class InsufficientDataError(MessagePackError):
    """Raised when the buffer ends before a value is complete.

    Examples:
        - Empty buffer
        - Truncated fixed-width integer or float
        - Declared string/binary/ext length larger than the bytes remaining
        - Array or map with fewer encoded elements than declared
    """

    pass


class InvalidDataError(MessagePackError):
    """Raised when the buffer does not hold a valid MessagePack value.

    Examples:
        - Reserved leading byte (0xc1)
        - String payload that is not valid UTF-8
        - Nesting deeper than the decoder's depth limit
    """

    pass
