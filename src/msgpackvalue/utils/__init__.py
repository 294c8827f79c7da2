"""Utility functions for msgpackvalue.

This module provides size calculation without encoding.
"""

from __future__ import annotations

from .sizing import integer_payload_size, packed_size

__all__ = [
    "packed_size",
    "integer_payload_size",
]
