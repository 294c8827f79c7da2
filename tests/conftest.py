"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import pytest

from msgpackvalue import UInt8


@pytest.fixture
def fixarray_payload() -> bytes:
    """Five-element fixarray of the integers 0..4."""
    return bytes([0x95, 0x00, 0x01, 0x02, 0x03, 0x04])


@pytest.fixture
def array16_payload() -> bytes:
    """array16 holding sixteen nils."""
    return bytes([0xDC, 0x00, 0x10] + [0xC0] * 16)


@pytest.fixture
def small_uints() -> list[UInt8]:
    """UInt8 values 0..4."""
    return [UInt8(i) for i in range(5)]
