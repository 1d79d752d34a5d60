"""Power-of-two rounding helpers."""

from __future__ import annotations


def floor_to_pot(x: int) -> int:
    """Round a positive integer down to the nearest power of two (0 for x < 1)."""
    if x < 1:
        return 0
    return 1 << (x.bit_length() - 1)


def ceil_to_pot(x: int) -> int:
    """Round a positive integer up to the nearest power of two (1 for x <= 1)."""
    if x <= 1:
        return 1
    return 1 << (x - 1).bit_length()