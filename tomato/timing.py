"""Deciding how much of the clock to spend on one move."""

from __future__ import annotations

import struct
from typing import Optional


def _f32(x: float) -> float:
    """Round `x` to the nearest single-precision float."""
    return struct.unpack("f", struct.pack("f", x))[0]


def _fraction_of(fraction: float, remaining: int) -> int:
    return int(_f32(_f32(fraction) * _f32(float(remaining))))


def get_search_time(movestogo: Optional[int], increment: int, remaining: int) -> int:
    """Milliseconds to spend searching, given the UCI clock information.

    `movestogo` is the number of moves until the next time control (or
    None), `increment` the per-move increment and `remaining` the time
    left, both in milliseconds.
    """
    if increment < 0 or remaining < 0:
        raise ValueError("times must not be negative")
    if movestogo is not None:
        if movestogo <= 0:
            raise ValueError("movestogo must be positive")
        return min(
            800 * remaining // (1000 * movestogo) + increment,
            _fraction_of(0.85, remaining),
        )
    return min(remaining // 80 + increment, _fraction_of(0.9, remaining))