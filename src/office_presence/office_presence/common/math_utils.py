from __future__ import annotations


def percent_half_up(part: int, whole: int) -> int:
    """``round(part / whole * 100)`` with halves rounded up; 0 when ``whole`` is 0."""
    if whole <= 0:
        return 0
    return (part * 200 + whole) // (2 * whole)
