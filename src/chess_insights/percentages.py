"""Rounding helpers shared by the aggregators."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal


def percentage(part: int, whole: int) -> int:
    """Return ``part / whole`` as a whole percentage, rounded half-up.

    A zero denominator yields 0. Each percentage is rounded on its own, so a
    win/loss/draw triple may sum to 99 or 101.
    """
    if whole <= 0:
        return 0
    return (200 * part + whole) // (2 * whole)


def round_half_up(value: float, digits: int = 1) -> float:
    """Round a float half-up (away from zero on ties) to ``digits`` decimals."""
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))
