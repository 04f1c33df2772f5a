"""
collab_atlas/formatting.py — Number formatting shared by insights and tooltips.

Dashboard text renders floats with fixed decimals, rounding half away from
zero on the exact binary value (0.125 → "0.13"). Python's format() rounds
half to even, so text built with f"{x:.2f}" would occasionally disagree with
previously rendered snapshots.
"""

from decimal import ROUND_HALF_UP, Decimal


def to_fixed(value: float, digits: int = 2) -> str:
    """Format value with exactly `digits` decimals, ties rounded away from zero."""
    quantum = Decimal(1).scaleb(-digits)
    return str(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def percent(fraction: float) -> str:
    """0.4667 → '47%'."""
    return f"{to_fixed(fraction * 100, 0)}%"
