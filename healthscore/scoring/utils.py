"""
Numeric Utilities
healthscore/scoring/utils.py

Rounding, clamping and calendar helpers shared by the scoring modules.
"""

from datetime import date
from decimal import Decimal, ROUND_HALF_UP


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, halves away from zero.

    Python's round() uses banker's rounding (round(2.5) == 2); scoring
    thresholds are defined with half-up rounding (2.5 -> 3).
    """
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def clamp(value: float, min_val: float = 0.0, max_val: float = 100.0) -> float:
    """Clamp value to range [min_val, max_val]."""
    return max(min_val, min(max_val, value))


def safe_ratio(numerator: float, denominator: float) -> float:
    """numerator / denominator, or 0.0 when the denominator is zero."""
    if denominator == 0:
        return 0.0
    return numerator / denominator


def months_between(earlier: date, later: date) -> int:
    """
    Whole calendar months from earlier to later.

    Day-of-month is ignored: 2025-01-31 -> 2025-02-01 is one month, and
    2025-01-01 -> 2025-01-31 is zero. Negative when earlier is after later.
    """
    return (later.year - earlier.year) * 12 + (later.month - earlier.month)
