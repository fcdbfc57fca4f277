"""Numeric helpers shared by the aggregation functions"""

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (12.5 -> 13, not 12)"""
    return math.floor(value + 0.5)


def percentage(part: int, whole: int) -> int:
    """Whole-number percentage of part/whole, 0 when whole is 0"""
    if whole <= 0:
        return 0
    return round_half_up(part / whole * 100)
