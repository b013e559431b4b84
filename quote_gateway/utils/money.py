"""Decimal rounding helpers for premium arithmetic"""

from decimal import Decimal, ROUND_HALF_UP

CENTS = Decimal("0.01")


def round_half_up(value: Decimal) -> Decimal:
    """Round to 2 decimal places, half-up (0.005 -> 0.01)"""
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)
