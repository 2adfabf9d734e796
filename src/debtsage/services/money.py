"""Rounding helpers for reported money values."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

_WHOLE = Decimal("1")
_CENTS = Decimal("0.01")


def round_currency(amount: float) -> int:
    """Round to whole currency units, halves away from zero."""

    return int(Decimal(repr(float(amount))).quantize(_WHOLE, rounding=ROUND_HALF_UP))


def round_cents(amount: float) -> float:
    """Round to two decimal places, halves away from zero."""

    return float(Decimal(repr(float(amount))).quantize(_CENTS, rounding=ROUND_HALF_UP))
