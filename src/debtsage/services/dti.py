"""Debt-to-income ratio and its status bands."""

from __future__ import annotations

from dataclasses import dataclass

from ..errors import InvalidInput
from .money import round_cents


@dataclass(slots=True, frozen=True)
class DtiBand:
    """Display band for a DTI percentage."""

    label: str
    severity: str


# Upper bounds are inclusive: 20 is still Excellent, 20.01 is Good.
_BANDS: tuple[tuple[float, DtiBand], ...] = (
    (20, DtiBand("Excellent", "success")),
    (35, DtiBand("Good", "primary")),
    (43, DtiBand("Fair", "warning")),
)
_HIGH = DtiBand("High", "error")


def dti(total_monthly_debt_payments: float, monthly_income: float) -> float:
    """Monthly debt payments as a percentage of monthly income.

    Zero income means the income record is incomplete, so the ratio is
    reported as 0 instead of failing.
    """

    if total_monthly_debt_payments < 0:
        raise InvalidInput(
            "Debt payments cannot be negative",
            field="total_monthly_debt_payments",
            value=total_monthly_debt_payments,
        )
    if monthly_income < 0:
        raise InvalidInput("Income cannot be negative", field="monthly_income", value=monthly_income)
    if monthly_income == 0:
        return 0.0
    return round_cents(total_monthly_debt_payments / monthly_income * 100)


def dti_band(percent: float) -> DtiBand:
    """Classify a DTI percentage as Excellent, Good, Fair or High."""

    for upper, band in _BANDS:
        if percent <= upper:
            return band
    return _HIGH
