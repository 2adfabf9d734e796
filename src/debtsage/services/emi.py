"""Installment math shared by the schedule, prepayment and payoff services.

All functions here are pure: rates are annual percentages, periods are
months, and nothing is rounded. Rounding is left to the callers that
present whole-currency figures.
"""

from __future__ import annotations

import math

from ..errors import InvalidInput, NonAmortizingLoan

# Slack applied before ``ceil`` so float noise such as 12.000000000001
# does not add a phantom month.
PERIOD_EPSILON = 1e-9


def monthly_rate(annual_rate_percent: float) -> float:
    """Convert an annual percentage rate into a monthly decimal rate."""

    return annual_rate_percent / 12 / 100


def accrue_monthly_interest(balance: float, annual_rate_percent: float) -> float:
    """Return one month of simple interest on ``balance``."""

    if balance <= 0:
        return 0.0
    return balance * monthly_rate(annual_rate_percent)


def emi(principal: float, annual_rate_percent: float, tenure_months: int) -> float:
    """Return the equal monthly installment for a reducing-balance loan.

    The formula is::

        emi = P * r * (1 + r)^n / ((1 + r)^n - 1)
            = P * r / (1 - (1 + r)^-n)

    where ``r`` is the monthly rate and ``n`` the tenure. A zero rate
    degenerates to straight-line repayment ``P / n``.
    """

    if principal <= 0:
        raise InvalidInput("Principal must be positive", field="principal", value=principal)
    if isinstance(tenure_months, bool) or int(tenure_months) != tenure_months or tenure_months <= 0:
        raise InvalidInput(
            "Tenure must be a positive whole number of months",
            field="tenure_months",
            value=tenure_months,
        )
    if annual_rate_percent < 0:
        raise InvalidInput(
            "Interest rate cannot be negative",
            field="annual_rate_percent",
            value=annual_rate_percent,
        )

    rate = monthly_rate(annual_rate_percent)
    if rate == 0:
        return principal / tenure_months
    # The negative power underflows to 0 for extreme terms instead of overflowing.
    discount = (1 + rate) ** -int(tenure_months)
    return principal * rate / (1 - discount)


def total_interest(emi_amount: float, tenure_months: float, principal: float) -> float:
    """Interest paid over the life of a loan: every installment minus principal."""

    return emi_amount * tenure_months - principal


def months_to_repay(balance: float, annual_rate_percent: float, payment: float) -> int:
    """Number of months a fixed ``payment`` needs to retire ``balance``.

    This inverts the installment formula::

        n = ln(emi / (emi - B * r)) / ln(1 + r)

    rounded up to a whole month. Raises ``NonAmortizingLoan`` when the
    payment does not exceed the first month's interest.
    """

    if balance <= 0:
        return 0
    if payment <= 0:
        raise InvalidInput("Payment must be positive", field="payment", value=payment)
    if annual_rate_percent < 0:
        raise InvalidInput(
            "Interest rate cannot be negative",
            field="annual_rate_percent",
            value=annual_rate_percent,
        )

    rate = monthly_rate(annual_rate_percent)
    if rate == 0:
        periods = balance / payment
    else:
        interest = balance * rate
        if payment <= interest:
            raise NonAmortizingLoan(emi=payment, interest=interest)
        periods = math.log(payment / (payment - interest)) / math.log(1 + rate)
    return max(1, math.ceil(periods - PERIOD_EPSILON))
