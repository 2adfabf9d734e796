"""Impact of a lump-sum prepayment on a running loan."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..errors import InvalidInput
from ..logging_config import get_logger
from .emi import emi, months_to_repay, total_interest
from .money import round_cents

logger = get_logger(__name__)

# Prepayments this close to the balance are treated as a full payoff.
BALANCE_TOLERANCE = 0.01


class PrepaymentMode(str, Enum):
    """What the lender adjusts after a prepayment."""

    REDUCE_EMI = "reduce_emi"
    REDUCE_TENURE = "reduce_tenure"


@dataclass(slots=True, frozen=True)
class PrepaymentImpactResult:
    """Before/after comparison for a prepayment.

    Only one of ``new_emi_amount`` / ``new_tenure_months`` moves, depending
    on ``mode``; the other keeps its original value. Amounts are rounded to
    cents after every figure has been derived from the exact EMI.
    """

    mode: PrepaymentMode
    original_emi_amount: float
    original_tenure_months: int
    new_emi_amount: float
    new_tenure_months: int
    months_saved: int
    interest_saved: float

    @property
    def emi_reduced_by(self) -> float:
        return round_cents(self.original_emi_amount - self.new_emi_amount)


def prepayment_impact(
    current_balance: float,
    annual_rate_percent: float,
    remaining_tenure_months: int,
    prepayment_amount: float,
    mode: PrepaymentMode | str = PrepaymentMode.REDUCE_TENURE,
) -> PrepaymentImpactResult:
    """Recompute a loan after ``prepayment_amount`` is paid toward principal.

    ``REDUCE_EMI`` keeps the remaining tenure and re-derives the EMI on the
    reduced balance. ``REDUCE_TENURE`` keeps the current EMI and solves for
    the number of months it needs to retire the reduced balance. A
    prepayment covering the whole balance retires the loan outright.
    """

    mode = PrepaymentMode(mode)
    current_emi = emi(current_balance, annual_rate_percent, remaining_tenure_months)

    if prepayment_amount < 0:
        raise InvalidInput(
            "Prepayment cannot be negative", field="prepayment_amount", value=prepayment_amount
        )
    if prepayment_amount > current_balance + BALANCE_TOLERANCE:
        raise InvalidInput(
            "Prepayment exceeds the outstanding balance",
            field="prepayment_amount",
            value=prepayment_amount,
        )

    original_interest = total_interest(current_emi, remaining_tenure_months, current_balance)
    new_balance = current_balance - prepayment_amount

    if new_balance <= BALANCE_TOLERANCE:
        logger.debug("Prepayment retires the loan", extra={"balance": current_balance})
        return PrepaymentImpactResult(
            mode=mode,
            original_emi_amount=round_cents(current_emi),
            original_tenure_months=remaining_tenure_months,
            new_emi_amount=0.0,
            new_tenure_months=0,
            months_saved=remaining_tenure_months,
            interest_saved=round_cents(max(0.0, original_interest)),
        )

    if mode is PrepaymentMode.REDUCE_EMI:
        new_emi = emi(new_balance, annual_rate_percent, remaining_tenure_months)
        new_tenure = remaining_tenure_months
    else:
        new_emi = current_emi
        # Raises NonAmortizingLoan when the EMI cannot cover the interest.
        new_tenure = months_to_repay(new_balance, annual_rate_percent, new_emi)

    new_interest = total_interest(new_emi, new_tenure, new_balance)
    result = PrepaymentImpactResult(
        mode=mode,
        original_emi_amount=round_cents(current_emi),
        original_tenure_months=remaining_tenure_months,
        new_emi_amount=round_cents(new_emi),
        new_tenure_months=new_tenure,
        months_saved=remaining_tenure_months - new_tenure,
        # A rounded-up final month can make the naive difference dip below zero.
        interest_saved=round_cents(max(0.0, original_interest - new_interest)),
    )
    logger.debug(
        "Prepayment impact computed",
        extra={"mode": mode.value, "interest_saved": result.interest_saved},
    )
    return result
