"""Month-by-month amortization schedules."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Iterator

from ..errors import NonAmortizingLoan
from ..logging_config import get_logger
from ..models.loan import Loan
from .emi import emi, monthly_rate, months_to_repay
from .money import round_cents, round_currency
from .schedule_dates import add_months, due_date_in_month, next_due_date

logger = get_logger(__name__)

# Residual balances below half a paisa are float noise, not debt.
BALANCE_EPSILON = 0.005


@dataclass(slots=True, frozen=True)
class AmortizationEntry:
    """One month of a schedule, in whole currency units."""

    month: int
    due_date: date
    opening_balance: int
    emi: int
    principal_component: int
    interest_component: int
    closing_balance: int


@dataclass(slots=True, frozen=True)
class ScheduleSummary:
    """Totals over a generated schedule."""

    months: int
    total_interest: float
    total_principal: float
    total_paid: float
    payoff_date: date | None


def _ensure_amortizing(balance: float, rate: float, installment: float) -> None:
    interest = balance * rate
    if installment - interest <= 0:
        logger.warning(
            "Installment does not cover interest",
            extra={"balance": balance, "emi": installment, "interest": interest},
        )
        raise NonAmortizingLoan(emi=installment, interest=interest)


def _generate_entries(
    *,
    balance: float,
    rate: float,
    installment: float,
    max_months: int,
    first_due: date,
    due_day: int | None = None,
) -> Iterator[AmortizationEntry]:
    for month in range(1, max_months + 1):
        if balance <= 0:
            return
        interest = balance * rate
        principal_part = min(installment - interest, balance)
        if principal_part <= 0:
            raise NonAmortizingLoan(emi=installment, interest=interest)
        closing = max(0.0, balance - principal_part)
        if closing < BALANCE_EPSILON:
            closing = 0.0

        due = add_months(first_due, month - 1)
        if due_day is not None:
            due = due_date_in_month(due.year, due.month, due_day)

        yield AmortizationEntry(
            month=month,
            due_date=due,
            opening_balance=round_currency(balance),
            emi=round_currency(principal_part + interest),
            principal_component=round_currency(principal_part),
            interest_component=round_currency(interest),
            closing_balance=round_currency(closing),
        )
        balance = closing


def schedule(
    principal: float,
    annual_rate_percent: float,
    tenure_months: int,
    start_date: date,
) -> Iterator[AmortizationEntry]:
    """Return the amortization schedule for a new loan.

    Inputs are validated and the loan is checked for amortization when this
    function is called; the entries themselves are produced lazily, one per
    month, stopping early once the balance is retired. The iterator can
    only be consumed once.
    """

    installment = emi(principal, annual_rate_percent, tenure_months)
    rate = monthly_rate(annual_rate_percent)
    _ensure_amortizing(principal, rate, installment)
    logger.debug(
        "Generating schedule",
        extra={"principal": principal, "rate": annual_rate_percent, "tenure": tenure_months},
    )
    return _generate_entries(
        balance=float(principal),
        rate=rate,
        installment=installment,
        max_months=int(tenure_months),
        first_due=start_date,
    )


def loan_schedule(loan: Loan, *, today: date | None = None) -> Iterator[AmortizationEntry]:
    """Return the remaining schedule for an existing loan record.

    The outstanding principal is repaid with the loan's stored EMI (or the
    closed-form EMI when none is stored), starting at the next EMI due day
    on or after *today*. A stored EMI that cannot cover the monthly
    interest raises ``NonAmortizingLoan``.
    """

    balance = loan.outstanding_principal
    if balance <= 0:
        return iter(())

    rate = monthly_rate(loan.annual_interest_rate_percent)
    installment = loan.monthly_emi
    _ensure_amortizing(balance, rate, installment)
    remaining = months_to_repay(balance, loan.annual_interest_rate_percent, installment)
    first_due = next_due_date(today=today or date.today(), due_day=loan.emi_due_day)
    return _generate_entries(
        balance=balance,
        rate=rate,
        installment=installment,
        # One spare month absorbs float residue left by the closed-form count.
        max_months=remaining + 1,
        first_due=first_due,
        due_day=loan.emi_due_day,
    )


def summarize_schedule(entries: Iterable[AmortizationEntry]) -> ScheduleSummary:
    """Return (months, totals, payoff date) for a schedule."""

    months = 0
    total_interest = 0
    total_principal = 0
    payoff_date: date | None = None
    for entry in entries:
        months += 1
        total_interest += entry.interest_component
        total_principal += entry.principal_component
        payoff_date = entry.due_date
    return ScheduleSummary(
        months=months,
        total_interest=round_cents(total_interest),
        total_principal=round_cents(total_principal),
        total_paid=round_cents(total_interest + total_principal),
        payoff_date=payoff_date,
    )
