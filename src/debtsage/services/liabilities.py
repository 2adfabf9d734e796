"""Aggregations over loan and credit card snapshots."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable

from ..config import BaseConfig
from ..errors import InvalidInput
from ..logging_config import get_logger
from ..models.credit_card import CreditCard
from ..models.loan import Loan
from .credit_cards import minimum_due, utilization
from .debts import DebtInput
from .dti import DtiBand, dti, dti_band
from .money import round_cents
from .schedule_dates import next_due_date

logger = get_logger(__name__)

WEEK_DAYS = 7


@dataclass(slots=True, frozen=True)
class LiabilitiesOverview:
    """Headline figures across every active loan and card."""

    total_debt: float
    total_monthly_payment: float
    yearly_interest: float
    debt_to_income: float
    debt_to_income_band: DtiBand
    credit_utilization: float
    loan_count: int
    loan_outstanding: float
    loan_monthly_emi: float
    card_count: int
    card_outstanding: float
    card_minimum_due: float
    high_interest_debts: int
    projected_payoff_date: date | None
    overdue_count: int
    due_within_week: int


@dataclass(slots=True, frozen=True)
class UpcomingPayment:
    """A single EMI or card payment falling due."""

    id: str | None
    name: str
    kind: str  # "loan" or "credit_card"
    amount: float
    due_date: date
    is_overdue: bool = False


def _resolve(config: BaseConfig | None) -> BaseConfig:
    return config if config is not None else BaseConfig()


def build_overview(
    *,
    loans: Iterable[Loan],
    cards: Iterable[CreditCard],
    monthly_income: float,
    today: date | None = None,
    config: BaseConfig | None = None,
) -> LiabilitiesOverview:
    """Summarize debt load, monthly obligations and credit usage.

    The projected payoff date is the latest maturity among loans still
    carrying a balance. Alert counts cover overdue payments and those due
    within a week of *today*.
    """

    config = _resolve(config)
    today = today or date.today()
    loans = list(loans)
    cards = list(cards)

    loan_outstanding = sum(loan.outstanding_principal for loan in loans)
    loan_emi = sum(loan.monthly_emi for loan in loans if loan.outstanding_principal > 0)
    loan_interest = sum(
        loan.outstanding_principal * loan.annual_interest_rate_percent / 100 for loan in loans
    )

    card_outstanding = sum(card.current_outstanding for card in cards)
    card_limit = sum(card.credit_limit for card in cards)
    card_minimum = sum(
        minimum_due(card.current_outstanding, config.CARD_MIN_DUE_PERCENT, config.CARD_MIN_DUE_FLOOR)
        for card in cards
        if card.current_outstanding > 0
    )
    card_interest = sum(
        card.current_outstanding * (card.interest_rate_apr or config.DEFAULT_CARD_APR) / 100
        for card in cards
    )

    total_monthly_payment = loan_emi + card_minimum
    ratio = dti(total_monthly_payment, monthly_income)
    high_interest = sum(
        1
        for loan in loans
        if loan.outstanding_principal > 0
        and loan.annual_interest_rate_percent > config.HIGH_INTEREST_THRESHOLD
    ) + sum(1 for card in cards if card.current_outstanding > 0)

    active_loans = [loan for loan in loans if loan.outstanding_principal > 0]
    payoff_date = max((loan.maturity_date for loan in active_loans), default=None)
    week_end = today + timedelta(days=WEEK_DAYS)
    upcoming = upcoming_payments(loans=loans, cards=cards, today=today, config=config)
    overdue = sum(1 for payment in upcoming if payment.is_overdue)
    due_soon = sum(1 for payment in upcoming if not payment.is_overdue and payment.due_date <= week_end)

    overview = LiabilitiesOverview(
        total_debt=round_cents(loan_outstanding + card_outstanding),
        total_monthly_payment=round_cents(total_monthly_payment),
        yearly_interest=round_cents(loan_interest + card_interest),
        debt_to_income=ratio,
        debt_to_income_band=dti_band(ratio),
        credit_utilization=utilization(card_outstanding, card_limit),
        loan_count=len(loans),
        loan_outstanding=round_cents(loan_outstanding),
        loan_monthly_emi=round_cents(loan_emi),
        card_count=len(cards),
        card_outstanding=round_cents(card_outstanding),
        card_minimum_due=round_cents(card_minimum),
        high_interest_debts=high_interest,
        projected_payoff_date=payoff_date,
        overdue_count=overdue,
        due_within_week=due_soon,
    )
    logger.debug(
        "Built liabilities overview",
        extra={"loans": overview.loan_count, "cards": overview.card_count, "dti": ratio},
    )
    return overview


def upcoming_payments(
    *,
    loans: Iterable[Loan],
    cards: Iterable[CreditCard],
    today: date,
    horizon_days: int = 30,
    config: BaseConfig | None = None,
) -> list[UpcomingPayment]:
    """Return payments due by ``today + horizon_days``, oldest first.

    A loan's due date is its recorded ``next_emi_date`` when present, so a
    missed installment shows up as overdue. Otherwise, and for cards, it is
    the next occurrence of the due day, clamped to the month's length.
    """

    if horizon_days < 0:
        raise InvalidInput("horizon_days cannot be negative", field="horizon_days", value=horizon_days)
    config = _resolve(config)
    horizon = today + timedelta(days=horizon_days)
    payments: list[UpcomingPayment] = []

    for loan in loans:
        if loan.outstanding_principal <= 0:
            continue
        due = loan.next_emi_date or next_due_date(today=today, due_day=loan.emi_due_day)
        if due <= horizon:
            payments.append(
                UpcomingPayment(
                    id=loan.id,
                    name=loan.name,
                    kind="loan",
                    amount=round_cents(loan.monthly_emi),
                    due_date=due,
                    is_overdue=due < today,
                )
            )

    for card in cards:
        if card.current_outstanding <= 0:
            continue
        due = next_due_date(today=today, due_day=card.payment_due_date)
        if due <= horizon:
            payments.append(
                UpcomingPayment(
                    id=card.id,
                    name=card.display_name,
                    kind="credit_card",
                    amount=minimum_due(
                        card.current_outstanding,
                        config.CARD_MIN_DUE_PERCENT,
                        config.CARD_MIN_DUE_FLOOR,
                    ),
                    due_date=due,
                )
            )

    payments.sort(key=lambda payment: payment.due_date)
    return payments


def payoff_debts(
    *,
    loans: Iterable[Loan],
    cards: Iterable[CreditCard],
    config: BaseConfig | None = None,
) -> list[DebtInput]:
    """Convert snapshots into payoff simulator inputs.

    Loans contribute their EMI as the minimum payment; cards contribute
    their minimum due and fall back to the default APR when none is
    recorded. Settled records are skipped.
    """

    config = _resolve(config)
    debts: list[DebtInput] = []
    for loan in loans:
        if loan.outstanding_principal <= 0:
            continue
        debts.append(
            DebtInput(
                id=loan.id,
                name=loan.name,
                balance=loan.outstanding_principal,
                interest_rate=loan.annual_interest_rate_percent,
                min_payment=loan.monthly_emi,
            )
        )
    for card in cards:
        if card.current_outstanding <= 0:
            continue
        debts.append(
            DebtInput(
                id=card.id,
                name=card.display_name,
                balance=card.current_outstanding,
                interest_rate=card.interest_rate_apr or config.DEFAULT_CARD_APR,
                min_payment=minimum_due(
                    card.current_outstanding,
                    config.CARD_MIN_DUE_PERCENT,
                    config.CARD_MIN_DUE_FLOOR,
                ),
            )
        )
    return debts
