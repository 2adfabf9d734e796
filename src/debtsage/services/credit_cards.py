"""Credit card utilization, minimum due and interest metrics."""

from __future__ import annotations

from dataclasses import dataclass

from ..errors import InvalidInput
from ..logging_config import get_logger
from ..models.credit_card import CreditCard
from .money import round_cents, round_currency

logger = get_logger(__name__)

DEFAULT_MIN_DUE_PERCENT = 5.0
DEFAULT_MIN_DUE_FLOOR = 200.0
DAYS_PER_YEAR = 365
DAYS_PER_BILLING_CYCLE = 30


@dataclass(slots=True, frozen=True)
class CardMetrics:
    """Derived figures for one card snapshot."""

    available_limit: float
    utilization_percent: float
    utilization_status: str
    minimum_due: float
    monthly_interest: int


def utilization(outstanding: float, limit: float) -> float:
    """Percentage of the credit limit in use.

    A zero limit yields 0 rather than an error; it indicates an incomplete
    record upstream.
    """

    if limit == 0:
        logger.debug("Utilization requested for a zero credit limit")
        return 0.0
    return round_cents(outstanding / limit * 100)


def minimum_due(
    outstanding: float,
    min_percent: float = DEFAULT_MIN_DUE_PERCENT,
    floor_amount: float = DEFAULT_MIN_DUE_FLOOR,
) -> float:
    """Minimum payment for the cycle: a percentage of the balance or the floor.

    The floor is enforced even when the percentage share is smaller,
    including for a zero balance. Aggregations skip settled cards.
    """

    if min_percent < 0:
        raise InvalidInput("Minimum due percent cannot be negative", field="min_percent", value=min_percent)
    return round_cents(max(outstanding * min_percent / 100, floor_amount))


def periodic_interest(outstanding: float, apr: float, days: int = DAYS_PER_BILLING_CYCLE) -> int:
    """Flat daily-rate interest for ``days`` on ``outstanding``, in whole units."""

    if apr < 0:
        raise InvalidInput("APR cannot be negative", field="apr", value=apr)
    if days < 0:
        raise InvalidInput("Days cannot be negative", field="days", value=days)
    if outstanding <= 0:
        return 0
    daily_rate = apr / DAYS_PER_YEAR / 100
    return round_currency(outstanding * daily_rate * days)


def utilization_status(percent: float) -> str:
    """Band a utilization percentage for display."""

    if percent <= 10:
        return "excellent"
    if percent <= 30:
        return "good"
    if percent <= 50:
        return "fair"
    if percent <= 75:
        return "poor"
    return "critical"


def card_metrics(
    card: CreditCard,
    *,
    min_percent: float = DEFAULT_MIN_DUE_PERCENT,
    floor_amount: float = DEFAULT_MIN_DUE_FLOOR,
) -> CardMetrics:
    """Compute every derived figure for a card snapshot.

    A card with nothing outstanding reports no minimum due.
    """

    percent = utilization(card.current_outstanding, card.credit_limit)
    due = (
        minimum_due(card.current_outstanding, min_percent, floor_amount)
        if card.current_outstanding > 0
        else 0.0
    )
    return CardMetrics(
        available_limit=round_cents(card.available_limit),
        utilization_percent=percent,
        utilization_status=utilization_status(percent),
        minimum_due=due,
        monthly_interest=periodic_interest(card.current_outstanding, card.interest_rate_apr),
    )


def credit_health_score(
    *,
    utilization_percent: float,
    on_time_rate: float,
    active_accounts: int,
    credit_age_months: int,
) -> int:
    """Score credit health from 0 to 100.

    Weights: utilization 35, on-time payment rate 35, number of active
    accounts 15, age of the oldest account 15.
    """

    if not 0 <= on_time_rate <= 100:
        raise InvalidInput("On-time rate must be between 0 and 100", field="on_time_rate", value=on_time_rate)

    score = 0.0
    if utilization_percent <= 10:
        score += 35
    elif utilization_percent <= 30:
        score += 30
    elif utilization_percent <= 50:
        score += 20
    elif utilization_percent <= 75:
        score += 10

    score += on_time_rate / 100 * 35

    if active_accounts >= 3:
        score += 15
    elif active_accounts >= 2:
        score += 12
    elif active_accounts >= 1:
        score += 8

    if credit_age_months >= 60:
        score += 15
    elif credit_age_months >= 36:
        score += 12
    elif credit_age_months >= 24:
        score += 10
    elif credit_age_months >= 12:
        score += 6
    else:
        score += 3

    return round_currency(score)


def health_rating(score: float) -> str:
    if score >= 80:
        return "Excellent"
    if score >= 60:
        return "Good"
    if score >= 40:
        return "Fair"
    return "Poor"
