"""Debt payoff simulation (snowball and avalanche)."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import TYPE_CHECKING, Iterable, Union

from ..errors import InvalidInput, SimulationCapReached
from ..logging_config import get_logger
from .emi import accrue_monthly_interest
from .money import round_cents
from .schedule_dates import add_months

if TYPE_CHECKING:
    from ..config import BaseConfig

logger = get_logger(__name__)

# 30 years; guarantees termination when the budget never outpaces interest.
DEFAULT_MAX_MONTHS = 360
BALANCE_EPSILON = 0.005


class PayoffOrdering(str, Enum):
    """Order in which surplus money is directed at debts."""

    SNOWBALL = "snowball"
    AVALANCHE = "avalanche"
    CUSTOM = "custom"


_DESCRIPTIONS = {
    PayoffOrdering.SNOWBALL: "Pay smallest balances first for quick wins",
    PayoffOrdering.AVALANCHE: "Pay highest interest rates first for maximum savings",
    PayoffOrdering.CUSTOM: "Pay debts in the order supplied",
}


@dataclass(slots=True, frozen=True)
class DebtInput:
    """Represents a liability input for payoff projections."""

    balance: float
    interest_rate: float  # annual percent, e.g. 18.0
    min_payment: float = 0.0
    name: str = ""
    id: str | None = None


DebtLike = Union[DebtInput, Mapping[str, object]]


@dataclass(slots=True, frozen=True)
class PayoffDebt:
    """Simulation outcome for one debt."""

    id: str
    name: str
    original_balance: float
    balance: float
    interest_rate: float
    monthly_payment: float
    payoff_month: int | None
    payoff_date: date | None
    order: int

    @property
    def is_paid_off(self) -> bool:
        return self.payoff_month is not None


@dataclass(slots=True, frozen=True)
class DebtPayoffStrategy:
    """Result of one payoff simulation; debts are listed in payoff order."""

    name: PayoffOrdering
    description: str
    monthly_payment: float
    debts: tuple[PayoffDebt, ...]
    months: int
    payoff_date: date
    total_interest: float
    cap_reached: bool
    max_months: int

    @property
    def unpaid_debts(self) -> tuple[PayoffDebt, ...]:
        return tuple(d for d in self.debts if not d.is_paid_off)

    def raise_for_cap(self) -> None:
        """Raise ``SimulationCapReached`` if balances were left unpaid."""

        if self.cap_reached:
            raise SimulationCapReached(strategy=self, max_months=self.max_months)


@dataclass(slots=True, frozen=True)
class StrategyComparison:
    """Snowball and avalanche run against the same budget."""

    snowball: DebtPayoffStrategy
    avalanche: DebtPayoffStrategy
    total_debt: float
    total_minimum_payment: float
    extra_payment: float
    recommendation: PayoffOrdering
    interest_savings: float


def _coerce_debt(item: DebtLike, index: int) -> DebtInput:
    if isinstance(item, DebtInput):
        debt = item
    elif isinstance(item, Mapping):
        try:
            debt = DebtInput(
                balance=float(item["balance"]),
                interest_rate=float(item["interest_rate"]),
                min_payment=float(item.get("min_payment", 0.0) or 0.0),
                name=str(item.get("name", "") or ""),
                id=None if item.get("id") is None else str(item["id"]),
            )
        except KeyError as exc:
            raise InvalidInput(f"Debt #{index + 1} is missing {exc.args[0]!r}", field=str(exc.args[0])) from exc
        except (TypeError, ValueError) as exc:
            raise InvalidInput(f"Debt #{index + 1} has a non-numeric field", value=item) from exc
    else:
        raise InvalidInput(f"Debt #{index + 1} is not a debt record", value=item)

    if debt.balance < 0:
        raise InvalidInput("Debt balance cannot be negative", field="balance", value=debt.balance)
    if debt.interest_rate < 0:
        raise InvalidInput("Interest rate cannot be negative", field="interest_rate", value=debt.interest_rate)
    if debt.min_payment < 0:
        raise InvalidInput("Minimum payment cannot be negative", field="min_payment", value=debt.min_payment)
    return debt


def order_debts(debts: Iterable[DebtInput], ordering: PayoffOrdering) -> list[tuple[int, DebtInput]]:
    """Return ``(input_index, debt)`` pairs in payoff order.

    Sorting is stable, so ties keep the caller's original order.
    """

    indexed = list(enumerate(debts))
    if ordering is PayoffOrdering.SNOWBALL:
        return sorted(indexed, key=lambda pair: pair[1].balance)
    if ordering is PayoffOrdering.AVALANCHE:
        return sorted(indexed, key=lambda pair: -pair[1].interest_rate)
    return indexed


def simulate(
    debts: Iterable[DebtLike],
    total_monthly_budget: float,
    ordering: PayoffOrdering | str,
    *,
    today: date | None = None,
    max_months: int = DEFAULT_MAX_MONTHS,
    strict: bool = False,
) -> DebtPayoffStrategy:
    """Simulate paying ``total_monthly_budget`` a month across ``debts``.

    Every month, interest accrues on each open balance, then the whole
    budget is poured over the debts in ordering sequence: each debt takes
    as much as it still owes until the budget runs out. A debt's payoff
    month is the first month its balance reaches zero.

    The loop stops once everything is repaid or after ``max_months``. In
    the latter case the partial strategy is returned with
    ``cap_reached=True``; pass ``strict=True`` to raise
    ``SimulationCapReached`` instead.
    """

    ordering = PayoffOrdering(ordering)
    if total_monthly_budget < 0:
        raise InvalidInput(
            "Monthly budget cannot be negative", field="total_monthly_budget", value=total_monthly_budget
        )
    if max_months <= 0:
        raise InvalidInput("max_months must be positive", field="max_months", value=max_months)

    inputs = [_coerce_debt(item, index) for index, item in enumerate(debts)]
    ordered = order_debts(inputs, ordering)
    start = today or date.today()

    balances = [float(debt.balance) for _, debt in ordered]
    payoff_months: list[int | None] = [0 if balance <= 0 else None for balance in balances]
    total_interest = 0.0
    months = 0

    while any(balance > 0 for balance in balances) and months < max_months:
        months += 1

        for position, (_, debt) in enumerate(ordered):
            if balances[position] > 0:
                interest = accrue_monthly_interest(balances[position], debt.interest_rate)
                balances[position] += interest
                total_interest += interest

        remaining = float(total_monthly_budget)
        for position in range(len(ordered)):
            if remaining <= 0:
                break
            if balances[position] <= 0:
                continue
            payment = min(remaining, balances[position])
            balances[position] -= payment
            remaining -= payment
            if balances[position] < BALANCE_EPSILON:
                balances[position] = 0.0
            if balances[position] <= 0 and payoff_months[position] is None:
                payoff_months[position] = months

    cap_reached = any(balance > 0 for balance in balances)
    results = tuple(
        PayoffDebt(
            id=debt.id if debt.id is not None else f"debt-{index}",
            name=debt.name,
            original_balance=debt.balance,
            balance=round_cents(balances[position]),
            interest_rate=debt.interest_rate,
            monthly_payment=debt.min_payment,
            payoff_month=payoff_months[position],
            payoff_date=None if payoff_months[position] is None else add_months(start, payoff_months[position]),
            order=position + 1,
        )
        for position, (index, debt) in enumerate(ordered)
    )
    strategy = DebtPayoffStrategy(
        name=ordering,
        description=_DESCRIPTIONS[ordering],
        monthly_payment=float(total_monthly_budget),
        debts=results,
        months=months,
        payoff_date=add_months(start, months),
        total_interest=round_cents(total_interest),
        cap_reached=cap_reached,
        max_months=max_months,
    )

    if cap_reached:
        logger.warning(
            "Payoff simulation hit the month cap",
            extra={
                "strategy": ordering.value,
                "max_months": max_months,
                "unpaid": len(strategy.unpaid_debts),
            },
        )
        if strict:
            strategy.raise_for_cap()
    else:
        logger.debug(
            "Payoff simulation finished",
            extra={"strategy": ordering.value, "months": months, "total_interest": strategy.total_interest},
        )
    return strategy


def snowball(debts: Iterable[DebtLike], total_monthly_budget: float, **kwargs) -> DebtPayoffStrategy:
    """Simulate payoff prioritizing smallest balances first."""
    return simulate(debts, total_monthly_budget, PayoffOrdering.SNOWBALL, **kwargs)


def avalanche(debts: Iterable[DebtLike], total_monthly_budget: float, **kwargs) -> DebtPayoffStrategy:
    """Simulate payoff prioritizing highest interest rates first."""
    return simulate(debts, total_monthly_budget, PayoffOrdering.AVALANCHE, **kwargs)


def compare_strategies(
    debts: Iterable[DebtLike],
    extra_payment: float = 0.0,
    *,
    today: date | None = None,
    max_months: int | None = None,
    config: "BaseConfig | None" = None,
) -> StrategyComparison:
    """Run snowball and avalanche on the same debts and budget.

    The budget is the sum of every minimum payment plus ``extra_payment``.
    Avalanche is recommended only when it costs strictly less interest.
    """

    if extra_payment < 0:
        raise InvalidInput("Extra payment cannot be negative", field="extra_payment", value=extra_payment)
    if max_months is None:
        max_months = config.SIMULATION_MONTH_CAP if config is not None else DEFAULT_MAX_MONTHS

    inputs = [_coerce_debt(item, index) for index, item in enumerate(debts)]
    total_minimum = sum(d.min_payment for d in inputs)
    budget = total_minimum + extra_payment

    snowball_result = snowball(inputs, budget, today=today, max_months=max_months)
    avalanche_result = avalanche(inputs, budget, today=today, max_months=max_months)

    recommendation = (
        PayoffOrdering.AVALANCHE
        if avalanche_result.total_interest < snowball_result.total_interest
        else PayoffOrdering.SNOWBALL
    )
    return StrategyComparison(
        snowball=snowball_result,
        avalanche=avalanche_result,
        total_debt=round_cents(sum(d.balance for d in inputs)),
        total_minimum_payment=round_cents(total_minimum),
        extra_payment=extra_payment,
        recommendation=recommendation,
        interest_savings=round_cents(abs(avalanche_result.total_interest - snowball_result.total_interest)),
    )
