"""Typed errors raised by the debt calculation engine.

Every failure carries a machine-readable ``code`` plus the values that
triggered it, so callers can branch on type instead of parsing messages:

    DebtSageError (base)
    +-- InvalidInput          INVALID_INPUT
    +-- NonAmortizingLoan     NON_AMORTIZING_LOAN
    +-- SimulationCapReached  SIMULATION_CAP_REACHED
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .services.debts import DebtPayoffStrategy


class DebtSageError(Exception):
    """Base class for engine errors."""

    code: str = "DEBTSAGE_ERROR"


class InvalidInput(DebtSageError, ValueError):
    """A parameter or record field is outside its allowed range."""

    code = "INVALID_INPUT"

    def __init__(self, message: str, *, field: str | None = None, value: Any = None):
        self.field = field
        self.value = value
        super().__init__(message)


class NonAmortizingLoan(DebtSageError):
    """The installment does not cover the interest accruing on the balance."""

    code = "NON_AMORTIZING_LOAN"

    def __init__(self, *, emi: float, interest: float):
        self.emi = emi
        self.interest = interest
        super().__init__(
            f"Installment {emi:.2f} does not exceed monthly interest {interest:.2f}; "
            "the balance would never decrease"
        )


class SimulationCapReached(DebtSageError):
    """A payoff simulation ran out of months with balances still unpaid.

    The partial strategy is attached so the caller can still display it.
    """

    code = "SIMULATION_CAP_REACHED"

    def __init__(self, *, strategy: "DebtPayoffStrategy", max_months: int):
        self.strategy = strategy
        self.max_months = max_months
        unpaid = sum(1 for d in strategy.debts if d.balance > 0)
        super().__init__(
            f"{strategy.name.value} simulation stopped after {max_months} months "
            f"with {unpaid} debt(s) unpaid"
        )
