"""Service module exports."""

from . import (
    amortization,
    credit_cards,
    debts,
    dti,
    emi,
    liabilities,
    money,
    prepayment,
    schedule_dates,
)

__all__ = [
    "amortization",
    "credit_cards",
    "debts",
    "dti",
    "emi",
    "liabilities",
    "money",
    "prepayment",
    "schedule_dates",
]
