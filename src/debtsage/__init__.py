"""DebtSage debt and liability calculation engine."""

from __future__ import annotations

from .config import BaseConfig, DevConfig
from .errors import DebtSageError, InvalidInput, NonAmortizingLoan, SimulationCapReached
from .models import CreditCard, Loan
from .services.amortization import AmortizationEntry, loan_schedule, schedule, summarize_schedule
from .services.credit_cards import card_metrics, minimum_due, periodic_interest, utilization
from .services.debts import DebtInput, DebtPayoffStrategy, PayoffOrdering, compare_strategies, simulate
from .services.dti import dti, dti_band
from .services.emi import emi
from .services.prepayment import PrepaymentImpactResult, PrepaymentMode, prepayment_impact

__all__ = [
    "AmortizationEntry",
    "BaseConfig",
    "CreditCard",
    "DebtInput",
    "DebtPayoffStrategy",
    "DebtSageError",
    "DevConfig",
    "InvalidInput",
    "Loan",
    "NonAmortizingLoan",
    "PayoffOrdering",
    "PrepaymentImpactResult",
    "PrepaymentMode",
    "SimulationCapReached",
    "card_metrics",
    "compare_strategies",
    "dti",
    "dti_band",
    "emi",
    "loan_schedule",
    "minimum_due",
    "periodic_interest",
    "prepayment_impact",
    "schedule",
    "simulate",
    "summarize_schedule",
    "utilization",
]
