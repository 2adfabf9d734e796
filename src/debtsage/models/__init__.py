"""Validated record exports."""

from .credit_card import CreditCard
from .loan import Loan

__all__ = [
    "CreditCard",
    "Loan",
]
