"""Pytest configuration and shared fixtures for DebtSage tests.

Provides record factories and float helpers for exercising the numeric
services without any storage layer.
"""

from __future__ import annotations

from datetime import date

import pytest

from debtsage.config import TestingConfig
from debtsage.models import CreditCard, Loan

# Fixed "today" so payoff dates are deterministic.
TODAY = date(2025, 1, 15)


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def loan_factory():
    """Factory for building validated loan records.

    Returns:
        Callable: Function that creates Loan instances
    """

    def _create_loan(
        name: str = "Test Loan",
        principal: float = 100000.0,
        outstanding_principal: float | None = None,
        annual_interest_rate_percent: float = 10.0,
        tenure_months: int = 12,
        emi_amount: float | None = None,
        emi_due_day: int = 5,
        start_date: date = date(2025, 1, 5),
        loan_type: str = "personal",
        next_emi_date: date | None = None,
        id: str | None = None,
    ) -> Loan:
        """Create a loan with sensible defaults.

        Args:
            principal: Amount financed
            outstanding_principal: Remaining balance (defaults to principal)
            annual_interest_rate_percent: Annual rate (e.g., 10.0 for 10%)
            tenure_months: Original tenure
            emi_amount: Stored EMI, or None to derive it

        Returns:
            Loan: Validated loan record
        """
        return Loan(
            id=id,
            name=name,
            loan_type=loan_type,
            principal=principal,
            outstanding_principal=principal if outstanding_principal is None else outstanding_principal,
            annual_interest_rate_percent=annual_interest_rate_percent,
            tenure_months=tenure_months,
            emi_amount=emi_amount,
            emi_due_day=emi_due_day,
            start_date=start_date,
            next_emi_date=next_emi_date,
        )

    return _create_loan


@pytest.fixture
def card_factory():
    """Factory for building validated credit card records."""

    def _create_card(
        name: str = "Rewards",
        bank_name: str = "Test Bank",
        credit_limit: float = 100000.0,
        current_outstanding: float = 50000.0,
        interest_rate_apr: float = 36.0,
        payment_due_date: int = 20,
        id: str | None = None,
    ) -> CreditCard:
        return CreditCard(
            id=id,
            name=name,
            bank_name=bank_name,
            credit_limit=credit_limit,
            current_outstanding=current_outstanding,
            interest_rate_apr=interest_rate_apr,
            payment_due_date=payment_due_date,
        )

    return _create_card


def assert_float_equal(actual: float, expected: float, tolerance: float = 0.01):
    """Assert that two floats are equal within a tolerance.

    Args:
        actual: Actual value
        expected: Expected value
        tolerance: Maximum allowed difference (default 0.01 = 1 paisa)

    Raises:
        AssertionError: If values differ by more than tolerance
    """
    assert (
        abs(actual - expected) < tolerance
    ), f"Expected {expected}, got {actual} (diff: {abs(actual - expected)})"


@pytest.fixture
def make_config(tmp_path):
    """Factory for configs whose data directory lives under ``tmp_path``.

    Environment overrides must be applied (e.g. via ``monkeypatch.setenv``)
    before calling the factory, since values are read at construction.
    """

    def _make_config() -> TestingConfig:
        return TestingConfig(data_dir=tmp_path)

    return _make_config
