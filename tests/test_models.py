"""Tests for validated loan and credit card records."""

from __future__ import annotations

from datetime import date

import pytest
from debtsage.errors import InvalidInput
from debtsage.models import CreditCard, Loan
from tests.conftest import assert_float_equal


def _loan_record(**overrides):
    record = {
        "name": "Car loan",
        "loan_type": "Car",
        "principal": 600000,
        "outstanding_principal": 450000,
        "annual_interest_rate_percent": 9.5,
        "tenure_months": 60,
        "emi_due_day": 10,
        "start_date": "2024-04-10",
    }
    record.update(overrides)
    return record


class TestLoan:
    """Tests for the Loan record."""

    def test_from_record_parses_and_normalizes(self):
        loan = Loan.from_record(_loan_record())

        assert loan.loan_type == "car"
        assert loan.start_date == date(2024, 4, 10)
        assert loan.emi_amount is None

    def test_derived_emi_uses_original_terms(self, loan_factory):
        loan = loan_factory(outstanding_principal=30000)

        assert_float_equal(loan.monthly_emi, 8791.59)

    def test_stored_emi_wins(self, loan_factory):
        assert loan_factory(emi_amount=9000).monthly_emi == 9000

    def test_maturity_date(self, loan_factory):
        assert loan_factory(start_date=date(2025, 1, 31)).maturity_date == date(2025, 12, 31)

    def test_outstanding_above_principal_rejected(self):
        with pytest.raises(InvalidInput):
            Loan.from_record(_loan_record(outstanding_principal=700000))

    def test_end_before_start_rejected(self):
        with pytest.raises(InvalidInput):
            Loan.from_record(_loan_record(end_date="2023-01-01"))

    @pytest.mark.parametrize(
        "field,value",
        [
            ("principal", 0),
            ("tenure_months", 0),
            ("annual_interest_rate_percent", -1),
            ("emi_due_day", 32),
            ("emi_due_day", 0),
            ("emi_amount", 0),
        ],
    )
    def test_field_constraints(self, field, value):
        with pytest.raises(InvalidInput) as excinfo:
            Loan.from_record(_loan_record(**{field: value}))
        assert excinfo.value.field == field

    def test_unknown_loan_type(self):
        with pytest.raises(InvalidInput) as excinfo:
            Loan.from_record(_loan_record(loan_type="boat"))
        assert excinfo.value.field == "loan_type"

    def test_missing_field(self):
        record = _loan_record()
        del record["principal"]

        with pytest.raises(InvalidInput) as excinfo:
            Loan.from_record(record)
        assert excinfo.value.field == "principal"

    def test_direct_construction_raises_invalid_input(self):
        """Building a record directly reports the same typed error as from_record."""
        with pytest.raises(InvalidInput) as excinfo:
            Loan(
                principal=-1,
                outstanding_principal=0,
                annual_interest_rate_percent=10,
                tenure_months=12,
                start_date=date(2025, 1, 1),
            )
        assert excinfo.value.field == "principal"
        assert excinfo.value.value == -1

    def test_direct_construction_checks_cross_field_rules(self, loan_factory):
        with pytest.raises(InvalidInput) as excinfo:
            loan_factory(principal=1000, outstanding_principal=2000)
        assert excinfo.value.code == "INVALID_INPUT"
        assert excinfo.value.field is None


class TestCreditCard:
    """Tests for the CreditCard record."""

    def test_derived_fields(self, card_factory):
        card = card_factory(credit_limit=200000, current_outstanding=50000)

        assert card.available_limit == 150000
        assert card.display_name == "Test Bank Rewards"

    def test_over_limit_allowed(self, card_factory):
        card = card_factory(credit_limit=10000, current_outstanding=12000)

        assert card.available_limit == -2000

    @pytest.mark.parametrize(
        "field,value",
        [
            ("credit_limit", 0),
            ("current_outstanding", -1),
            ("interest_rate_apr", -0.5),
            ("payment_due_date", 32),
            ("billing_cycle_date", 0),
        ],
    )
    def test_field_constraints(self, field, value):
        record = {"credit_limit": 50000, "current_outstanding": 1000, field: value}

        with pytest.raises(InvalidInput) as excinfo:
            CreditCard.from_record(record)
        assert excinfo.value.field == field

    def test_direct_construction_raises_invalid_input(self):
        with pytest.raises(InvalidInput) as excinfo:
            CreditCard(credit_limit=0)
        assert excinfo.value.field == "credit_limit"
