"""Loan records consumed by the calculation engine."""

from __future__ import annotations

from datetime import date
from typing import Any, ClassVar, Optional

from pydantic import ValidationError, field_validator, model_validator
from sqlmodel import Field, SQLModel

from ._validation import invalid_input_from


class Loan(SQLModel):
    """Installment loan snapshot supplied by the storage layer.

    Field constraints are checked when the record is built, so malformed
    loans never reach the numeric services. ``next_emi_date`` is the first
    unpaid installment when the storage layer tracks payments; without it
    the next due date is derived from ``emi_due_day``.
    """

    LOAN_TYPES: ClassVar[frozenset[str]] = frozenset(
        {"home", "car", "personal", "education", "gold", "other"}
    )

    id: Optional[str] = Field(default=None)
    name: str = Field(default="Loan", max_length=80)
    loan_type: str = Field(default="other")
    principal: float = Field(gt=0)
    outstanding_principal: float = Field(ge=0)
    annual_interest_rate_percent: float = Field(ge=0)
    tenure_months: int = Field(gt=0)
    emi_amount: Optional[float] = Field(default=None, gt=0)
    emi_due_day: int = Field(default=1, ge=1, le=31)
    start_date: date
    end_date: Optional[date] = Field(default=None)
    next_emi_date: Optional[date] = Field(default=None)

    @field_validator("loan_type")
    @classmethod
    def normalize_loan_type(cls, value: str) -> str:
        normalized = value.strip().lower()
        if normalized not in cls.LOAN_TYPES:
            raise ValueError(f"loan_type must be one of {sorted(cls.LOAN_TYPES)}")
        return normalized

    @model_validator(mode="after")
    def check_balances_and_dates(self) -> "Loan":
        if self.outstanding_principal > self.principal:
            raise ValueError("outstanding_principal cannot exceed principal")
        if self.end_date is not None and self.end_date < self.start_date:
            raise ValueError("end_date cannot be before start_date")
        return self

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except ValidationError as exc:
            raise invalid_input_from(exc, entity="Loan") from exc

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "Loan":
        """Build a loan from a loosely-typed mapping, raising ``InvalidInput``."""

        try:
            return cls.model_validate(record)
        except ValidationError as exc:
            raise invalid_input_from(exc, entity="Loan") from exc

    @property
    def monthly_emi(self) -> float:
        """Stored EMI, or the closed-form EMI over the original terms."""

        if self.emi_amount is not None:
            return self.emi_amount
        from ..services.emi import emi

        return emi(self.principal, self.annual_interest_rate_percent, self.tenure_months)

    @property
    def maturity_date(self) -> date:
        """Recorded end date, or the date of the last scheduled installment."""

        if self.end_date is not None:
            return self.end_date
        from ..services.schedule_dates import add_months

        return add_months(self.start_date, self.tenure_months - 1)
