"""Credit card records consumed by the calculation engine."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import ValidationError
from sqlmodel import Field, SQLModel

from ._validation import invalid_input_from


class CreditCard(SQLModel):
    """Revolving credit snapshot supplied by the storage layer.

    ``current_outstanding`` may exceed ``credit_limit`` (over-limit spend),
    in which case the available limit is negative.
    """

    id: Optional[str] = Field(default=None)
    name: str = Field(default="Card", max_length=80)
    bank_name: str = Field(default="", max_length=80)
    credit_limit: float = Field(gt=0)
    current_outstanding: float = Field(default=0.0, ge=0)
    interest_rate_apr: float = Field(default=0.0, ge=0)
    billing_cycle_date: int = Field(default=1, ge=1, le=31)
    payment_due_date: int = Field(default=20, ge=1, le=31)

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except ValidationError as exc:
            raise invalid_input_from(exc, entity="CreditCard") from exc

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "CreditCard":
        """Build a card from a loosely-typed mapping, raising ``InvalidInput``."""

        try:
            return cls.model_validate(record)
        except ValidationError as exc:
            raise invalid_input_from(exc, entity="CreditCard") from exc

    @property
    def display_name(self) -> str:
        return f"{self.bank_name} {self.name}".strip()

    @property
    def available_limit(self) -> float:
        return self.credit_limit - self.current_outstanding
