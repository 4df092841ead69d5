"""Expense models - manually logged actual spend."""

from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from backend.app.models.common import to_naive_utc


class ExpenseCreate(BaseModel):
    """Request body for POST /trips/{trip_id}/expenses.

    ``amount`` and ``category`` are checked by the ledger rather than here so
    that an invalid value surfaces as a ledger ``ValidationError``.
    """

    model_config = ConfigDict(extra="forbid")

    category: str
    amount: float
    currency: Annotated[str | None, Field(min_length=3, max_length=3)] = None
    description: Annotated[str | None, Field(max_length=200)] = None
    date: datetime

    @field_validator("date")
    @classmethod
    def normalize_date(cls, v: datetime) -> datetime:
        """Store dates as naive UTC."""
        return to_naive_utc(v)


class ExpenseRead(BaseModel):
    """Logged expense."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    trip_id: UUID
    category: str
    amount: float
    currency: str
    description: str | None
    date: datetime
