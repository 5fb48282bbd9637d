"""
Pydantic schemas for sales transactions.

Weight must be positive and finite, price non-negative, and both
bounded so the total fits the database; anything else is rejected
at the boundary instead of reaching the database.
"""

import datetime as dt

from pydantic import BaseModel, Field

from pond_ledger.models.enums import PaymentStatus
from pond_ledger.schemas.limits import MAX_AMOUNT, MAX_WEIGHT_KG


class TransactionCreate(BaseModel):
    """Create or fully replace a sale. Update uses the same shape."""
    date: dt.date
    customer_id: int
    weight_kg: float = Field(gt=0, le=MAX_WEIGHT_KG, allow_inf_nan=False)
    price_per_kg: int = Field(ge=0, le=MAX_AMOUNT)
    pond_id: int | None = None
    payment_method: str | None = Field(default=None, max_length=50)
    payment_status: PaymentStatus = PaymentStatus.PAID
    notes: str | None = None


class TransactionResponse(BaseModel):
    id: int
    date: dt.date
    pond_id: int | None
    pond_name: str | None
    customer_id: int
    customer_name: str | None
    weight_kg: float
    price_per_kg: int
    total: int
    payment_method: str | None
    payment_status: PaymentStatus
    notes: str | None
    created_by: int | None
    created_by_name: str | None
    created_at: dt.datetime

    model_config = {"from_attributes": True}
