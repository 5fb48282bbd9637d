"""
Pydantic schemas for receivables and their payments.

Debt responses carry ``paid_amount``, ``remaining_amount`` and
``status`` as derived from the payment rows at read time, not
the cached columns on the debts table.
"""

from datetime import date, datetime

from pydantic import BaseModel, Field

from pond_ledger.models.enums import DebtStatus
from pond_ledger.schemas.limits import MAX_AMOUNT


# --- Request Schemas ---

class DebtCreate(BaseModel):
    """Open a receivable directly, without going through a sale."""
    customer_id: int
    amount: int = Field(ge=0, le=MAX_AMOUNT)
    transaction_id: int | None = None
    due_date: date | None = None
    notes: str | None = None


class DebtPaymentCreate(BaseModel):
    payment_date: date
    amount: int = Field(gt=0, le=MAX_AMOUNT)
    payment_method: str | None = Field(default=None, max_length=50)
    notes: str | None = None


# --- Response Schemas ---

class DebtPaymentResponse(BaseModel):
    id: int
    debt_id: int
    payment_date: date
    amount: int
    payment_method: str | None
    notes: str | None
    created_at: datetime

    model_config = {"from_attributes": True}


class DebtResponse(BaseModel):
    id: int
    transaction_id: int | None
    customer_id: int
    customer_name: str | None
    customer_phone: str | None
    transaction_date: date | None
    weight_kg: float | None
    price_per_kg: int | None
    amount: int
    paid_amount: int
    remaining_amount: int
    status: DebtStatus
    due_date: date | None
    notes: str | None
    created_at: datetime
    updated_at: datetime


class DebtDetailResponse(DebtResponse):
    payments: list[DebtPaymentResponse]
