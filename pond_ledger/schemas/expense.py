"""
Pydantic schemas for expenses.
"""

import datetime as dt

from pydantic import BaseModel, Field

from pond_ledger.schemas.limits import MAX_AMOUNT


class ExpenseCreate(BaseModel):
    """Create or fully replace an expense."""
    date: dt.date
    category: str = Field(min_length=1, max_length=100)
    amount: int = Field(ge=0, le=MAX_AMOUNT)
    description: str | None = None


class ExpenseResponse(BaseModel):
    id: int
    date: dt.date
    category: str
    amount: int
    description: str | None
    created_by: int | None
    created_by_name: str | None
    created_at: dt.datetime

    model_config = {"from_attributes": True}
