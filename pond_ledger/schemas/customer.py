"""
Pydantic schemas for customers.
"""

from datetime import datetime

from pydantic import BaseModel, Field


class CustomerCreate(BaseModel):
    """Create or fully replace a customer."""
    name: str = Field(min_length=1, max_length=100)
    phone: str | None = Field(default=None, max_length=30)
    address: str | None = None


class CustomerResponse(BaseModel):
    id: int
    name: str
    phone: str | None
    address: str | None
    created_at: datetime

    model_config = {"from_attributes": True}
