"""
Pydantic schemas for feed, seed and growth records.
"""

import datetime as dt

from pydantic import BaseModel, Field

from pond_ledger.schemas.limits import MAX_AMOUNT


# --- Feed ---

class FeedStockCreate(BaseModel):
    purchase_date: dt.date
    quantity_kg: float = Field(gt=0, allow_inf_nan=False)
    total_price: int = Field(ge=0, le=MAX_AMOUNT)
    quantity_sack: float | None = Field(
        default=None, ge=0, allow_inf_nan=False
    )
    brand: str | None = Field(default=None, max_length=100)
    notes: str | None = None


class FeedStockResponse(BaseModel):
    id: int
    purchase_date: dt.date
    quantity_sack: float | None
    quantity_kg: float
    total_price: int
    brand: str | None
    notes: str | None
    created_at: dt.datetime

    model_config = {"from_attributes": True}


class FeedStockSummary(BaseModel):
    """Purchases newest first, with stock on hand in kg."""
    stock: list[FeedStockResponse]
    current_stock: float
    total_purchased: float
    total_used: float


class FeedUsageCreate(BaseModel):
    date: dt.date
    pond_id: int
    quantity_kg: float = Field(gt=0, allow_inf_nan=False)
    notes: str | None = None


class FeedUsageResponse(BaseModel):
    id: int
    date: dt.date
    pond_id: int
    pond_name: str | None
    quantity_kg: float
    notes: str | None
    created_by: int | None
    created_by_name: str | None
    created_at: dt.datetime

    model_config = {"from_attributes": True}


# --- Seed ---

class SeedStockingCreate(BaseModel):
    date: dt.date
    pond_id: int
    quantity: int = Field(gt=0)
    size: str | None = Field(default=None, max_length=50)
    price: int | None = Field(default=None, ge=0, le=MAX_AMOUNT)
    notes: str | None = None


class SeedStockingResponse(BaseModel):
    id: int
    date: dt.date
    pond_id: int
    pond_name: str | None
    quantity: int
    size: str | None
    price: int | None
    notes: str | None
    created_by: int | None
    created_by_name: str | None
    created_at: dt.datetime

    model_config = {"from_attributes": True}


# --- Growth monitoring ---

class GrowthMonitoringCreate(BaseModel):
    date: dt.date
    pond_id: int
    avg_weight_gram: float | None = Field(default=None, ge=0)
    estimated_total_weight_kg: float | None = Field(default=None, ge=0)
    pond_condition: str | None = None
    notes: str | None = None


class GrowthMonitoringResponse(BaseModel):
    id: int
    date: dt.date
    pond_id: int
    pond_name: str | None
    avg_weight_gram: float | None
    estimated_total_weight_kg: float | None
    pond_condition: str | None
    notes: str | None
    created_by: int | None
    created_by_name: str | None
    created_at: dt.datetime

    model_config = {"from_attributes": True}
