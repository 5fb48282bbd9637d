"""
Pydantic schemas for ponds.
"""

from datetime import date, datetime

from pydantic import BaseModel, Field


class PondCreate(BaseModel):
    """Create or fully replace a pond."""
    name: str = Field(min_length=1, max_length=100)
    type: str = Field(min_length=1, max_length=30)
    fish_type_id: int | None = None
    seed_date: date | None = None
    seed_count: int | None = Field(default=None, ge=0)
    estimated_harvest_date: date | None = None


class PondResponse(BaseModel):
    id: int
    name: str
    type: str
    fish_type_id: int | None
    fish_type_name: str | None
    seed_date: date | None
    seed_count: int | None
    estimated_harvest_date: date | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
