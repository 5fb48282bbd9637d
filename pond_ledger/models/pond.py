"""
Pond and fish type models.

A pond is either a production pond (stocked, fed, harvested) or a
holding pond. Its seed columns mirror the latest seed stocking.
"""

from datetime import date, datetime

from sqlalchemy import String, Integer, Date, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pond_ledger.models.base import Base


# The fish type every pond is stocked with unless told otherwise.
DEFAULT_FISH_TYPE_ID = 1


class FishType(Base):
    __tablename__ = "fish_types"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )

    def __repr__(self) -> str:
        return f"<FishType {self.name}>"


class Pond(Base):
    __tablename__ = "ponds"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    type: Mapped[str] = mapped_column(String(30), nullable=False)
    fish_type_id: Mapped[int | None] = mapped_column(
        ForeignKey("fish_types.id"), nullable=True
    )
    seed_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    seed_count: Mapped[int | None] = mapped_column(Integer, nullable=True)
    estimated_harvest_date: Mapped[date | None] = mapped_column(
        Date, nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    fish_type: Mapped["FishType"] = relationship()

    @property
    def fish_type_name(self) -> str | None:
        return self.fish_type.name if self.fish_type else None

    def __repr__(self) -> str:
        return f"<Pond {self.name} ({self.type})>"
