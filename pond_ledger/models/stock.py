"""
Stock and pond-husbandry models.

Feed is bought in bulk (feed_stock) and drawn down per pond
(feed_usage); current stock is purchases minus usage. Seed
stockings and growth monitoring are per-pond logs.
"""

import datetime as dt

from sqlalchemy import String, Integer, Float, Date, DateTime, Text, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pond_ledger.models.base import Base


class PondRecordMixin:
    """Name lookups shared by records logged against a pond by a user."""

    @property
    def pond_name(self) -> str | None:
        return self.pond.name if self.pond else None

    @property
    def created_by_name(self) -> str | None:
        return self.creator.name if self.creator else None


class FeedStock(Base):
    __tablename__ = "feed_stock"

    id: Mapped[int] = mapped_column(primary_key=True)
    purchase_date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    quantity_sack: Mapped[float | None] = mapped_column(Float, nullable=True)
    quantity_kg: Mapped[float] = mapped_column(Float, nullable=False)
    total_price: Mapped[int] = mapped_column(Integer, nullable=False)
    brand: Mapped[str | None] = mapped_column(String(100), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime, nullable=False, default=dt.datetime.utcnow
    )

    def __repr__(self) -> str:
        return f"<FeedStock {self.purchase_date} {self.quantity_kg}kg>"


class FeedUsage(PondRecordMixin, Base):
    __tablename__ = "feed_usage"

    id: Mapped[int] = mapped_column(primary_key=True)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False, index=True)
    pond_id: Mapped[int] = mapped_column(
        ForeignKey("ponds.id"), nullable=False, index=True
    )
    quantity_kg: Mapped[float] = mapped_column(Float, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_by: Mapped[int | None] = mapped_column(
        ForeignKey("users.id"), nullable=True
    )
    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime, nullable=False, default=dt.datetime.utcnow
    )

    pond: Mapped["Pond"] = relationship()
    creator: Mapped["User"] = relationship()


class SeedStocking(PondRecordMixin, Base):
    __tablename__ = "seed_stocking"

    id: Mapped[int] = mapped_column(primary_key=True)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False, index=True)
    pond_id: Mapped[int] = mapped_column(
        ForeignKey("ponds.id"), nullable=False, index=True
    )
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    size: Mapped[str | None] = mapped_column(String(50), nullable=True)
    price: Mapped[int | None] = mapped_column(Integer, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_by: Mapped[int | None] = mapped_column(
        ForeignKey("users.id"), nullable=True
    )
    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime, nullable=False, default=dt.datetime.utcnow
    )

    pond: Mapped["Pond"] = relationship()
    creator: Mapped["User"] = relationship()


class GrowthMonitoring(PondRecordMixin, Base):
    __tablename__ = "growth_monitoring"

    id: Mapped[int] = mapped_column(primary_key=True)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False, index=True)
    pond_id: Mapped[int] = mapped_column(
        ForeignKey("ponds.id"), nullable=False, index=True
    )
    avg_weight_gram: Mapped[float | None] = mapped_column(
        Float, nullable=True
    )
    estimated_total_weight_kg: Mapped[float | None] = mapped_column(
        Float, nullable=True
    )
    pond_condition: Mapped[str | None] = mapped_column(Text, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_by: Mapped[int | None] = mapped_column(
        ForeignKey("users.id"), nullable=True
    )
    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime, nullable=False, default=dt.datetime.utcnow
    )

    pond: Mapped["Pond"] = relationship()
    creator: Mapped["User"] = relationship()
