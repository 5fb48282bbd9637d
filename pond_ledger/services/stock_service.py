"""
Stock service: feed purchases and usage, seed stockings, and
growth monitoring.

Feed on hand is never stored: it is total purchased minus total
used, both summed from their logs on every read.
"""

import logging
from datetime import date

from sqlalchemy import select, func
from sqlalchemy.orm import Session, joinedload

from pond_ledger.exceptions import ValidationError
from pond_ledger.models.pond import Pond
from pond_ledger.models.stock import (
    FeedStock,
    FeedUsage,
    SeedStocking,
    GrowthMonitoring,
)
from pond_ledger.models.user import User
from pond_ledger.schemas.stock import (
    FeedStockCreate,
    FeedStockResponse,
    FeedStockSummary,
    FeedUsageCreate,
    SeedStockingCreate,
    GrowthMonitoringCreate,
)

logger = logging.getLogger(__name__)


class StockService:

    def __init__(self, db: Session):
        self.db = db

    def _get_pond(self, pond_id: int) -> Pond:
        pond = self.db.get(Pond, pond_id)
        if not pond:
            raise ValidationError(f"Pond {pond_id} not found")
        return pond

    def _pond_log_query(
        self,
        model,
        pond_id: int | None,
        start_date: date | None = None,
        end_date: date | None = None,
    ):
        """Filtered, newest-first query over a per-pond log table."""
        query = select(model).options(
            joinedload(model.pond), joinedload(model.creator)
        )
        if pond_id is not None:
            query = query.where(model.pond_id == pond_id)
        if start_date is not None:
            query = query.where(model.date >= start_date)
        if end_date is not None:
            query = query.where(model.date <= end_date)
        return query.order_by(model.date.desc(), model.id.desc())

    # --- Feed stock ---

    def total_feed_used(self) -> float:
        total = self.db.execute(
            select(func.coalesce(func.sum(FeedUsage.quantity_kg), 0))
        ).scalar()
        return float(total)

    def get_feed_stock(self) -> FeedStockSummary:
        stock = self.db.execute(
            select(FeedStock).order_by(
                FeedStock.purchase_date.desc(), FeedStock.id.desc()
            )
        ).scalars().all()

        total_purchased = float(sum(s.quantity_kg or 0 for s in stock))
        total_used = self.total_feed_used()
        return FeedStockSummary(
            stock=[FeedStockResponse.model_validate(s) for s in stock],
            current_stock=total_purchased - total_used,
            total_purchased=total_purchased,
            total_used=total_used,
        )

    def add_feed_purchase(self, request: FeedStockCreate) -> FeedStock:
        feed = FeedStock(
            purchase_date=request.purchase_date,
            quantity_sack=request.quantity_sack,
            quantity_kg=request.quantity_kg,
            total_price=request.total_price,
            brand=request.brand,
            notes=request.notes,
        )
        self.db.add(feed)
        self.db.flush()
        logger.info(
            "Recorded feed purchase %s: %skg for %s",
            feed.id, feed.quantity_kg, feed.total_price,
        )
        return feed

    # --- Feed usage ---

    def list_feed_usage(
        self,
        pond_id: int | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> list[FeedUsage]:
        query = self._pond_log_query(FeedUsage, pond_id, start_date, end_date)
        return list(self.db.execute(query).scalars().all())

    def record_feed_usage(
        self, request: FeedUsageCreate, user: User | None = None
    ) -> FeedUsage:
        self._get_pond(request.pond_id)
        usage = FeedUsage(
            date=request.date,
            pond_id=request.pond_id,
            quantity_kg=request.quantity_kg,
            notes=request.notes,
            created_by=user.id if user else None,
        )
        self.db.add(usage)
        self.db.flush()
        return usage

    # --- Seed stocking ---

    def list_seed_stockings(self, pond_id: int | None = None) -> list[SeedStocking]:
        query = self._pond_log_query(SeedStocking, pond_id)
        return list(self.db.execute(query).scalars().all())

    def record_seed_stocking(
        self, request: SeedStockingCreate, user: User | None = None
    ) -> SeedStocking:
        """Log a stocking and make it the pond's current seed batch."""
        pond = self._get_pond(request.pond_id)
        stocking = SeedStocking(
            date=request.date,
            pond_id=request.pond_id,
            quantity=request.quantity,
            size=request.size,
            price=request.price,
            notes=request.notes,
            created_by=user.id if user else None,
        )
        self.db.add(stocking)

        pond.seed_date = request.date
        pond.seed_count = request.quantity
        self.db.flush()
        logger.info(
            "Stocked pond %s with %s seed", pond.id, stocking.quantity
        )
        return stocking

    # --- Growth monitoring ---

    def list_growth_records(
        self,
        pond_id: int | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> list[GrowthMonitoring]:
        query = self._pond_log_query(
            GrowthMonitoring, pond_id, start_date, end_date
        )
        return list(self.db.execute(query).scalars().all())

    def record_growth(
        self, request: GrowthMonitoringCreate, user: User | None = None
    ) -> GrowthMonitoring:
        self._get_pond(request.pond_id)
        record = GrowthMonitoring(
            date=request.date,
            pond_id=request.pond_id,
            avg_weight_gram=request.avg_weight_gram,
            estimated_total_weight_kg=request.estimated_total_weight_kg,
            pond_condition=request.pond_condition,
            notes=request.notes,
            created_by=user.id if user else None,
        )
        self.db.add(record)
        self.db.flush()
        return record
