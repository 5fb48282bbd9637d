"""
Stock API endpoints: feed, seed stocking, and growth monitoring.
"""

from datetime import date

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from pond_ledger.auth import get_current_user
from pond_ledger.exceptions import PondLedgerError
from pond_ledger.models.base import get_db
from pond_ledger.models.user import User
from pond_ledger.services.stock_service import StockService
from pond_ledger.schemas.stock import (
    FeedStockCreate,
    FeedStockResponse,
    FeedStockSummary,
    FeedUsageCreate,
    FeedUsageResponse,
    SeedStockingCreate,
    SeedStockingResponse,
    GrowthMonitoringCreate,
    GrowthMonitoringResponse,
)

router = APIRouter(prefix="/stock", tags=["Stock"])


# --- Feed stock ---

@router.get("/feed", response_model=FeedStockSummary)
def get_feed_stock(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Feed purchases with the stock currently on hand."""
    return StockService(db).get_feed_stock()


@router.post("/feed", response_model=FeedStockResponse, status_code=201)
def add_feed_purchase(
    request: FeedStockCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    service = StockService(db)
    try:
        feed = service.add_feed_purchase(request)
        db.commit()
        return feed
    except PondLedgerError:
        db.rollback()
        raise


# --- Feed usage ---

@router.get("/feed/usage", response_model=list[FeedUsageResponse])
def list_feed_usage(
    pond_id: int | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return StockService(db).list_feed_usage(
        pond_id=pond_id, start_date=start_date, end_date=end_date
    )


@router.post("/feed/usage", response_model=FeedUsageResponse, status_code=201)
def record_feed_usage(
    request: FeedUsageCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    service = StockService(db)
    try:
        usage = service.record_feed_usage(request, user)
        db.commit()
        return usage
    except PondLedgerError:
        db.rollback()
        raise


# --- Seed stocking ---

@router.get("/seed", response_model=list[SeedStockingResponse])
def list_seed_stockings(
    pond_id: int | None = None,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return StockService(db).list_seed_stockings(pond_id=pond_id)


@router.post("/seed", response_model=SeedStockingResponse, status_code=201)
def record_seed_stocking(
    request: SeedStockingCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Log a stocking; the pond's seed date and count follow it."""
    service = StockService(db)
    try:
        stocking = service.record_seed_stocking(request, user)
        db.commit()
        return stocking
    except PondLedgerError:
        db.rollback()
        raise


# --- Growth monitoring ---

@router.get("/monitoring", response_model=list[GrowthMonitoringResponse])
def list_growth_records(
    pond_id: int | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return StockService(db).list_growth_records(
        pond_id=pond_id, start_date=start_date, end_date=end_date
    )


@router.post(
    "/monitoring",
    response_model=GrowthMonitoringResponse,
    status_code=201,
)
def record_growth(
    request: GrowthMonitoringCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    service = StockService(db)
    try:
        record = service.record_growth(request, user)
        db.commit()
        return record
    except PondLedgerError:
        db.rollback()
        raise
