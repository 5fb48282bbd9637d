"""
Report API endpoints.

Read-only aggregations over sales, expenses, stock and
receivables.
"""

from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from pond_ledger.auth import get_current_user
from pond_ledger.models.base import get_db
from pond_ledger.models.user import User
from pond_ledger.services.report_service import ReportService
from pond_ledger.schemas.report import (
    CategoryTotal,
    DailyReport,
    PeriodReport,
    MonthlyReport,
    ProfitLossReport,
    PondReport,
    ReceivablesReport,
    MonthlyChartPoint,
    IncomeExpenseChart,
)

router = APIRouter(prefix="/reports", tags=["Reports"])


@router.get("/daily", response_model=DailyReport)
def daily_report(
    date: date,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return ReportService(db).daily(date)


@router.get("/weekly", response_model=PeriodReport)
def weekly_report(
    start_date: date,
    end_date: date,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return ReportService(db).period(start_date, end_date)


@router.get("/monthly", response_model=MonthlyReport)
def monthly_report(
    year: int = Query(ge=1900, le=9999),
    month: int = Query(ge=1, le=12),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return ReportService(db).monthly(year, month)


@router.get("/pond/{pond_id}", response_model=PondReport)
def pond_report(
    pond_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return ReportService(db).pond(pond_id)


@router.get("/profit-loss", response_model=ProfitLossReport)
def profit_loss_report(
    start_date: date,
    end_date: date,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return ReportService(db).profit_loss(start_date, end_date)


@router.get("/receivables", response_model=ReceivablesReport)
def receivables_report(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return ReportService(db).receivables()


@router.get(
    "/charts",
    response_model=(
        list[MonthlyChartPoint] | IncomeExpenseChart | list[CategoryTotal]
    ),
)
def chart_data(
    type: str,
    start_date: date | None = None,
    end_date: date | None = None,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """
    Dashboard chart data.

    type is one of profit-monthly, income-expense or
    expense-composition.
    """
    return ReportService(db).chart(type, start_date, end_date)
