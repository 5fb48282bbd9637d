"""
Pydantic schemas for financial reports and chart data.

All money figures are integer currency units.
"""

import datetime as dt

from pydantic import BaseModel

from pond_ledger.schemas.pond import PondResponse


class CategoryTotal(BaseModel):
    category: str
    total: int
    count: int


class DailyReport(BaseModel):
    date: dt.date
    income: int
    expenses: list[CategoryTotal]
    total_expenses: int
    profit: int


class PeriodReport(BaseModel):
    start_date: dt.date
    end_date: dt.date
    income: int
    expenses: int
    profit: int


class MonthlyReport(BaseModel):
    year: int
    month: int
    start_date: dt.date
    end_date: dt.date
    income: int
    expenses: list[CategoryTotal]
    total_expenses: int
    profit: int


class IncomeSummary(BaseModel):
    total: int
    count: int


class ProfitLossReport(BaseModel):
    start_date: dt.date
    end_date: dt.date
    income: IncomeSummary
    expenses: list[CategoryTotal]
    total_expenses: int
    profit: int


class PondReport(BaseModel):
    pond: PondResponse
    income: int
    total_weight: float
    feed_usage: float
    seed_cost: int
    estimated_profit: int


class ReceivablesReport(BaseModel):
    """Receivables still open, judged by their payments."""
    open_count: int
    total_amount: int
    total_paid: int
    total_remaining: int


class MonthlyChartPoint(BaseModel):
    month: str
    income: int
    expenses: int
    profit: int


class IncomeExpenseChart(BaseModel):
    income: int
    expenses: int
