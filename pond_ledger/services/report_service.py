"""
Report service: financial summaries and chart data.

Reports are pure aggregation over sales and expenses: nothing is
stored, every figure is summed on request. Income is the sum of
sale totals; profit is income minus expenses.
"""

import calendar
from collections import defaultdict
from datetime import date

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from pond_ledger.config import get_settings
from pond_ledger.exceptions import NotFoundError, ValidationError
from pond_ledger.models.enums import DebtStatus
from pond_ledger.models.expense import Expense
from pond_ledger.models.pond import Pond
from pond_ledger.models.stock import FeedUsage, SeedStocking
from pond_ledger.models.transaction import Transaction
from pond_ledger.schemas.pond import PondResponse
from pond_ledger.schemas.report import (
    CategoryTotal,
    DailyReport,
    PeriodReport,
    MonthlyReport,
    IncomeSummary,
    ProfitLossReport,
    PondReport,
    ReceivablesReport,
    MonthlyChartPoint,
    IncomeExpenseChart,
)
from pond_ledger.services.debt_service import DebtService


CHART_TYPES = ("profit-monthly", "income-expense", "expense-composition")


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First and last calendar day of a month."""
    if not 1 <= month <= 12:
        raise ValidationError("Month must be between 1 and 12")
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def validate_range(start_date: date, end_date: date) -> None:
    if start_date > end_date:
        raise ValidationError("Start date must not be after end date")


class ReportService:

    def __init__(self, db: Session):
        self.db = db

    # --- Aggregates ---

    def _income(self, start_date: date, end_date: date) -> IncomeSummary:
        total, count = self.db.execute(
            select(
                func.coalesce(func.sum(Transaction.total), 0),
                func.count(Transaction.id),
            ).where(
                Transaction.date >= start_date,
                Transaction.date <= end_date,
            )
        ).one()
        return IncomeSummary(total=int(total), count=int(count))

    def _expense_total(self, start_date: date, end_date: date) -> int:
        total = self.db.execute(
            select(func.coalesce(func.sum(Expense.amount), 0)).where(
                Expense.date >= start_date,
                Expense.date <= end_date,
            )
        ).scalar()
        return int(total)

    def _expenses_by_category(
        self, start_date: date, end_date: date
    ) -> list[CategoryTotal]:
        rows = self.db.execute(
            select(
                Expense.category,
                func.coalesce(func.sum(Expense.amount), 0),
                func.count(Expense.id),
            )
            .where(Expense.date >= start_date, Expense.date <= end_date)
            .group_by(Expense.category)
            .order_by(Expense.category)
        ).all()
        return [
            CategoryTotal(category=category, total=int(total), count=int(count))
            for category, total, count in rows
        ]

    # --- Reports ---

    def daily(self, day: date) -> DailyReport:
        income = self._income(day, day).total
        expenses = self._expenses_by_category(day, day)
        total_expenses = sum(e.total for e in expenses)
        return DailyReport(
            date=day,
            income=income,
            expenses=expenses,
            total_expenses=total_expenses,
            profit=income - total_expenses,
        )

    def period(self, start_date: date, end_date: date) -> PeriodReport:
        validate_range(start_date, end_date)
        income = self._income(start_date, end_date).total
        expenses = self._expense_total(start_date, end_date)
        return PeriodReport(
            start_date=start_date,
            end_date=end_date,
            income=income,
            expenses=expenses,
            profit=income - expenses,
        )

    def monthly(self, year: int, month: int) -> MonthlyReport:
        start_date, end_date = month_bounds(year, month)
        income = self._income(start_date, end_date).total
        expenses = self._expenses_by_category(start_date, end_date)
        total_expenses = sum(e.total for e in expenses)
        return MonthlyReport(
            year=year,
            month=month,
            start_date=start_date,
            end_date=end_date,
            income=income,
            expenses=expenses,
            total_expenses=total_expenses,
            profit=income - total_expenses,
        )

    def profit_loss(self, start_date: date, end_date: date) -> ProfitLossReport:
        validate_range(start_date, end_date)
        income = self._income(start_date, end_date)
        expenses = self._expenses_by_category(start_date, end_date)
        total_expenses = sum(e.total for e in expenses)
        return ProfitLossReport(
            start_date=start_date,
            end_date=end_date,
            income=income,
            expenses=expenses,
            total_expenses=total_expenses,
            profit=income.total - total_expenses,
        )

    def pond(self, pond_id: int) -> PondReport:
        """
        Per-pond summary.

        Estimated profit counts seed cost only; feed is tracked in kg
        without a per-pond price.
        """
        pond = self.db.get(Pond, pond_id)
        if not pond:
            raise NotFoundError("Pond not found")

        income, total_weight = self.db.execute(
            select(
                func.coalesce(func.sum(Transaction.total), 0),
                func.coalesce(func.sum(Transaction.weight_kg), 0),
            ).where(Transaction.pond_id == pond_id)
        ).one()
        feed_usage = self.db.execute(
            select(func.coalesce(func.sum(FeedUsage.quantity_kg), 0)).where(
                FeedUsage.pond_id == pond_id
            )
        ).scalar()
        seed_cost = self.db.execute(
            select(func.coalesce(func.sum(SeedStocking.price), 0)).where(
                SeedStocking.pond_id == pond_id
            )
        ).scalar()

        return PondReport(
            pond=PondResponse.model_validate(pond),
            income=int(income),
            total_weight=float(total_weight),
            feed_usage=float(feed_usage),
            seed_cost=int(seed_cost),
            estimated_profit=int(income) - int(seed_cost),
        )

    def receivables(self) -> ReceivablesReport:
        """Totals over the debts whose payments do not yet cover them."""
        open_debts = DebtService(self.db).list_debts(status=DebtStatus.UNPAID)
        return ReceivablesReport(
            open_count=len(open_debts),
            total_amount=sum(d.amount for d in open_debts),
            total_paid=sum(d.paid_amount for d in open_debts),
            total_remaining=sum(d.remaining_amount for d in open_debts),
        )

    # --- Charts ---

    def chart(
        self,
        chart_type: str,
        start_date: date | None = None,
        end_date: date | None = None,
    ):
        """
        Chart data for the dashboard.

        Without an explicit range the chart covers
        CHART_DEFAULT_START_DATE up to today.
        """
        if chart_type not in CHART_TYPES:
            raise ValidationError("Invalid chart type")

        if start_date is None:
            start_date = date.fromisoformat(
                get_settings().CHART_DEFAULT_START_DATE
            )
        if end_date is None:
            end_date = date.today()

        if chart_type == "profit-monthly":
            return self.profit_by_month(start_date, end_date)
        if chart_type == "income-expense":
            return IncomeExpenseChart(
                income=self._income(start_date, end_date).total,
                expenses=self._expense_total(start_date, end_date),
            )
        return self._expenses_by_category(start_date, end_date)

    def profit_by_month(
        self, start_date: date, end_date: date
    ) -> list[MonthlyChartPoint]:
        """
        Income, expenses and profit per YYYY-MM month.

        Sales and expenses are bucketed separately and merged on the
        month key, so a month with only one of the two still appears.
        """
        income_by_month: dict[str, int] = defaultdict(int)
        sales = self.db.execute(
            select(Transaction.date, Transaction.total).where(
                Transaction.date >= start_date,
                Transaction.date <= end_date,
            )
        ).all()
        for sale_date, total in sales:
            income_by_month[sale_date.strftime("%Y-%m")] += total

        expenses_by_month: dict[str, int] = defaultdict(int)
        expenses = self.db.execute(
            select(Expense.date, Expense.amount).where(
                Expense.date >= start_date,
                Expense.date <= end_date,
            )
        ).all()
        for expense_date, amount in expenses:
            expenses_by_month[expense_date.strftime("%Y-%m")] += amount

        months = sorted(set(income_by_month) | set(expenses_by_month))
        return [
            MonthlyChartPoint(
                month=month,
                income=income_by_month[month],
                expenses=expenses_by_month[month],
                profit=income_by_month[month] - expenses_by_month[month],
            )
            for month in months
        ]
