"""
Tests for the ReportService.

Reports only aggregate, so each test records a few sales and
expenses and checks the sums.
"""

from datetime import date

import pytest

from pond_ledger.exceptions import NotFoundError, ValidationError
from pond_ledger.models import Expense
from pond_ledger.models.enums import PaymentStatus
from pond_ledger.services.debt_service import DebtService
from pond_ledger.services.report_service import ReportService, month_bounds
from pond_ledger.services.stock_service import StockService
from pond_ledger.services.transaction_service import TransactionService
from pond_ledger.schemas.debt import DebtPaymentCreate
from pond_ledger.schemas.stock import FeedUsageCreate, SeedStockingCreate
from pond_ledger.schemas.transaction import TransactionCreate


def record_sale(db_session, customer, day, weight_kg=10, price_per_kg=1000,
                **kwargs):
    txn = TransactionService(db_session).create_transaction(TransactionCreate(
        date=day,
        customer_id=customer.id,
        weight_kg=weight_kg,
        price_per_kg=price_per_kg,
        **kwargs,
    ))
    db_session.commit()
    return txn


def record_expense(db_session, day, category, amount):
    db_session.add(Expense(date=day, category=category, amount=amount))
    db_session.commit()


class TestMonthBounds:

    def test_leap_february(self):
        assert month_bounds(2024, 2) == (date(2024, 2, 1), date(2024, 2, 29))

    def test_thirty_day_month(self):
        assert month_bounds(2024, 4)[1] == date(2024, 4, 30)

    def test_invalid_month(self):
        with pytest.raises(ValidationError):
            month_bounds(2024, 13)


class TestDailyReport:

    def test_profit_is_income_minus_expenses(self, db_session, customer):
        day = date(2024, 3, 1)
        record_sale(db_session, customer, day)
        record_expense(db_session, day, "pakan", 3000)
        record_expense(db_session, day, "listrik", 1000)
        record_expense(db_session, date(2024, 3, 2), "pakan", 9999)

        report = ReportService(db_session).daily(day)
        assert report.income == 10000
        assert report.total_expenses == 4000
        assert report.profit == 6000
        assert {e.category: e.total for e in report.expenses} == {
            "listrik": 1000, "pakan": 3000,
        }


class TestPeriodReports:

    def test_weekly_sums_range(self, db_session, customer):
        record_sale(db_session, customer, date(2024, 3, 1))
        record_sale(db_session, customer, date(2024, 3, 7))
        record_sale(db_session, customer, date(2024, 3, 8))
        record_expense(db_session, date(2024, 3, 3), "pakan", 2500)

        report = ReportService(db_session).period(
            date(2024, 3, 1), date(2024, 3, 7)
        )
        assert report.income == 20000
        assert report.expenses == 2500
        assert report.profit == 17500

    def test_reversed_range_rejected(self, db_session):
        with pytest.raises(ValidationError):
            ReportService(db_session).period(date(2024, 3, 7), date(2024, 3, 1))

    def test_monthly_includes_last_day(self, db_session, customer):
        record_sale(db_session, customer, date(2024, 4, 30))
        record_sale(db_session, customer, date(2024, 5, 1))

        report = ReportService(db_session).monthly(2024, 4)
        assert report.end_date == date(2024, 4, 30)
        assert report.income == 10000

    def test_profit_loss_counts_sales(self, db_session, customer):
        record_sale(db_session, customer, date(2024, 3, 1))
        record_sale(db_session, customer, date(2024, 3, 2), weight_kg=5)
        record_expense(db_session, date(2024, 3, 2), "bibit", 4000)

        report = ReportService(db_session).profit_loss(
            date(2024, 3, 1), date(2024, 3, 31)
        )
        assert report.income.total == 15000
        assert report.income.count == 2
        assert report.expenses[0].count == 1
        assert report.profit == 11000


class TestPondReport:

    def test_summarizes_pond(self, db_session, customer, pond):
        record_sale(db_session, customer, date(2024, 3, 1), pond_id=pond.id)
        stock = StockService(db_session)
        stock.record_feed_usage(FeedUsageCreate(
            date=date(2024, 3, 1), pond_id=pond.id, quantity_kg=12.5,
        ))
        stock.record_seed_stocking(SeedStockingCreate(
            date=date(2024, 1, 1), pond_id=pond.id, quantity=1000, price=3000,
        ))
        db_session.commit()

        report = ReportService(db_session).pond(pond.id)
        assert report.pond.name == "Kolam 1"
        assert report.income == 10000
        assert report.total_weight == 10
        assert report.feed_usage == 12.5
        assert report.seed_cost == 3000
        assert report.estimated_profit == 7000

    def test_unknown_pond_raises(self, db_session):
        with pytest.raises(NotFoundError):
            ReportService(db_session).pond(999)


class TestReceivables:

    def test_counts_only_open_debts(self, db_session, customer):
        open_sale = record_sale(
            db_session, customer, date(2024, 3, 1),
            payment_status=PaymentStatus.UNPAID,
        )
        settled_sale = record_sale(
            db_session, customer, date(2024, 3, 2), weight_kg=1,
            payment_status=PaymentStatus.UNPAID,
        )
        debts = DebtService(db_session)
        [open_debt] = debts.get_debts_for_transaction(open_sale.id)
        [settled] = debts.get_debts_for_transaction(settled_sale.id)
        for debt_id, amount in ((open_debt.id, 4000), (settled.id, 1000)):
            debts.record_payment(debt_id, DebtPaymentCreate(
                payment_date=date(2024, 3, 3), amount=amount,
            ))
        db_session.commit()

        report = ReportService(db_session).receivables()
        assert report.open_count == 1
        assert report.total_amount == 10000
        assert report.total_paid == 4000
        assert report.total_remaining == 6000


class TestCharts:

    def test_profit_monthly_merges_months(self, db_session, customer):
        record_sale(db_session, customer, date(2024, 1, 15))
        record_expense(db_session, date(2024, 2, 3), "pakan", 2000)

        points = ReportService(db_session).chart(
            "profit-monthly", date(2024, 1, 1), date(2024, 12, 31)
        )
        assert [(p.month, p.income, p.expenses, p.profit) for p in points] == [
            ("2024-01", 10000, 0, 10000),
            ("2024-02", 0, 2000, -2000),
        ]

    def test_income_expense(self, db_session, customer):
        record_sale(db_session, customer, date(2024, 1, 15))
        record_expense(db_session, date(2024, 2, 3), "pakan", 2000)

        chart = ReportService(db_session).chart(
            "income-expense", date(2024, 1, 1), date(2024, 12, 31)
        )
        assert chart.income == 10000
        assert chart.expenses == 2000

    def test_default_range_starts_at_configured_date(self, db_session, customer):
        record_sale(db_session, customer, date(2023, 12, 31))
        record_sale(db_session, customer, date(2024, 1, 1))

        chart = ReportService(db_session).chart("income-expense")
        assert chart.income == 10000

    def test_unknown_type_rejected(self, db_session):
        with pytest.raises(ValidationError, match="Invalid chart type"):
            ReportService(db_session).chart("pie")
