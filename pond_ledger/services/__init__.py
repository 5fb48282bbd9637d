"""Business logic services."""

from pond_ledger.services.debt_service import DebtService
from pond_ledger.services.transaction_service import TransactionService
from pond_ledger.services.customer_service import CustomerService
from pond_ledger.services.pond_service import PondService
from pond_ledger.services.expense_service import ExpenseService
from pond_ledger.services.stock_service import StockService
from pond_ledger.services.report_service import ReportService

__all__ = [
    "DebtService",
    "TransactionService",
    "CustomerService",
    "PondService",
    "ExpenseService",
    "StockService",
    "ReportService",
]
