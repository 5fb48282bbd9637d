"""
Database models package.

All models must be imported here so that Alembic can discover
them through Base.metadata when generating migrations.
"""

from pond_ledger.models.base import Base
from pond_ledger.models.enums import UserRole, PaymentStatus, DebtStatus
from pond_ledger.models.user import User
from pond_ledger.models.customer import Customer
from pond_ledger.models.pond import FishType, Pond
from pond_ledger.models.transaction import Transaction
from pond_ledger.models.debt import Debt, DebtPayment
from pond_ledger.models.expense import Expense
from pond_ledger.models.stock import (
    FeedStock,
    FeedUsage,
    SeedStocking,
    GrowthMonitoring,
)

__all__ = [
    "Base",
    "UserRole",
    "PaymentStatus",
    "DebtStatus",
    "User",
    "Customer",
    "FishType",
    "Pond",
    "Transaction",
    "Debt",
    "DebtPayment",
    "Expense",
    "FeedStock",
    "FeedUsage",
    "SeedStocking",
    "GrowthMonitoring",
]
