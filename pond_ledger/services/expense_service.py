"""
Expense service: operating costs recorded against the farm.
"""

import logging
from datetime import date

from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload

from pond_ledger.exceptions import NotFoundError
from pond_ledger.models.expense import Expense
from pond_ledger.models.user import User
from pond_ledger.schemas.expense import ExpenseCreate

logger = logging.getLogger(__name__)


class ExpenseService:

    def __init__(self, db: Session):
        self.db = db

    def list_expenses(
        self,
        start_date: date | None = None,
        end_date: date | None = None,
        category: str | None = None,
    ) -> list[Expense]:
        query = select(Expense).options(joinedload(Expense.creator))
        if start_date is not None:
            query = query.where(Expense.date >= start_date)
        if end_date is not None:
            query = query.where(Expense.date <= end_date)
        if category:
            query = query.where(Expense.category == category)

        query = query.order_by(
            Expense.date.desc(), Expense.created_at.desc(), Expense.id.desc()
        )
        return list(self.db.execute(query).scalars().all())

    def get_expense(self, expense_id: int) -> Expense:
        expense = self.db.get(Expense, expense_id)
        if not expense:
            raise NotFoundError("Expense not found")
        return expense

    def create_expense(
        self, request: ExpenseCreate, user: User | None = None
    ) -> Expense:
        expense = Expense(
            date=request.date,
            category=request.category,
            amount=request.amount,
            description=request.description,
            created_by=user.id if user else None,
        )
        self.db.add(expense)
        self.db.flush()
        logger.info(
            "Recorded expense %s: %s %s", expense.id, expense.category, expense.amount
        )
        return expense

    def update_expense(
        self, expense_id: int, request: ExpenseCreate
    ) -> Expense:
        expense = self.get_expense(expense_id)
        expense.date = request.date
        expense.category = request.category
        expense.amount = request.amount
        expense.description = request.description
        self.db.flush()
        return expense

    def delete_expense(self, expense_id: int) -> None:
        expense = self.get_expense(expense_id)
        self.db.delete(expense)
        self.db.flush()
        logger.info("Deleted expense %s", expense_id)
