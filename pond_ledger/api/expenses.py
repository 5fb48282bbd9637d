"""
Expense API endpoints.
"""

from datetime import date

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from pond_ledger.auth import get_current_user, require_elevated
from pond_ledger.exceptions import PondLedgerError
from pond_ledger.models.base import get_db
from pond_ledger.models.user import User
from pond_ledger.services.expense_service import ExpenseService
from pond_ledger.schemas.expense import ExpenseCreate, ExpenseResponse

router = APIRouter(prefix="/expenses", tags=["Expenses"])


@router.get("", response_model=list[ExpenseResponse])
def list_expenses(
    start_date: date | None = None,
    end_date: date | None = None,
    category: str | None = None,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    service = ExpenseService(db)
    return service.list_expenses(
        start_date=start_date, end_date=end_date, category=category
    )


@router.get("/{expense_id}", response_model=ExpenseResponse)
def get_expense(
    expense_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return ExpenseService(db).get_expense(expense_id)


@router.post("", response_model=ExpenseResponse, status_code=201)
def create_expense(
    request: ExpenseCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    service = ExpenseService(db)
    try:
        expense = service.create_expense(request, user)
        db.commit()
        return expense
    except PondLedgerError:
        db.rollback()
        raise


@router.put("/{expense_id}", response_model=ExpenseResponse)
def update_expense(
    expense_id: int,
    request: ExpenseCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    service = ExpenseService(db)
    try:
        expense = service.update_expense(expense_id, request)
        db.commit()
        return expense
    except PondLedgerError:
        db.rollback()
        raise


@router.delete("/{expense_id}")
def delete_expense(
    expense_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(require_elevated),
):
    service = ExpenseService(db)
    try:
        service.delete_expense(expense_id)
        db.commit()
        return {"message": "Expense deleted successfully"}
    except PondLedgerError:
        db.rollback()
        raise
