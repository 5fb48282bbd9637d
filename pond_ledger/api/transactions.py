"""
Sales transaction API endpoints.
"""

from datetime import date

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from pond_ledger.auth import get_current_user, require_elevated
from pond_ledger.exceptions import PondLedgerError
from pond_ledger.models.base import get_db
from pond_ledger.models.user import User
from pond_ledger.services.transaction_service import TransactionService
from pond_ledger.schemas.transaction import (
    TransactionCreate,
    TransactionResponse,
)

router = APIRouter(prefix="/transactions", tags=["Transactions"])


@router.get("", response_model=list[TransactionResponse])
def list_transactions(
    start_date: date | None = None,
    end_date: date | None = None,
    customer_id: int | None = None,
    pond_id: int | None = None,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """List sales, newest first."""
    service = TransactionService(db)
    return service.list_transactions(
        start_date=start_date,
        end_date=end_date,
        customer_id=customer_id,
        pond_id=pond_id,
    )


@router.get("/{transaction_id}", response_model=TransactionResponse)
def get_transaction(
    transaction_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    service = TransactionService(db)
    return service.get_transaction(transaction_id)


@router.post("", response_model=TransactionResponse, status_code=201)
def create_transaction(
    request: TransactionCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """
    Record a sale.

    An unpaid sale opens a receivable in the same commit.
    """
    service = TransactionService(db)
    try:
        txn = service.create_transaction(request, user)
        db.commit()
        return txn
    except PondLedgerError:
        db.rollback()
        raise


@router.put("/{transaction_id}", response_model=TransactionResponse)
def update_transaction(
    transaction_id: int,
    request: TransactionCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Fully replace a sale and resynchronize its receivable."""
    service = TransactionService(db)
    try:
        txn = service.update_transaction(transaction_id, request)
        db.commit()
        return txn
    except PondLedgerError:
        db.rollback()
        raise


@router.delete("/{transaction_id}")
def delete_transaction(
    transaction_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(require_elevated),
):
    """Delete a sale with its receivable. Admins and owners only."""
    service = TransactionService(db)
    try:
        service.delete_transaction(transaction_id)
        db.commit()
        return {"message": "Transaction deleted successfully"}
    except PondLedgerError:
        db.rollback()
        raise
