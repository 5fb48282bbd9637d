"""
Receivable API endpoints.

The API layer is thin: it authenticates the caller, owns the
commit/rollback of each request, and delegates all business logic
to the DebtService.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from pond_ledger.auth import get_current_user
from pond_ledger.exceptions import PondLedgerError
from pond_ledger.models.base import get_db
from pond_ledger.models.enums import DebtStatus
from pond_ledger.models.user import User
from pond_ledger.services.debt_service import DebtService
from pond_ledger.schemas.debt import (
    DebtCreate,
    DebtResponse,
    DebtDetailResponse,
    DebtPaymentCreate,
    DebtPaymentResponse,
)

router = APIRouter(prefix="/debts", tags=["Debts"])


@router.get("", response_model=list[DebtResponse])
def list_debts(
    status: DebtStatus | None = None,
    customer_id: int | None = None,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """
    List receivables, newest first.

    paid_amount, remaining_amount and status are derived from
    the recorded payments.
    """
    service = DebtService(db)
    return service.list_debts(status=status, customer_id=customer_id)


@router.post("", response_model=DebtResponse, status_code=201)
def create_debt(
    request: DebtCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Open a receivable that is not tied to a recorded sale."""
    service = DebtService(db)
    try:
        debt = service.create_debt(request)
        db.commit()
        return debt
    except PondLedgerError:
        db.rollback()
        raise


@router.get("/{debt_id}", response_model=DebtDetailResponse)
def get_debt(
    debt_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Get one receivable with its payments."""
    service = DebtService(db)
    return service.get_debt(debt_id)


@router.post(
    "/{debt_id}/payments",
    response_model=DebtPaymentResponse,
    status_code=201,
)
def record_payment(
    debt_id: int,
    request: DebtPaymentCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """
    Record a payment against a receivable.

    The payment and the refreshed debt totals are committed
    together.
    """
    service = DebtService(db)
    try:
        payment = service.record_payment(debt_id, request)
        db.commit()
        return payment
    except PondLedgerError:
        db.rollback()
        raise


@router.get(
    "/{debt_id}/payments",
    response_model=list[DebtPaymentResponse],
)
def get_payments(
    debt_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """List a receivable's payments, newest first."""
    service = DebtService(db)
    return service.get_payments(debt_id)
