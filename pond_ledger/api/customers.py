"""
Customer API endpoints.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from pond_ledger.auth import get_current_user, require_elevated
from pond_ledger.exceptions import PondLedgerError
from pond_ledger.models.base import get_db
from pond_ledger.models.user import User
from pond_ledger.services.customer_service import CustomerService
from pond_ledger.schemas.customer import CustomerCreate, CustomerResponse

router = APIRouter(prefix="/customers", tags=["Customers"])


@router.get("", response_model=list[CustomerResponse])
def list_customers(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return CustomerService(db).list_customers()


@router.get("/{customer_id}", response_model=CustomerResponse)
def get_customer(
    customer_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return CustomerService(db).get_customer(customer_id)


@router.post("", response_model=CustomerResponse, status_code=201)
def create_customer(
    request: CustomerCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    service = CustomerService(db)
    try:
        customer = service.create_customer(request)
        db.commit()
        return customer
    except PondLedgerError:
        db.rollback()
        raise


@router.put("/{customer_id}", response_model=CustomerResponse)
def update_customer(
    customer_id: int,
    request: CustomerCreate,
    db: Session = Depends(get_db),
    user: User = Depends(require_elevated),
):
    service = CustomerService(db)
    try:
        customer = service.update_customer(customer_id, request)
        db.commit()
        return customer
    except PondLedgerError:
        db.rollback()
        raise


@router.delete("/{customer_id}")
def delete_customer(
    customer_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(require_elevated),
):
    service = CustomerService(db)
    try:
        service.delete_customer(customer_id)
        db.commit()
        return {"message": "Customer deleted successfully"}
    except PondLedgerError:
        db.rollback()
        raise
