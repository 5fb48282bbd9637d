"""
Pond API endpoints.

Anyone signed in can read ponds; creating, editing and deleting
them is reserved for admins and owners.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from pond_ledger.auth import get_current_user, require_elevated
from pond_ledger.exceptions import PondLedgerError
from pond_ledger.models.base import get_db
from pond_ledger.models.user import User
from pond_ledger.services.pond_service import PondService
from pond_ledger.schemas.pond import PondCreate, PondResponse

router = APIRouter(prefix="/ponds", tags=["Ponds"])


@router.get("", response_model=list[PondResponse])
def list_ponds(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return PondService(db).list_ponds()


@router.get("/{pond_id}", response_model=PondResponse)
def get_pond(
    pond_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return PondService(db).get_pond(pond_id)


@router.post("", response_model=PondResponse, status_code=201)
def create_pond(
    request: PondCreate,
    db: Session = Depends(get_db),
    user: User = Depends(require_elevated),
):
    service = PondService(db)
    try:
        pond = service.create_pond(request)
        db.commit()
        return pond
    except PondLedgerError:
        db.rollback()
        raise


@router.put("/{pond_id}", response_model=PondResponse)
def update_pond(
    pond_id: int,
    request: PondCreate,
    db: Session = Depends(get_db),
    user: User = Depends(require_elevated),
):
    service = PondService(db)
    try:
        pond = service.update_pond(pond_id, request)
        db.commit()
        return pond
    except PondLedgerError:
        db.rollback()
        raise


@router.delete("/{pond_id}")
def delete_pond(
    pond_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(require_elevated),
):
    service = PondService(db)
    try:
        service.delete_pond(pond_id)
        db.commit()
        return {"message": "Pond deleted successfully"}
    except PondLedgerError:
        db.rollback()
        raise
