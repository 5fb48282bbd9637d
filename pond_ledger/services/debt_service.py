"""
Debt service: the receivable ledger.

This service owns debts and their payments. The rules:
1. Payments are append-only; a debt's payments are the only
   authority on how much has been paid.
2. Every read derives paid_amount, remaining_amount and status
   from the payment rows. The paid_amount/status columns on the
   debts table are a cache, refreshed whenever a payment is
   recorded or the underlying sale changes.
3. The service never commits. The caller owns the unit of work,
   so a payment and the debt update it triggers are saved
   together or not at all.
"""

import logging

from sqlalchemy import select, func
from sqlalchemy.orm import Session, joinedload

from pond_ledger.exceptions import NotFoundError, ValidationError
from pond_ledger.models.customer import Customer
from pond_ledger.models.debt import Debt, DebtPayment
from pond_ledger.models.enums import DebtStatus
from pond_ledger.models.transaction import Transaction
from pond_ledger.schemas.debt import (
    DebtCreate,
    DebtPaymentCreate,
    DebtPaymentResponse,
    DebtResponse,
    DebtDetailResponse,
)

logger = logging.getLogger(__name__)


def derive_status(amount: int, total_paid: int) -> DebtStatus:
    """A debt is paid once its payments cover the amount owed."""
    return DebtStatus.PAID if amount - total_paid <= 0 else DebtStatus.UNPAID


class DebtService:

    def __init__(self, db: Session):
        self.db = db

    def _get_debt(self, debt_id: int) -> Debt:
        debt = self.db.get(Debt, debt_id)
        if not debt:
            raise NotFoundError("Debt not found")
        return debt

    def total_paid(self, debt_id: int) -> int:
        """Sum of all payments recorded against a debt."""
        total = self.db.execute(
            select(func.coalesce(func.sum(DebtPayment.amount), 0)).where(
                DebtPayment.debt_id == debt_id
            )
        ).scalar()
        return int(total)

    def _totals_by_debt(self, debt_ids: list[int]) -> dict[int, int]:
        """Payment totals for many debts in a single grouped query."""
        if not debt_ids:
            return {}
        rows = self.db.execute(
            select(DebtPayment.debt_id, func.sum(DebtPayment.amount))
            .where(DebtPayment.debt_id.in_(debt_ids))
            .group_by(DebtPayment.debt_id)
        ).all()
        return {debt_id: int(total) for debt_id, total in rows}

    def _build_response(
        self, debt: Debt, total_paid: int, response_cls=DebtResponse, **extra
    ):
        txn = debt.transaction
        customer = debt.customer
        return response_cls(
            id=debt.id,
            transaction_id=debt.transaction_id,
            customer_id=debt.customer_id,
            customer_name=customer.name if customer else None,
            customer_phone=customer.phone if customer else None,
            transaction_date=txn.date if txn else None,
            weight_kg=txn.weight_kg if txn else None,
            price_per_kg=txn.price_per_kg if txn else None,
            amount=debt.amount,
            paid_amount=total_paid,
            remaining_amount=debt.amount - total_paid,
            status=derive_status(debt.amount, total_paid),
            due_date=debt.due_date,
            notes=debt.notes,
            created_at=debt.created_at,
            updated_at=debt.updated_at,
            **extra,
        )

    # --- Reads ---

    def list_debts(
        self,
        status: DebtStatus | None = None,
        customer_id: int | None = None,
    ) -> list[DebtResponse]:
        """
        Return all debts, newest first, with figures derived from payments.

        The status filter matches the derived status, so a debt whose
        payments cover it is listed as paid whatever its cached column
        says.
        """
        query = (
            select(Debt)
            .options(joinedload(Debt.customer), joinedload(Debt.transaction))
            .order_by(Debt.created_at.desc(), Debt.id.desc())
        )
        if customer_id is not None:
            query = query.where(Debt.customer_id == customer_id)

        debts = self.db.execute(query).scalars().all()
        totals = self._totals_by_debt([d.id for d in debts])

        results = [self._build_response(d, totals.get(d.id, 0)) for d in debts]
        if status is not None:
            results = [r for r in results if r.status == status]
        return results

    def get_debt(self, debt_id: int) -> DebtDetailResponse:
        """Return one debt with its payments, newest first."""
        debt = self._get_debt(debt_id)
        payments = self.get_payments(debt_id)
        total_paid = sum(p.amount for p in payments)
        return self._build_response(
            debt,
            total_paid,
            response_cls=DebtDetailResponse,
            payments=[DebtPaymentResponse.model_validate(p) for p in payments],
        )

    def get_payments(self, debt_id: int) -> list[DebtPayment]:
        """
        Return all payments for a debt, newest first.

        An unknown debt id yields an empty list rather than an error.
        """
        payments = self.db.execute(
            select(DebtPayment)
            .where(DebtPayment.debt_id == debt_id)
            .order_by(DebtPayment.payment_date.desc(), DebtPayment.id.desc())
        ).scalars().all()
        return list(payments)

    def get_debts_for_transaction(self, transaction_id: int) -> list[Debt]:
        debts = self.db.execute(
            select(Debt).where(Debt.transaction_id == transaction_id)
        ).scalars().all()
        return list(debts)

    # --- Writes ---

    def create_debt(self, request: DebtCreate) -> DebtResponse:
        """Open a receivable directly."""
        if not self.db.get(Customer, request.customer_id):
            raise ValidationError(f"Customer {request.customer_id} not found")
        if request.transaction_id is not None:
            if not self.db.get(Transaction, request.transaction_id):
                raise ValidationError(
                    f"Transaction {request.transaction_id} not found"
                )

        debt = Debt(
            transaction_id=request.transaction_id,
            customer_id=request.customer_id,
            amount=request.amount,
            paid_amount=0,
            status=DebtStatus.UNPAID,
            due_date=request.due_date,
            notes=request.notes,
        )
        self.db.add(debt)
        self.db.flush()
        logger.info(
            "Opened debt %s for customer %s: %s",
            debt.id, debt.customer_id, debt.amount,
        )
        return self._build_response(debt, 0)

    def open_for_transaction(self, txn: Transaction) -> Debt:
        """Open a receivable for the full total of an unpaid sale."""
        debt = Debt(
            transaction_id=txn.id,
            customer_id=txn.customer_id,
            amount=txn.total,
            paid_amount=0,
            status=DebtStatus.UNPAID,
        )
        self.db.add(debt)
        self.db.flush()
        logger.info(
            "Opened debt %s for transaction %s: %s",
            debt.id, txn.id, debt.amount,
        )
        return debt

    def record_payment(
        self, debt_id: int, request: DebtPaymentCreate
    ) -> DebtPayment:
        """
        Apply a payment to a debt.

        Steps, all in the caller's unit of work:
        1. Insert the payment
        2. Recompute the total paid from all payments
        3. Cache the total on the debt; mark it paid once the
           total reaches the amount owed

        A debt already marked paid is never reverted here.
        """
        debt = self._get_debt(debt_id)

        payment = DebtPayment(
            debt_id=debt.id,
            payment_date=request.payment_date,
            amount=request.amount,
            payment_method=request.payment_method,
            notes=request.notes,
        )
        self.db.add(payment)
        self.db.flush()

        total = self.total_paid(debt.id)
        debt.paid_amount = total
        if total >= debt.amount:
            debt.status = DebtStatus.PAID

        self.db.flush()
        logger.info(
            "Recorded payment %s on debt %s: %s (paid %s of %s)",
            payment.id, debt.id, payment.amount, total, debt.amount,
        )
        return payment

    def reconcile(self, debt: Debt) -> Debt:
        """Refresh a debt's cached paid_amount and status from its payments."""
        total = self.total_paid(debt.id)
        debt.paid_amount = total
        debt.status = derive_status(debt.amount, total)
        self.db.flush()
        return debt

    def delete_for_transaction(self, transaction_id: int) -> int:
        """Delete the debts opened for a sale, payments included."""
        debts = self.get_debts_for_transaction(transaction_id)
        for debt in debts:
            self.db.delete(debt)
        self.db.flush()
        return len(debts)
