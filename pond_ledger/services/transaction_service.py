"""
Transaction service: recording fish sales.

Each create or update:
1. Validates the referenced customer and pond
2. Computes total = weight_kg x price_per_kg, rounded half up
3. Writes the sale
4. Keeps the sale's receivable in step with its payment status

The caller controls the commit, so a sale and the debt it opens
are saved together.
"""

import logging
from datetime import date
from decimal import Decimal, ROUND_HALF_UP

from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload

from pond_ledger.exceptions import NotFoundError, ValidationError
from pond_ledger.models.customer import Customer
from pond_ledger.models.enums import DebtStatus, PaymentStatus
from pond_ledger.models.pond import Pond
from pond_ledger.models.transaction import Transaction
from pond_ledger.models.user import User
from pond_ledger.schemas.transaction import TransactionCreate
from pond_ledger.services.debt_service import DebtService

logger = logging.getLogger(__name__)


def compute_total(weight_kg: float, price_per_kg: int) -> int:
    """
    Sale total in whole currency units.

    Uses decimal arithmetic with half-up rounding, so 2.5 kg at 101
    is 253 (binary float rounding would give 252).
    """
    product = Decimal(str(weight_kg)) * Decimal(price_per_kg)
    return int(product.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class TransactionService:

    def __init__(self, db: Session):
        self.db = db
        self.debt_service = DebtService(db)

    def _validate_references(self, request: TransactionCreate) -> None:
        if not self.db.get(Customer, request.customer_id):
            raise ValidationError(f"Customer {request.customer_id} not found")
        if request.pond_id is not None and not self.db.get(Pond, request.pond_id):
            raise ValidationError(f"Pond {request.pond_id} not found")

    def list_transactions(
        self,
        start_date: date | None = None,
        end_date: date | None = None,
        customer_id: int | None = None,
        pond_id: int | None = None,
    ) -> list[Transaction]:
        """Return sales, newest first, optionally filtered."""
        query = select(Transaction).options(
            joinedload(Transaction.pond),
            joinedload(Transaction.customer),
            joinedload(Transaction.creator),
        )
        if start_date is not None:
            query = query.where(Transaction.date >= start_date)
        if end_date is not None:
            query = query.where(Transaction.date <= end_date)
        if customer_id is not None:
            query = query.where(Transaction.customer_id == customer_id)
        if pond_id is not None:
            query = query.where(Transaction.pond_id == pond_id)

        query = query.order_by(
            Transaction.date.desc(),
            Transaction.created_at.desc(),
            Transaction.id.desc(),
        )
        return list(self.db.execute(query).scalars().all())

    def get_transaction(self, transaction_id: int) -> Transaction:
        txn = self.db.get(Transaction, transaction_id)
        if not txn:
            raise NotFoundError("Transaction not found")
        return txn

    def create_transaction(
        self, request: TransactionCreate, user: User | None = None
    ) -> Transaction:
        """
        Record a sale.

        An unpaid sale opens exactly one receivable for its total.
        """
        self._validate_references(request)

        txn = Transaction(
            date=request.date,
            pond_id=request.pond_id,
            customer_id=request.customer_id,
            weight_kg=request.weight_kg,
            price_per_kg=request.price_per_kg,
            total=compute_total(request.weight_kg, request.price_per_kg),
            payment_method=request.payment_method,
            payment_status=request.payment_status,
            notes=request.notes,
            created_by=user.id if user else None,
        )
        self.db.add(txn)
        self.db.flush()

        if txn.payment_status == PaymentStatus.UNPAID:
            self.debt_service.open_for_transaction(txn)

        logger.info(
            "Recorded transaction %s: %skg x %s = %s (%s)",
            txn.id, txn.weight_kg, txn.price_per_kg, txn.total,
            txn.payment_status.value,
        )
        return txn

    def update_transaction(
        self, transaction_id: int, request: TransactionCreate
    ) -> Transaction:
        """
        Fully replace a sale and bring its receivable in line.

        Unpaid: open a debt if there is none, otherwise move the
        existing debt to the new total and refresh its cached
        figures from the payments already made.
        Paid: mark any existing debt paid, leaving its payments
        and paid_amount as they are.
        """
        txn = self.get_transaction(transaction_id)
        self._validate_references(request)

        txn.date = request.date
        txn.pond_id = request.pond_id
        txn.customer_id = request.customer_id
        txn.weight_kg = request.weight_kg
        txn.price_per_kg = request.price_per_kg
        txn.total = compute_total(request.weight_kg, request.price_per_kg)
        txn.payment_method = request.payment_method
        txn.payment_status = request.payment_status
        txn.notes = request.notes
        self.db.flush()

        debts = self.debt_service.get_debts_for_transaction(txn.id)
        if txn.payment_status == PaymentStatus.UNPAID:
            if not debts:
                self.debt_service.open_for_transaction(txn)
            for debt in debts:
                debt.amount = txn.total
                debt.customer_id = txn.customer_id
                self.debt_service.reconcile(debt)
        else:
            for debt in debts:
                debt.status = DebtStatus.PAID
            self.db.flush()

        # Relationships may point at the previous pond/customer.
        self.db.refresh(txn)
        logger.info(
            "Updated transaction %s: total=%s (%s)",
            txn.id, txn.total, txn.payment_status.value,
        )
        return txn

    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a sale together with its debts and their payments."""
        txn = self.get_transaction(transaction_id)
        removed = self.debt_service.delete_for_transaction(txn.id)
        self.db.delete(txn)
        self.db.flush()
        logger.info(
            "Deleted transaction %s and %s debt(s)", transaction_id, removed
        )
