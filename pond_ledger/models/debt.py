"""
Receivable models: debts and the payments applied against them.

A debt is opened when a sale is recorded as unpaid (or directly).
``paid_amount`` and ``status`` are a cache of what the payments
say; the DebtService refreshes them on every payment and derives
the authoritative figures from the payment rows on every read.
"""

from datetime import date, datetime

from sqlalchemy import (
    String, Integer, Date, DateTime, Text, ForeignKey,
    Enum as SAEnum,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pond_ledger.models.base import Base
from pond_ledger.models.enums import DebtStatus, enum_values


class Debt(Base):
    __tablename__ = "debts"

    id: Mapped[int] = mapped_column(primary_key=True)
    transaction_id: Mapped[int | None] = mapped_column(
        ForeignKey("transactions.id"), nullable=True, index=True
    )
    customer_id: Mapped[int] = mapped_column(
        ForeignKey("customers.id"), nullable=False, index=True
    )
    amount: Mapped[int] = mapped_column(Integer, nullable=False)
    paid_amount: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0
    )
    status: Mapped[DebtStatus] = mapped_column(
        SAEnum(
            DebtStatus,
            name="debt_status_enum",
            create_constraint=True,
            values_callable=enum_values,
        ),
        nullable=False,
        default=DebtStatus.UNPAID,
    )
    due_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    # Relationships
    customer: Mapped["Customer"] = relationship(back_populates="debts")
    transaction: Mapped["Transaction"] = relationship()
    # Deleting a debt deletes its payments; nothing is left dangling.
    payments: Mapped[list["DebtPayment"]] = relationship(
        back_populates="debt",
        cascade="all, delete-orphan",
        order_by=lambda: [
            DebtPayment.payment_date.desc(),
            DebtPayment.id.desc(),
        ],
    )

    def __repr__(self) -> str:
        return f"<Debt {self.id} {self.amount} ({self.status.value})>"


class DebtPayment(Base):
    """
    One installment applied against a debt.

    Payments are append-only: there is no update or delete
    operation. They disappear only together with their debt.
    """

    __tablename__ = "debt_payments"

    id: Mapped[int] = mapped_column(primary_key=True)
    debt_id: Mapped[int] = mapped_column(
        ForeignKey("debts.id"), nullable=False, index=True
    )
    payment_date: Mapped[date] = mapped_column(Date, nullable=False)
    amount: Mapped[int] = mapped_column(Integer, nullable=False)
    payment_method: Mapped[str | None] = mapped_column(
        String(50), nullable=True
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )

    debt: Mapped["Debt"] = relationship(back_populates="payments")

    def __repr__(self) -> str:
        return f"<DebtPayment debt={self.debt_id} {self.amount}>"
