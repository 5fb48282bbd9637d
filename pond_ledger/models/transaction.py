"""
Transaction model.

A transaction is a recorded sale of harvested fish: a weight sold
to a customer at a price per kilogram. ``total`` is always the
rounded product of the two and is never edited on its own; the
TransactionService recomputes it on every create and update.
"""

import datetime as dt

from sqlalchemy import (
    String, Integer, Float, Date, DateTime, Text, ForeignKey,
    Enum as SAEnum,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pond_ledger.models.base import Base
from pond_ledger.models.enums import PaymentStatus, enum_values


class Transaction(Base):
    __tablename__ = "transactions"

    id: Mapped[int] = mapped_column(primary_key=True)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False, index=True)
    pond_id: Mapped[int | None] = mapped_column(
        ForeignKey("ponds.id"), nullable=True, index=True
    )
    customer_id: Mapped[int] = mapped_column(
        ForeignKey("customers.id"), nullable=False, index=True
    )
    weight_kg: Mapped[float] = mapped_column(Float, nullable=False)
    price_per_kg: Mapped[int] = mapped_column(Integer, nullable=False)
    total: Mapped[int] = mapped_column(Integer, nullable=False)
    payment_method: Mapped[str | None] = mapped_column(
        String(50), nullable=True
    )
    payment_status: Mapped[PaymentStatus] = mapped_column(
        SAEnum(
            PaymentStatus,
            name="payment_status_enum",
            create_constraint=True,
            values_callable=enum_values,
        ),
        nullable=False,
        default=PaymentStatus.PAID,
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_by: Mapped[int | None] = mapped_column(
        ForeignKey("users.id"), nullable=True
    )
    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime, nullable=False, default=dt.datetime.utcnow
    )

    # Relationships
    pond: Mapped["Pond"] = relationship()
    customer: Mapped["Customer"] = relationship(back_populates="transactions")
    creator: Mapped["User"] = relationship()

    @property
    def pond_name(self) -> str | None:
        return self.pond.name if self.pond else None

    @property
    def customer_name(self) -> str | None:
        return self.customer.name if self.customer else None

    @property
    def created_by_name(self) -> str | None:
        return self.creator.name if self.creator else None

    def __repr__(self) -> str:
        return (
            f"<Transaction {self.date} {self.weight_kg}kg "
            f"x {self.price_per_kg} = {self.total} ({self.payment_status.value})>"
        )
