"""
Expense model.

Operating costs of the farm (feed, electricity, labour, ...),
grouped by free-text category in the financial reports.
"""

import datetime as dt

from sqlalchemy import String, Integer, Date, DateTime, Text, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pond_ledger.models.base import Base


class Expense(Base):
    __tablename__ = "expenses"

    id: Mapped[int] = mapped_column(primary_key=True)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False, index=True)
    category: Mapped[str] = mapped_column(String(100), nullable=False)
    amount: Mapped[int] = mapped_column(Integer, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_by: Mapped[int | None] = mapped_column(
        ForeignKey("users.id"), nullable=True
    )
    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime, nullable=False, default=dt.datetime.utcnow
    )

    creator: Mapped["User"] = relationship()

    @property
    def created_by_name(self) -> str | None:
        return self.creator.name if self.creator else None

    def __repr__(self) -> str:
        return f"<Expense {self.date} {self.category} {self.amount}>"
