"""Transaction ORM model."""
from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import Boolean, DateTime, Index, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from sales_insights.models.base import Base


class Transaction(Base):
    """Product sale seeded from the upstream source."""

    __tablename__ = "transactions"
    __table_args__ = (
        Index("ix_transactions_category", "category"),
        Index("ix_transactions_date_of_sale", "date_of_sale"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(512), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    category: Mapped[str] = mapped_column(String(128), nullable=False)
    image: Mapped[str | None] = mapped_column(String(1024))
    sold: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    # Stored as naive UTC; the month filter reads this column directly.
    date_of_sale: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False)


__all__ = ["Transaction"]
