"""Sale model."""
from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import Date, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base

if TYPE_CHECKING:
    from .property import Property


class Sale(Base):
    """Recorded transfer of a property. Rows are never updated."""

    __tablename__ = "sales"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    property_id: Mapped[int] = mapped_column(ForeignKey("properties.id", ondelete="CASCADE"), nullable=False)
    sale_date: Mapped[date] = mapped_column(Date, nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)
    buyer: Mapped[str | None] = mapped_column(String)
    seller: Mapped[str | None] = mapped_column(String)
    doc_number: Mapped[str | None] = mapped_column(String)

    property: Mapped["Property"] = relationship("Property", back_populates="sales")
