"""Assessment model."""
from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Integer, Numeric
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base

if TYPE_CHECKING:
    from .property import Property


class Assessment(Base):
    """Yearly valuation snapshot, one row per (property, year)."""

    __tablename__ = "assessments"

    property_id: Mapped[int] = mapped_column(ForeignKey("properties.id", ondelete="CASCADE"), primary_key=True)
    year: Mapped[int] = mapped_column(Integer, primary_key=True)
    market_value: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)
    assessed_value: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)
    land_value: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)
    building_value: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)

    property: Mapped["Property"] = relationship("Property", back_populates="assessments")
