"""Property model."""
from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, utcnow

if TYPE_CHECKING:
    from .assessment import Assessment
    from .improvement import Improvement
    from .neighborhood import Neighborhood
    from .owner import Owner
    from .sale import Sale


class Property(Base):
    """A parcel identified by its folio."""

    __tablename__ = "properties"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    folio: Mapped[str] = mapped_column(String, unique=True, nullable=False)
    address: Mapped[str | None] = mapped_column(String)
    zip_code: Mapped[str | None] = mapped_column(String, index=True)
    land_value: Mapped[Decimal | None] = mapped_column(Numeric(14, 2), default=Decimal("0"))
    building_value: Mapped[Decimal | None] = mapped_column(Numeric(14, 2), default=Decimal("0"))
    owner_id: Mapped[int | None] = mapped_column(ForeignKey("owners.id", ondelete="SET NULL"))
    neighborhood_id: Mapped[int | None] = mapped_column(ForeignKey("neighborhoods.id", ondelete="SET NULL"))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)

    owner: Mapped["Owner | None"] = relationship("Owner", back_populates="properties")
    neighborhood: Mapped["Neighborhood | None"] = relationship("Neighborhood", back_populates="properties")
    sales: Mapped[list["Sale"]] = relationship("Sale", back_populates="property", passive_deletes=True)
    assessments: Mapped[list["Assessment"]] = relationship(
        "Assessment", back_populates="property", passive_deletes=True
    )
    improvements: Mapped[list["Improvement"]] = relationship(
        "Improvement", back_populates="property", passive_deletes=True
    )
