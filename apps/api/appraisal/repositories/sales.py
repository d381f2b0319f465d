"""Sale ledger helpers. Sales are appended and never modified."""
from __future__ import annotations

from datetime import date
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.sale import Sale


async def create_sale(
    session: AsyncSession,
    *,
    property_id: int,
    sale_date: date,
    price: Decimal,
    buyer: str | None = None,
    seller: str | None = None,
    doc_number: str | None = None,
) -> Sale:
    """Append a sale to the ledger."""

    sale = Sale(
        property_id=property_id,
        sale_date=sale_date,
        price=price,
        buyer=buyer,
        seller=seller,
        doc_number=doc_number,
    )
    session.add(sale)
    await session.flush()
    return sale


async def list_sales(session: AsyncSession, *, property_id: int | None, limit: int) -> list[Sale]:
    """Return the latest sales, optionally for a single property."""

    stmt = select(Sale)
    if property_id is not None:
        stmt = stmt.where(Sale.property_id == property_id)
    stmt = stmt.order_by(Sale.sale_date.desc(), Sale.id.desc()).limit(limit)
    result = await session.execute(stmt)
    return list(result.scalars().all())
