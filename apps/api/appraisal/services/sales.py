"""Sale ledger operations."""
from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import settings
from ..core.errors import ValidationError, persistence_errors
from ..models.sale import Sale
from ..repositories import sales as sales_repo
from ..schemas import sales as schemas
from . import parsing

DEFAULT_TAKE = 25
MAX_TAKE = 100


async def list_sales(property_id: int | None, take: int | None, session: AsyncSession) -> list[Sale]:
    limit = max(1, min(take if take is not None else DEFAULT_TAKE, MAX_TAKE))
    with persistence_errors("sale listing"):
        return await sales_repo.list_sales(session, property_id=property_id, limit=limit)


async def record_sale(payload: schemas.RecordSaleRequest, session: AsyncSession) -> Sale:
    """Append a sale with its optional buyer, seller and document number."""

    lenient = settings.lenient_numeric_input
    property_id = parsing.parse_int(payload.property_id, "propertyId", lenient=lenient)
    sale_date = parsing.parse_date(payload.sale_date, "saleDate")
    price = parsing.parse_money(payload.price, "price", lenient=lenient)
    if property_id is None or sale_date is None or price is None:
        raise ValidationError("propertyId, saleDate, price are required")
    if price <= 0:
        raise ValidationError("price must be positive")

    with persistence_errors("sale recording"):
        async with session.begin():
            return await sales_repo.create_sale(
                session,
                property_id=property_id,
                sale_date=sale_date,
                price=price,
                buyer=parsing.clean_text(payload.buyer),
                seller=parsing.clean_text(payload.seller),
                doc_number=parsing.clean_text(payload.doc_number),
            )
