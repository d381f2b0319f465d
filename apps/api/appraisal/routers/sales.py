"""Sale endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ..db.session import get_session
from ..schemas import sales as schemas
from ..services import sales as sales_service

router = APIRouter()


@router.get("", response_model=schemas.SaleListResponse)
async def list_sales(
    property_id: int | None = Query(default=None, alias="propertyId"),
    take: int | None = Query(default=None),
    session: AsyncSession = Depends(get_session),
) -> schemas.SaleListResponse:
    """Return the latest sales, newest sale date first."""

    sales = await sales_service.list_sales(property_id, take, session)
    return schemas.SaleListResponse(sales=[schemas.SaleOut.model_validate(s) for s in sales])


@router.post("", response_model=schemas.SaleResponse)
async def record_sale(
    payload: schemas.RecordSaleRequest,
    session: AsyncSession = Depends(get_session),
) -> schemas.SaleResponse:
    """Append a sale to the ledger."""

    sale = await sales_service.record_sale(payload, session)
    return schemas.SaleResponse(sale=schemas.SaleOut.model_validate(sale))
