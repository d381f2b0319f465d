"""Report and SQL pass-through endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ..db.session import get_session
from ..schemas import reports as schemas
from ..services import reports as reports_service

router = APIRouter()


@router.get("/reports/summary", response_model=schemas.SummaryResponse)
async def property_summary(
    folio: str | None = None,
    owner: str | None = None,
    neighborhood: str | None = None,
    limit: int | None = None,
    session: AsyncSession = Depends(get_session),
) -> schemas.SummaryResponse:
    """Search the property summary view."""

    rows = await reports_service.property_summary(
        folio=folio, owner=owner, neighborhood=neighborhood, limit=limit, session=session
    )
    return schemas.SummaryResponse(results=rows)


@router.get("/sql", response_model=schemas.RowsResponse)
async def read_query(
    q: schemas.ReadQuery = Query(),
    folio: str | None = None,
    year: int | None = None,
    session: AsyncSession = Depends(get_session),
) -> schemas.RowsResponse:
    """Run one of the fixed read-only report queries."""

    rows = await reports_service.run_read_query(q, folio=folio, year=year, session=session)
    return schemas.RowsResponse(rows=rows)


@router.post("/sql", response_model=schemas.RowResponse | schemas.RowsResponse)
async def write_query(
    payload: schemas.WriteQuery = Body(..., discriminator="action"),
    session: AsyncSession = Depends(get_session),
) -> schemas.RowResponse | schemas.RowsResponse:
    """Run one of the fixed write or date-range statements."""

    return await reports_service.run_write_query(payload, session)
