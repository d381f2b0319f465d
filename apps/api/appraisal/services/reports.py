"""Report endpoints backed by fixed, parameter-bound SQL."""
from __future__ import annotations

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from ..core.errors import ValidationError, persistence_errors
from ..repositories import reports as reports_repo
from ..schemas import reports as schemas
from . import parsing

DEFAULT_SUMMARY_LIMIT = 50
MAX_SUMMARY_LIMIT = 200
DEFAULT_SALES_YEAR = 2024


async def property_summary(
    *,
    folio: str | None,
    owner: str | None,
    neighborhood: str | None,
    limit: int | None,
    session: AsyncSession,
) -> list[dict[str, Any]]:
    resolved = max(1, min(limit if limit is not None else DEFAULT_SUMMARY_LIMIT, MAX_SUMMARY_LIMIT))
    with persistence_errors("property summary report"):
        return await reports_repo.property_summary(
            session,
            folio=parsing.clean_text(folio) or "",
            owner=parsing.clean_text(owner) or "",
            neighborhood=parsing.clean_text(neighborhood) or "",
            limit=resolved,
        )


async def run_read_query(
    query: schemas.ReadQuery,
    *,
    folio: str | None,
    year: int | None,
    session: AsyncSession,
) -> list[dict[str, Any]]:
    params: dict[str, Any] = {}
    if query is schemas.ReadQuery.PROPERTY_BY_FOLIO:
        params["folio"] = folio or ""
    elif query is schemas.ReadQuery.SALES_IN_YEAR:
        params["year"] = year if year is not None else DEFAULT_SALES_YEAR

    with persistence_errors(f"report {query.value}"):
        return await reports_repo.fetch_rows(session, reports_repo.READ_QUERIES[query.value], params)


async def run_write_query(
    payload: schemas.WriteQuery, session: AsyncSession
) -> schemas.RowResponse | schemas.RowsResponse:
    """Execute one of the fixed write/report statements selected by ``action``."""

    params, many = _write_params(payload)
    statement = reports_repo.WRITE_QUERIES[payload.action]

    with persistence_errors(f"report {payload.action}"):
        async with session.begin():
            rows = await reports_repo.fetch_rows(session, statement, params)

    if many:
        return schemas.RowsResponse(rows=rows)
    return schemas.RowResponse(row=rows[0] if rows else None)


def _write_params(payload: schemas.WriteQuery) -> tuple[dict[str, Any], bool]:
    if isinstance(payload, schemas.InsertOwnerRequest):
        name = parsing.require_text(payload.name, "name")
        return {"name": name, "email": parsing.clean_text(payload.email)}, False

    if isinstance(payload, schemas.UpdatePropertyAddressRequest):
        return {
            "id": _require_int(payload.id, "id"),
            "new_address": parsing.clean_text(payload.new_address) or "",
        }, False

    if isinstance(payload, schemas.DeleteImprovementRequest):
        return {"id": _require_int(payload.id, "id")}, False

    if isinstance(payload, schemas.AddSaleRequest):
        sale_date = parsing.parse_date(payload.sale_date, "saleDate")
        price = parsing.parse_money(payload.price, "price")
        if sale_date is None or price is None:
            raise ValidationError("saleDate and price are required")
        return {
            "property_id": _require_int(payload.property_id, "propertyId"),
            "price": price,
            "sale_date": sale_date,
            "buyer": parsing.clean_text(payload.buyer),
            "seller": parsing.clean_text(payload.seller),
        }, False

    if isinstance(payload, schemas.SalesInRangeRequest):
        start = parsing.parse_date(payload.start, "start")
        end = parsing.parse_date(payload.end, "end")
        if start is None or end is None:
            raise ValidationError("start and end are required")
        return {"start": start, "end": end}, True

    if isinstance(payload, schemas.OwnersWithMinPropertiesRequest):
        min_count = parsing.parse_int(payload.min_count, "minCount")
        return {"min_count": min_count if min_count is not None else 1}, True

    raise ValidationError("Unknown action")


def _require_int(value: object, field: str) -> int:
    parsed = parsing.parse_int(value, field)
    if parsed is None:
        raise ValidationError(f"{field} is required")
    return parsed
