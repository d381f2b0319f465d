"""Report queries issued as literal SQL with bound parameters.

Every statement is a fixed ``text()`` construct; caller input only ever
reaches the database through bind parameters.
"""
from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from sqlalchemy import TextClause, text
from sqlalchemy.ext.asyncio import AsyncSession

PROPERTY_SUMMARY = text(
    """
    SELECT *
    FROM v_property_summary
    WHERE (:folio = '' OR folio = :folio)
      AND (:owner = '' OR owner_name ILIKE '%' || :owner || '%')
      AND (:neighborhood = '' OR neighborhood_code = :neighborhood)
    ORDER BY updated_at DESC
    LIMIT :limit
    """
)

READ_QUERIES: dict[str, TextClause] = {
    "properties_with_owner": text(
        """
        SELECT p.id, p.folio, p.address, o.name AS owner_name
        FROM properties p
        JOIN owners o ON o.id = p.owner_id
        ORDER BY p.id DESC
        LIMIT 25
        """
    ),
    "avg_sale_price_by_neighborhood": text(
        """
        SELECT n.code, n.name, AVG(s.price)::numeric(12, 2) AS avg_price
        FROM sales s
        JOIN properties p ON p.id = s.property_id
        JOIN neighborhoods n ON n.id = p.neighborhood_id
        GROUP BY n.code, n.name
        ORDER BY avg_price DESC
        """
    ),
    "property_by_folio": text(
        """
        SELECT *
        FROM properties
        WHERE folio = :folio
        """
    ),
    "sales_in_year": text(
        """
        SELECT s.id, s.price, s.sale_date, p.folio, o.name AS owner_name
        FROM sales s
        JOIN properties p ON p.id = s.property_id
        LEFT JOIN owners o ON o.id = p.owner_id
        WHERE EXTRACT(YEAR FROM s.sale_date) = :year
        ORDER BY s.sale_date DESC
        """
    ),
}

WRITE_QUERIES: dict[str, TextClause] = {
    "insert_owner": text(
        """
        INSERT INTO owners (name, email)
        VALUES (:name, :email)
        RETURNING id, name, email
        """
    ),
    "update_property_address": text(
        """
        UPDATE properties SET address = :new_address, updated_at = now()
        WHERE id = :id
        RETURNING id, address
        """
    ),
    "delete_improvement": text(
        """
        DELETE FROM improvements WHERE id = :id
        RETURNING id
        """
    ),
    "add_sale": text(
        """
        INSERT INTO sales (property_id, price, sale_date, buyer, seller)
        VALUES (:property_id, :price, :sale_date, :buyer, :seller)
        RETURNING id, property_id, price, sale_date
        """
    ),
    "sales_in_range": text(
        """
        SELECT s.id, s.price, s.sale_date, p.folio
        FROM sales s
        JOIN properties p ON p.id = s.property_id
        WHERE s.sale_date BETWEEN :start AND :end
        ORDER BY s.sale_date DESC
        """
    ),
    "owners_with_min_properties": text(
        """
        SELECT o.id, o.name, COUNT(p.id) AS property_count
        FROM owners o
        LEFT JOIN properties p ON p.owner_id = o.id
        GROUP BY o.id, o.name
        HAVING COUNT(p.id) >= :min_count
        ORDER BY property_count DESC
        """
    ),
}

ADJUST_LAND_BY_ZIP = text("CALL sp_adjust_land_values_by_zip(:zip_code, :percent)")


async def fetch_rows(
    session: AsyncSession, statement: TextClause, params: Mapping[str, Any] | None = None
) -> list[dict[str, Any]]:
    """Execute a statement and return its rows as dictionaries."""

    result = await session.execute(statement, dict(params or {}))
    return [dict(row) for row in result.mappings().all()]


async def property_summary(
    session: AsyncSession,
    *,
    folio: str,
    owner: str,
    neighborhood: str,
    limit: int,
) -> list[dict[str, Any]]:
    """Read the summary view; blank filters match everything."""

    return await fetch_rows(
        session,
        PROPERTY_SUMMARY,
        {"folio": folio, "owner": owner, "neighborhood": neighborhood, "limit": limit},
    )


async def adjust_land_by_zip(session: AsyncSession, *, zip_code: str, percent: Decimal) -> int:
    """Invoke the stored procedure and return the reported row count."""

    result = await session.execute(ADJUST_LAND_BY_ZIP, {"zip_code": zip_code, "percent": percent})
    rowcount = result.rowcount
    return rowcount if rowcount and rowcount > 0 else 0
