"""Assessment repository helpers."""
from __future__ import annotations

from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.assessment import Assessment

VALUE_COLUMNS = ("market_value", "assessed_value", "land_value", "building_value")


async def upsert_assessment(
    session: AsyncSession,
    *,
    property_id: int,
    year: int,
    create_values: dict[str, Decimal],
    update_values: dict[str, Decimal],
) -> Assessment:
    """Create the (property, year) assessment or update the supplied columns.

    ``create_values`` must cover every value column; ``update_values`` may be partial.
    """

    assessment = await session.get(Assessment, (property_id, year))
    if assessment is None:
        assessment = Assessment(property_id=property_id, year=year, **create_values)
        session.add(assessment)
        await session.flush()
        return assessment

    for column, value in update_values.items():
        if column not in VALUE_COLUMNS:
            raise ValueError(f"Unknown assessment column: {column}")
        setattr(assessment, column, value)
    session.add(assessment)
    await session.flush()
    return assessment


async def list_assessments(
    session: AsyncSession,
    *,
    property_id: int,
    year: int | None,
    limit: int,
) -> list[Assessment]:
    """Return assessments for a property, newest year first."""

    stmt = select(Assessment).where(Assessment.property_id == property_id)
    if year is not None:
        stmt = stmt.where(Assessment.year == year)
    stmt = stmt.order_by(Assessment.year.desc()).limit(limit)
    result = await session.execute(stmt)
    return list(result.scalars().all())
