"""Improvement repository helpers."""
from __future__ import annotations

from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.improvement import Improvement


async def create_improvement(
    session: AsyncSession,
    *,
    property_id: int,
    type: str,
    year_built: int | None = None,
    value: Decimal | None = None,
) -> Improvement:
    # No uniqueness on (property, type); duplicates are allowed.
    improvement = Improvement(property_id=property_id, type=type, year_built=year_built, value=value)
    session.add(improvement)
    await session.flush()
    return improvement


async def list_for_property(session: AsyncSession, property_id: int) -> list[Improvement]:
    stmt = (
        select(Improvement)
        .where(Improvement.property_id == property_id)
        .order_by(Improvement.type.asc(), Improvement.id.desc())
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())
