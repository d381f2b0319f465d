"""Property persistence helpers."""
from __future__ import annotations

from decimal import Decimal

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.base import utcnow
from ..models.property import Property


async def get_by_folio(session: AsyncSession, folio: str) -> Property | None:
    """Return a property by its folio."""

    stmt: Select[tuple[Property]] = select(Property).where(Property.folio == folio)
    result = await session.execute(stmt)
    return result.scalar_one_or_none()


async def get_by_id(session: AsyncSession, property_id: int) -> Property | None:
    return await session.get(Property, property_id)


async def create_property(
    session: AsyncSession,
    *,
    folio: str,
    address: str | None = None,
    zip_code: str | None = None,
    land_value: Decimal | None = None,
    building_value: Decimal | None = None,
    owner_id: int | None = None,
    neighborhood_id: int | None = None,
) -> Property:
    """Persist a new property and return it with its generated id."""

    now = utcnow()
    property = Property(
        folio=folio,
        address=address,
        zip_code=zip_code,
        land_value=land_value,
        building_value=building_value,
        owner_id=owner_id,
        neighborhood_id=neighborhood_id,
        created_at=now,
        updated_at=now,
    )
    session.add(property)
    await session.flush()
    return property


async def delete_property(session: AsyncSession, property: Property) -> None:
    await session.delete(property)
    await session.flush()


async def list_recent(session: AsyncSession, *, limit: int) -> list[Property]:
    """Return the most recently updated properties."""

    stmt = select(Property).order_by(Property.updated_at.desc()).limit(limit)
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def list_by_land_value(
    session: AsyncSession,
    *,
    min_value: Decimal | None,
    max_value: Decimal | None,
    limit: int,
) -> list[Property]:
    """Return properties whose land value falls in the inclusive range."""

    stmt = select(Property).where(Property.land_value.is_not(None))
    if min_value is not None:
        stmt = stmt.where(Property.land_value >= min_value)
    if max_value is not None:
        stmt = stmt.where(Property.land_value <= max_value)
    stmt = stmt.order_by(Property.land_value.asc()).limit(limit)
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def list_by_neighborhood(session: AsyncSession, neighborhood_id: int, *, limit: int) -> list[Property]:
    stmt = (
        select(Property)
        .where(Property.neighborhood_id == neighborhood_id)
        .order_by(Property.updated_at.desc())
        .limit(limit)
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def count_above_building(session: AsyncSession, threshold: Decimal | None) -> int:
    """Count properties with a building value above the threshold (all when None)."""

    stmt: Select[tuple[int]] = select(func.count(Property.id))
    if threshold is not None:
        stmt = stmt.where(Property.building_value > threshold)
    result = await session.execute(stmt)
    return result.scalar_one()
