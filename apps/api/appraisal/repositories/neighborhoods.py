"""Neighborhood repository helpers."""
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.neighborhood import Neighborhood


async def get_by_code(session: AsyncSession, code: str) -> Neighborhood | None:
    stmt = select(Neighborhood).where(Neighborhood.code == code)
    result = await session.execute(stmt)
    return result.scalar_one_or_none()


async def create_neighborhood(session: AsyncSession, *, code: str, name: str) -> Neighborhood:
    neighborhood = Neighborhood(code=code, name=name)
    session.add(neighborhood)
    await session.flush()
    return neighborhood


async def list_recent(session: AsyncSession, *, limit: int) -> list[Neighborhood]:
    stmt = select(Neighborhood).order_by(Neighborhood.id.desc()).limit(limit)
    result = await session.execute(stmt)
    return list(result.scalars().all())
