"""Owner repository helpers."""
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.owner import Owner


async def get_by_id(session: AsyncSession, owner_id: int) -> Owner | None:
    """Return an owner by identifier."""

    return await session.get(Owner, owner_id)


async def create_owner(
    session: AsyncSession,
    *,
    name: str,
    phone: str | None = None,
    email: str | None = None,
) -> Owner:
    """Persist a new owner and return it with its generated id."""

    owner = Owner(name=name, phone=phone, email=email)
    session.add(owner)
    await session.flush()
    return owner


async def search_by_name(session: AsyncSession, *, name: str | None, limit: int) -> list[Owner]:
    """Case-insensitive contains search, newest owners first."""

    stmt = select(Owner)
    if name:
        stmt = stmt.where(Owner.name.icontains(name, autoescape=True))
    stmt = stmt.order_by(Owner.id.desc()).limit(limit)
    result = await session.execute(stmt)
    return list(result.scalars().all())
