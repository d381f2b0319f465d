"""Owner operations."""
from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from ..core.errors import NotFoundError, ValidationError, persistence_errors
from ..models.base import utcnow
from ..models.owner import Owner
from ..models.property import Property
from ..repositories import owners as owners_repo
from ..repositories import properties as properties_repo
from ..schemas import owners as schemas
from . import parsing

SEARCH_LIMIT = 50


async def search(name: str | None, session: AsyncSession) -> list[Owner]:
    with persistence_errors("owner search"):
        return await owners_repo.search_by_name(session, name=parsing.clean_text(name), limit=SEARCH_LIMIT)


async def create_owner(payload: schemas.CreateOwnerRequest, session: AsyncSession) -> Owner:
    name = parsing.require_text(payload.name, "name")
    with persistence_errors("owner creation"):
        async with session.begin():
            return await owners_repo.create_owner(
                session,
                name=name,
                phone=parsing.clean_text(payload.phone),
                email=parsing.clean_text(payload.email),
            )


async def assign_owner(payload: schemas.AssignOwnerRequest, session: AsyncSession) -> Property:
    """Point a property at an existing owner."""

    property_id = parsing.parse_int(payload.property_id, "propertyId")
    owner_id = parsing.parse_int(payload.owner_id, "ownerId")
    if property_id is None or owner_id is None:
        raise ValidationError("propertyId and ownerId are required")

    with persistence_errors("owner assignment"):
        async with session.begin():
            property = await properties_repo.get_by_id(session, property_id)
            if property is None:
                raise NotFoundError(f"Property {property_id} not found")
            property.owner_id = owner_id
            property.updated_at = utcnow()
            session.add(property)
    return property
