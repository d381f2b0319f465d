"""Neighborhood operations."""
from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from ..core.errors import NotFoundError, ValidationError, persistence_errors
from ..models.base import utcnow
from ..models.neighborhood import Neighborhood
from ..models.property import Property
from ..repositories import neighborhoods as neighborhoods_repo
from ..repositories import properties as properties_repo
from ..schemas import neighborhoods as schemas
from ..schemas.properties import PropertyOut
from . import parsing

LIST_LIMIT = 50


async def get_detail(code: str, session: AsyncSession) -> schemas.NeighborhoodDetail | None:
    """Return a neighborhood with its most recently updated properties."""

    with persistence_errors(f"neighborhood lookup {code}"):
        neighborhood = await neighborhoods_repo.get_by_code(session, code)
        if neighborhood is None:
            return None
        properties = await properties_repo.list_by_neighborhood(session, neighborhood.id, limit=LIST_LIMIT)

    return schemas.NeighborhoodDetail(
        id=neighborhood.id,
        code=neighborhood.code,
        name=neighborhood.name,
        properties=[PropertyOut.model_validate(item) for item in properties],
    )


async def list_recent(session: AsyncSession) -> list[Neighborhood]:
    with persistence_errors("neighborhood listing"):
        return await neighborhoods_repo.list_recent(session, limit=LIST_LIMIT)


async def create_neighborhood(payload: schemas.CreateNeighborhoodRequest, session: AsyncSession) -> Neighborhood:
    code = parsing.clean_text(payload.code)
    name = parsing.clean_text(payload.name)
    if code is None or name is None:
        raise ValidationError("code and name are required")

    with persistence_errors("neighborhood creation"):
        async with session.begin():
            return await neighborhoods_repo.create_neighborhood(session, code=code, name=name)


async def assign_property(payload: schemas.AssignPropertyToNeighborhoodRequest, session: AsyncSession) -> Property:
    property_id = parsing.parse_int(payload.property_id, "propertyId")
    neighborhood_id = parsing.parse_int(payload.neighborhood_id, "neighborhoodId")
    if property_id is None or neighborhood_id is None:
        raise ValidationError("propertyId and neighborhoodId are required")

    with persistence_errors("neighborhood assignment"):
        async with session.begin():
            property = await properties_repo.get_by_id(session, property_id)
            if property is None:
                raise NotFoundError(f"Property {property_id} not found")
            property.neighborhood_id = neighborhood_id
            property.updated_at = utcnow()
            session.add(property)
    return property
