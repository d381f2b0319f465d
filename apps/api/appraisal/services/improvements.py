"""Improvement operations."""
from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import settings
from ..core.errors import ValidationError, persistence_errors
from ..models.improvement import Improvement
from ..repositories import improvements as improvements_repo
from ..schemas import improvements as schemas
from . import parsing


async def list_for_property(property_id: int, session: AsyncSession) -> list[Improvement]:
    with persistence_errors("improvement listing"):
        return await improvements_repo.list_for_property(session, property_id)


async def add_improvement(payload: schemas.AddImprovementRequest, session: AsyncSession) -> Improvement:
    lenient = settings.lenient_numeric_input
    property_id = parsing.parse_int(payload.property_id, "propertyId", lenient=lenient)
    improvement_type = parsing.clean_text(payload.type)
    if property_id is None or improvement_type is None:
        raise ValidationError("propertyId and type are required")
    year_built = parsing.parse_int(payload.year_built, "yearBuilt", lenient=lenient)
    value = parsing.parse_money(payload.value, "value", lenient=lenient)

    with persistence_errors("improvement creation"):
        async with session.begin():
            return await improvements_repo.create_improvement(
                session,
                property_id=property_id,
                type=improvement_type,
                year_built=year_built,
                value=value,
            )
