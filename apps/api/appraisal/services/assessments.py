"""Assessment operations."""
from __future__ import annotations

from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import settings
from ..core.errors import ValidationError, persistence_errors
from ..models.assessment import Assessment
from ..repositories import assessments as assessments_repo
from ..schemas import assessments as schemas
from . import parsing

LIST_LIMIT = 10
ZERO = Decimal("0")

_FIELD_NAMES = {
    "market_value": "marketValue",
    "assessed_value": "assessedValue",
    "land_value": "landValue",
    "building_value": "buildingValue",
}


async def list_assessments(property_id: int, year: int | None, session: AsyncSession) -> list[Assessment]:
    with persistence_errors("assessment listing"):
        return await assessments_repo.list_assessments(
            session, property_id=property_id, year=year, limit=LIST_LIMIT
        )


async def upsert_assessment(payload: schemas.UpsertAssessmentRequest, session: AsyncSession) -> Assessment:
    """Create the yearly assessment (missing values default to 0) or update supplied values."""

    lenient = settings.lenient_numeric_input
    property_id = parsing.parse_int(payload.property_id, "propertyId", lenient=lenient)
    year = parsing.parse_int(payload.year, "year", lenient=lenient)
    if property_id is None or year is None:
        raise ValidationError("propertyId and year are required")

    supplied: dict[str, Decimal] = {}
    for column, field in _FIELD_NAMES.items():
        value = parsing.parse_money(getattr(payload, column), field, lenient=lenient)
        if value is not None:
            supplied[column] = value

    create_values = {column: supplied.get(column, ZERO) for column in _FIELD_NAMES}

    with persistence_errors("assessment upsert"):
        async with session.begin():
            return await assessments_repo.upsert_assessment(
                session,
                property_id=property_id,
                year=year,
                create_values=create_values,
                update_values=supplied,
            )
