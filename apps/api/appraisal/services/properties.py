"""Property workflows: the upsert orchestrator and single-property actions."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import settings
from ..core.errors import NotFoundError, ValidationError, persistence_errors
from ..models.base import utcnow
from ..models.owner import Owner
from ..models.property import Property
from ..repositories import assessments as assessments_repo
from ..repositories import owners as owners_repo
from ..repositories import properties as properties_repo
from ..repositories import reports as reports_repo
from ..repositories import sales as sales_repo
from ..schemas import properties as schemas
from . import parsing
from .parsing import UNSET

logger = logging.getLogger(__name__)

DEFAULT_OWNER_NAME = "Unknown Owner"
DEFAULT_LIST_LIMIT = 50
MAX_LIST_LIMIT = 200
RANGE_LIMIT = 100
ZERO = Decimal("0")


@dataclass(slots=True)
class OwnerFields:
    name: str | None
    phone: str | None
    email: str | None

    def any(self) -> bool:
        return bool(self.name or self.phone or self.email)

    def matches(self, owner: Owner) -> bool:
        return (
            owner.name == (self.name or DEFAULT_OWNER_NAME)
            and owner.phone == self.phone
            and owner.email == self.email
        )


@dataclass(slots=True)
class UpsertInput:
    """Normalized upsert request.

    Text and numeric columns hold ``UNSET`` when omitted, ``None`` when sent
    blank, otherwise the cleaned value.
    """

    folio: str
    address: str | None
    zip_code: str | None
    land_value: Decimal | None
    building_value: Decimal | None
    owner_id: int | None
    owner: OwnerFields
    sale_date: date | None
    sale_price: Decimal | None
    assessment_year: int | None


def normalize_upsert(payload: schemas.UpsertPropertyRequest, *, lenient: bool) -> UpsertInput:
    """Validate and parse the raw request before anything is written."""

    folio = parsing.require_text(payload.folio, "folio")
    sale_price = parsing.parse_money(payload.sale_price, "salePrice", lenient=lenient)
    sale_date = parsing.parse_date(payload.sale_date, "saleDate")
    land_value = parsing.decimal_update(payload, "land_value", "landValue", lenient=lenient)
    building_value = parsing.decimal_update(payload, "building_value", "buildingValue", lenient=lenient)

    for field, value in (("landValue", land_value), ("buildingValue", building_value)):
        if isinstance(value, Decimal) and value < 0:
            raise ValidationError(f"{field} must not be negative")
    if sale_price is not None and sale_price <= 0:
        raise ValidationError("salePrice must be positive")

    return UpsertInput(
        folio=folio,
        address=parsing.text_update(payload, "address"),
        zip_code=parsing.text_update(payload, "zip_code"),
        land_value=land_value,
        building_value=building_value,
        owner_id=parsing.parse_int(payload.owner_id, "ownerId", lenient=lenient),
        owner=OwnerFields(
            name=parsing.clean_text(payload.owner_name),
            phone=parsing.clean_text(payload.owner_phone),
            email=parsing.clean_text(payload.owner_email),
        ),
        sale_date=sale_date,
        sale_price=sale_price,
        assessment_year=parsing.parse_int(payload.assessment_year, "assessmentYear", lenient=lenient),
    )


async def upsert_property(payload: schemas.UpsertPropertyRequest, session: AsyncSession) -> Property:
    """Create or update a property by folio along with its dependent records.

    Resolves or creates the owner, upserts the property, then optionally appends
    a sale and upserts the assessment for the given year. All writes share one
    transaction. Returns the property as written; the sale and assessment do
    not alter it.
    """

    data = normalize_upsert(payload, lenient=settings.lenient_numeric_input)

    with persistence_errors(f"upsert of property {data.folio}"):
        async with session.begin():
            existing = await properties_repo.get_by_folio(session, data.folio)

            owner_id = data.owner_id
            if owner_id is None and data.owner.any():
                owner_id = await _resolve_owner(session, existing, data.owner)

            if existing is None:
                property = await _create_property(session, data, owner_id)
            else:
                property = _apply_update(existing, data, owner_id)
                session.add(property)

            if data.sale_date is not None and data.sale_price is not None:
                await sales_repo.create_sale(
                    session,
                    property_id=property.id,
                    sale_date=data.sale_date,
                    price=data.sale_price,
                )
                logger.info("Recorded sale for %s on %s", data.folio, data.sale_date)

            if data.assessment_year is not None:
                await _upsert_assessment(session, property, data)

    return property


async def _resolve_owner(session: AsyncSession, existing: Property | None, fields: OwnerFields) -> int:
    """Reuse the current owner when the contact details are unchanged, else create one."""

    if existing is not None and existing.owner_id is not None:
        current = await owners_repo.get_by_id(session, existing.owner_id)
        if current is not None and fields.matches(current):
            return current.id

    owner = await owners_repo.create_owner(
        session,
        name=fields.name or DEFAULT_OWNER_NAME,
        phone=fields.phone,
        email=fields.email,
    )
    logger.info("Created owner %s (%s)", owner.id, owner.name)
    return owner.id


async def _create_property(session: AsyncSession, data: UpsertInput, owner_id: int | None) -> Property:
    property = await properties_repo.create_property(
        session,
        folio=data.folio,
        address=data.address or None,
        zip_code=data.zip_code or None,
        land_value=data.land_value if isinstance(data.land_value, Decimal) else ZERO,
        building_value=data.building_value if isinstance(data.building_value, Decimal) else ZERO,
        owner_id=owner_id,
    )
    logger.info("Created property %s", data.folio)
    return property


def _apply_update(property: Property, data: UpsertInput, owner_id: int | None) -> Property:
    if data.address is not UNSET:
        property.address = data.address
    if data.zip_code is not UNSET:
        property.zip_code = data.zip_code
    if owner_id is not None:
        property.owner_id = owner_id
    if data.land_value is not UNSET:
        property.land_value = data.land_value
    if data.building_value is not UNSET:
        property.building_value = data.building_value
    property.updated_at = utcnow()
    logger.info("Updated property %s", data.folio)
    return property


async def _upsert_assessment(session: AsyncSession, property: Property, data: UpsertInput) -> None:
    land = data.land_value if isinstance(data.land_value, Decimal) else (property.land_value or ZERO)
    building = data.building_value if isinstance(data.building_value, Decimal) else (property.building_value or ZERO)
    market = land + building
    values = {
        "market_value": market,
        # Assessed value mirrors market value; no appraisal ratio is applied.
        "assessed_value": market,
        "land_value": land,
        "building_value": building,
    }
    await assessments_repo.upsert_assessment(
        session,
        property_id=property.id,
        year=data.assessment_year,
        create_values=values,
        update_values=values,
    )
    logger.info("Upserted %s assessment for %s", data.assessment_year, data.folio)


async def list_recent(limit: int | None, session: AsyncSession) -> list[Property]:
    """Return the latest properties; limit is clamped to 1..200."""

    resolved = max(1, min(limit if limit is not None else DEFAULT_LIST_LIMIT, MAX_LIST_LIMIT))
    with persistence_errors("property listing"):
        return await properties_repo.list_recent(session, limit=resolved)


async def get_by_folio(payload: schemas.GetByFolioRequest, session: AsyncSession) -> Property | None:
    folio = parsing.require_text(payload.folio, "folio")
    with persistence_errors(f"lookup of property {folio}"):
        return await properties_repo.get_by_folio(session, folio)


async def range_by_land_value(payload: schemas.RangeByLandValueRequest, session: AsyncSession) -> list[Property]:
    lenient = settings.lenient_numeric_input
    min_value = parsing.parse_decimal(payload.min_value, "min", lenient=lenient)
    max_value = parsing.parse_decimal(payload.max_value, "max", lenient=lenient)
    with persistence_errors("land value range query"):
        return await properties_repo.list_by_land_value(
            session, min_value=min_value, max_value=max_value, limit=RANGE_LIMIT
        )


async def update_address(payload: schemas.UpdateAddressRequest, session: AsyncSession) -> Property:
    folio = parsing.require_text(payload.folio, "folio")
    with persistence_errors(f"address update of property {folio}"):
        async with session.begin():
            property = await _require_property(session, folio)
            property.address = parsing.clean_text(payload.new_address)
            property.updated_at = utcnow()
            session.add(property)
    return property


async def adjust_land_percent(payload: schemas.AdjustLandPercentRequest, session: AsyncSession) -> Property:
    """Scale the stored land value by ``1 + percent / 100``."""

    folio = parsing.require_text(payload.folio, "folio")
    percent = parsing.parse_decimal(payload.percent, "percent", lenient=settings.lenient_numeric_input) or ZERO

    with persistence_errors(f"land adjustment of property {folio}"):
        async with session.begin():
            property = await _require_property(session, folio)
            if property.land_value is None:
                raise ValidationError("landValue is null")
            property.land_value = parsing.to_money(property.land_value * (1 + percent / 100))
            property.updated_at = utcnow()
            session.add(property)
    return property


async def delete_by_folio(payload: schemas.DeleteByFolioRequest, session: AsyncSession) -> Property:
    folio = parsing.require_text(payload.folio, "folio")
    with persistence_errors(f"delete of property {folio}"):
        async with session.begin():
            property = await _require_property(session, folio)
            await properties_repo.delete_property(session, property)
    logger.info("Deleted property %s", folio)
    return property


async def count_above_building(payload: schemas.CountAboveBuildingRequest, session: AsyncSession) -> int:
    threshold = parsing.parse_decimal(payload.threshold, "threshold", lenient=settings.lenient_numeric_input)
    with persistence_errors("building value count"):
        return await properties_repo.count_above_building(session, threshold)


async def reset_values(payload: schemas.ResetValuesRequest, session: AsyncSession) -> Property:
    folio = parsing.require_text(payload.folio, "folio")
    with persistence_errors(f"value reset of property {folio}"):
        async with session.begin():
            property = await _require_property(session, folio)
            property.land_value = ZERO
            property.building_value = ZERO
            property.updated_at = utcnow()
            session.add(property)
    return property


async def adjust_land_by_zip(
    payload: schemas.AdjustLandByZipRequest, session: AsyncSession
) -> schemas.ZipAdjustmentResponse:
    """Bulk-adjust land values in a ZIP code through the stored procedure."""

    zip_code = parsing.require_text(payload.zip_code, "zipCode")
    percent = parsing.parse_decimal(payload.percent, "percent", lenient=True)
    if percent is None:
        raise ValidationError("percent is required and must be numeric")

    with persistence_errors(f"land adjustment for zip {zip_code}"):
        async with session.begin():
            rows = await reports_repo.adjust_land_by_zip(session, zip_code=zip_code, percent=percent)

    logger.info("Adjusted land values in %s by %s%% (%s rows)", zip_code, percent, rows)
    return schemas.ZipAdjustmentResponse(
        message="Land values adjusted successfully",
        zip_code=zip_code,
        percent=percent,
        rows_affected=rows,
    )


async def _require_property(session: AsyncSession, folio: str) -> Property:
    property = await properties_repo.get_by_folio(session, folio)
    if property is None:
        raise NotFoundError(f"Property {folio} not found")
    return property
