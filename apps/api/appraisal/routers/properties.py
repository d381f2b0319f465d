"""Property endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ..db.session import get_session
from ..schemas import properties as schemas
from ..services import properties as properties_service

router = APIRouter()


@router.get("", response_model=schemas.PropertyListResponse)
async def list_properties(
    limit: int | None = Query(default=None),
    session: AsyncSession = Depends(get_session),
) -> schemas.PropertyListResponse:
    """Return the most recently updated properties."""

    properties = await properties_service.list_recent(limit, session)
    return schemas.PropertyListResponse(properties=[schemas.PropertyOut.model_validate(p) for p in properties])


@router.post("", response_model=schemas.PropertyActionResponse)
async def property_action(
    payload: schemas.PropertyAction = Body(..., discriminator="action"),
    session: AsyncSession = Depends(get_session),
) -> schemas.PropertyActionResponse:
    """Run one property action selected by the ``action`` tag."""

    if isinstance(payload, schemas.UpsertPropertyRequest):
        property = await properties_service.upsert_property(payload, session)
        return _property_response(property)
    if isinstance(payload, schemas.GetByFolioRequest):
        return _property_response(await properties_service.get_by_folio(payload, session))
    if isinstance(payload, schemas.RangeByLandValueRequest):
        properties = await properties_service.range_by_land_value(payload, session)
        return schemas.PropertyListResponse(properties=[schemas.PropertyOut.model_validate(p) for p in properties])
    if isinstance(payload, schemas.UpdateAddressRequest):
        return _property_response(await properties_service.update_address(payload, session))
    if isinstance(payload, schemas.AdjustLandPercentRequest):
        return _property_response(await properties_service.adjust_land_percent(payload, session))
    if isinstance(payload, schemas.DeleteByFolioRequest):
        deleted = await properties_service.delete_by_folio(payload, session)
        return schemas.DeletedPropertyResponse(deleted=schemas.PropertyOut.model_validate(deleted))
    if isinstance(payload, schemas.CountAboveBuildingRequest):
        return schemas.CountResponse(count=await properties_service.count_above_building(payload, session))
    if isinstance(payload, schemas.ResetValuesRequest):
        return _property_response(await properties_service.reset_values(payload, session))
    return await properties_service.adjust_land_by_zip(payload, session)


def _property_response(property: object | None) -> schemas.PropertyResponse:
    if property is None:
        return schemas.PropertyResponse(property=None)
    return schemas.PropertyResponse(property=schemas.PropertyOut.model_validate(property))
