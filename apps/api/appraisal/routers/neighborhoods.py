"""Neighborhood endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ..db.session import get_session
from ..schemas import neighborhoods as schemas
from ..schemas.properties import PropertyOut
from ..services import neighborhoods as neighborhoods_service

router = APIRouter()


@router.get("", response_model=schemas.NeighborhoodDetailResponse | schemas.NeighborhoodListResponse)
async def get_neighborhoods(
    code: str | None = Query(default=None),
    session: AsyncSession = Depends(get_session),
) -> schemas.NeighborhoodDetailResponse | schemas.NeighborhoodListResponse:
    """Return one neighborhood by code with its properties, or the newest neighborhoods."""

    if code:
        detail = await neighborhoods_service.get_detail(code, session)
        return schemas.NeighborhoodDetailResponse(neighborhood=detail)

    neighborhoods = await neighborhoods_service.list_recent(session)
    return schemas.NeighborhoodListResponse(
        neighborhoods=[schemas.NeighborhoodOut.model_validate(n) for n in neighborhoods]
    )


@router.post("", response_model=schemas.NeighborhoodResponse | schemas.NeighborhoodAssignmentResponse)
async def neighborhood_action(
    payload: schemas.NeighborhoodAction = Body(..., discriminator="action"),
    session: AsyncSession = Depends(get_session),
) -> schemas.NeighborhoodResponse | schemas.NeighborhoodAssignmentResponse:
    if isinstance(payload, schemas.CreateNeighborhoodRequest):
        neighborhood = await neighborhoods_service.create_neighborhood(payload, session)
        return schemas.NeighborhoodResponse(neighborhood=schemas.NeighborhoodOut.model_validate(neighborhood))

    property = await neighborhoods_service.assign_property(payload, session)
    return schemas.NeighborhoodAssignmentResponse(property=PropertyOut.model_validate(property))
