"""Owner endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ..db.session import get_session
from ..schemas import owners as schemas
from ..schemas.properties import PropertyOut
from ..services import owners as owners_service

router = APIRouter()


@router.get("", response_model=schemas.OwnerListResponse)
async def search_owners(
    name: str | None = Query(default=None),
    session: AsyncSession = Depends(get_session),
) -> schemas.OwnerListResponse:
    """Search owners by name (case-insensitive contains)."""

    owners = await owners_service.search(name, session)
    return schemas.OwnerListResponse(owners=[schemas.OwnerOut.model_validate(o) for o in owners])


@router.post("", response_model=schemas.OwnerResponse | schemas.OwnerAssignmentResponse)
async def owner_action(
    payload: schemas.OwnerAction = Body(..., discriminator="action"),
    session: AsyncSession = Depends(get_session),
) -> schemas.OwnerResponse | schemas.OwnerAssignmentResponse:
    if isinstance(payload, schemas.CreateOwnerRequest):
        owner = await owners_service.create_owner(payload, session)
        return schemas.OwnerResponse(owner=schemas.OwnerOut.model_validate(owner))

    property = await owners_service.assign_owner(payload, session)
    return schemas.OwnerAssignmentResponse(property=PropertyOut.model_validate(property))
