"""Improvement endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ..db.session import get_session
from ..schemas import improvements as schemas
from ..services import improvements as improvements_service

router = APIRouter()


@router.get("", response_model=schemas.ImprovementListResponse)
async def list_improvements(
    property_id: int = Query(alias="propertyId"),
    session: AsyncSession = Depends(get_session),
) -> schemas.ImprovementListResponse:
    improvements = await improvements_service.list_for_property(property_id, session)
    return schemas.ImprovementListResponse(
        improvements=[schemas.ImprovementOut.model_validate(i) for i in improvements]
    )


@router.post("", response_model=schemas.ImprovementResponse)
async def add_improvement(
    payload: schemas.AddImprovementRequest,
    session: AsyncSession = Depends(get_session),
) -> schemas.ImprovementResponse:
    """Attach an improvement to a property."""

    improvement = await improvements_service.add_improvement(payload, session)
    return schemas.ImprovementResponse(improvement=schemas.ImprovementOut.model_validate(improvement))
