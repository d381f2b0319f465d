"""Assessment endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ..db.session import get_session
from ..schemas import assessments as schemas
from ..services import assessments as assessments_service

router = APIRouter()


@router.get("", response_model=schemas.AssessmentListResponse)
async def list_assessments(
    property_id: int = Query(alias="propertyId"),
    year: int | None = Query(default=None),
    session: AsyncSession = Depends(get_session),
) -> schemas.AssessmentListResponse:
    """Return the latest assessments for a property."""

    assessments = await assessments_service.list_assessments(property_id, year, session)
    return schemas.AssessmentListResponse(
        assessments=[schemas.AssessmentOut.model_validate(a) for a in assessments]
    )


@router.post("", response_model=schemas.AssessmentResponse)
async def upsert_assessment(
    payload: schemas.UpsertAssessmentRequest,
    session: AsyncSession = Depends(get_session),
) -> schemas.AssessmentResponse:
    """Create or update the assessment for a property and year."""

    assessment = await assessments_service.upsert_assessment(payload, session)
    return schemas.AssessmentResponse(assessment=schemas.AssessmentOut.model_validate(assessment))
