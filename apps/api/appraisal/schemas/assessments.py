"""Schemas for assessment endpoints."""
from __future__ import annotations

from decimal import Decimal
from typing import Literal

from .common import ApiModel, RawNumber


class AssessmentOut(ApiModel):
    property_id: int
    year: int
    market_value: Decimal
    assessed_value: Decimal
    land_value: Decimal
    building_value: Decimal


class UpsertAssessmentRequest(ApiModel):
    action: Literal["upsertAssessment"]
    property_id: RawNumber = None
    year: RawNumber = None
    market_value: RawNumber = None
    assessed_value: RawNumber = None
    land_value: RawNumber = None
    building_value: RawNumber = None


class AssessmentResponse(ApiModel):
    assessment: AssessmentOut


class AssessmentListResponse(ApiModel):
    assessments: list[AssessmentOut]
