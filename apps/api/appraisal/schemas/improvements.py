"""Schemas for improvement endpoints."""
from __future__ import annotations

from decimal import Decimal
from typing import Literal

from .common import ApiModel, RawNumber


class ImprovementOut(ApiModel):
    id: int
    property_id: int
    type: str
    year_built: int | None = None
    value: Decimal | None = None


class AddImprovementRequest(ApiModel):
    action: Literal["addImprovement"]
    property_id: RawNumber = None
    type: str | None = None
    year_built: RawNumber = None
    value: RawNumber = None


class ImprovementResponse(ApiModel):
    improvement: ImprovementOut


class ImprovementListResponse(ApiModel):
    improvements: list[ImprovementOut]
