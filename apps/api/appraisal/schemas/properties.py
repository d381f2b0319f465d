"""Schemas for property endpoints."""
from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Literal, Union

from pydantic import Field

from .common import ApiModel, RawNumber


class PropertyOut(ApiModel):
    id: int
    folio: str
    address: str | None = None
    zip_code: str | None = None
    land_value: Decimal | None = None
    building_value: Decimal | None = None
    owner_id: int | None = None
    neighborhood_id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class UpsertPropertyRequest(ApiModel):
    """Create or update a property by folio, with optional owner, sale and assessment."""

    action: Literal["upsert"]
    folio: str | None = None
    address: str | None = None
    zip_code: str | int | None = None
    land_value: RawNumber = None
    building_value: RawNumber = None
    owner_id: RawNumber = None
    owner_name: str | None = None
    owner_phone: str | None = None
    owner_email: str | None = None
    sale_date: str | None = None
    sale_price: RawNumber = None
    assessment_year: RawNumber = None


class GetByFolioRequest(ApiModel):
    action: Literal["getByFolio"]
    folio: str | None = None


class RangeByLandValueRequest(ApiModel):
    action: Literal["rangeByLandValue"]
    min_value: RawNumber = Field(default=None, alias="min")
    max_value: RawNumber = Field(default=None, alias="max")


class UpdateAddressRequest(ApiModel):
    action: Literal["updateAddress"]
    folio: str | None = None
    new_address: str | None = None


class AdjustLandPercentRequest(ApiModel):
    action: Literal["adjustLandPercent"]
    folio: str | None = None
    percent: RawNumber = None


class DeleteByFolioRequest(ApiModel):
    action: Literal["deleteByFolio"]
    folio: str | None = None


class CountAboveBuildingRequest(ApiModel):
    action: Literal["countAboveBuilding"]
    threshold: RawNumber = None


class ResetValuesRequest(ApiModel):
    action: Literal["resetValues"]
    folio: str | None = None


class AdjustLandByZipRequest(ApiModel):
    action: Literal["adjustLandByZip"]
    zip_code: str | int | None = None
    percent: RawNumber = None


PropertyAction = Union[
    UpsertPropertyRequest,
    GetByFolioRequest,
    RangeByLandValueRequest,
    UpdateAddressRequest,
    AdjustLandPercentRequest,
    DeleteByFolioRequest,
    CountAboveBuildingRequest,
    ResetValuesRequest,
    AdjustLandByZipRequest,
]


class PropertyResponse(ApiModel):
    property: PropertyOut | None


class PropertyListResponse(ApiModel):
    properties: list[PropertyOut]


class DeletedPropertyResponse(ApiModel):
    deleted: PropertyOut


class CountResponse(ApiModel):
    count: int


class ZipAdjustmentResponse(ApiModel):
    message: str
    zip_code: str
    percent: Decimal
    rows_affected: int


PropertyActionResponse = Union[
    PropertyResponse,
    PropertyListResponse,
    DeletedPropertyResponse,
    CountResponse,
    ZipAdjustmentResponse,
]
