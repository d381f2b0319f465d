"""Schemas for report and SQL pass-through endpoints."""
from __future__ import annotations

import enum
from typing import Any, Literal, Union

from .common import ApiModel, RawNumber


class ReadQuery(str, enum.Enum):
    PROPERTIES_WITH_OWNER = "properties_with_owner"
    AVG_SALE_PRICE_BY_NEIGHBORHOOD = "avg_sale_price_by_neighborhood"
    PROPERTY_BY_FOLIO = "property_by_folio"
    SALES_IN_YEAR = "sales_in_year"


class InsertOwnerRequest(ApiModel):
    action: Literal["insert_owner"]
    name: str | None = None
    email: str | None = None


class UpdatePropertyAddressRequest(ApiModel):
    action: Literal["update_property_address"]
    id: RawNumber = None
    new_address: str | None = None


class DeleteImprovementRequest(ApiModel):
    action: Literal["delete_improvement"]
    id: RawNumber = None


class AddSaleRequest(ApiModel):
    action: Literal["add_sale"]
    property_id: RawNumber = None
    price: RawNumber = None
    sale_date: str | None = None
    buyer: str | None = None
    seller: str | None = None


class SalesInRangeRequest(ApiModel):
    action: Literal["sales_in_range"]
    start: str | None = None
    end: str | None = None


class OwnersWithMinPropertiesRequest(ApiModel):
    action: Literal["owners_with_min_properties"]
    min_count: RawNumber = None


WriteQuery = Union[
    InsertOwnerRequest,
    UpdatePropertyAddressRequest,
    DeleteImprovementRequest,
    AddSaleRequest,
    SalesInRangeRequest,
    OwnersWithMinPropertiesRequest,
]


class RowsResponse(ApiModel):
    rows: list[dict[str, Any]]


class RowResponse(ApiModel):
    row: dict[str, Any] | None


class SummaryResponse(ApiModel):
    results: list[dict[str, Any]]
