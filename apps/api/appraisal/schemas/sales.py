"""Schemas for sale endpoints."""
from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Literal

from .common import ApiModel, RawNumber


class SaleOut(ApiModel):
    id: int
    property_id: int
    sale_date: date
    price: Decimal
    buyer: str | None = None
    seller: str | None = None
    doc_number: str | None = None


class RecordSaleRequest(ApiModel):
    action: Literal["recordSale"]
    property_id: RawNumber = None
    sale_date: str | None = None
    price: RawNumber = None
    doc_number: str | None = None
    buyer: str | None = None
    seller: str | None = None


class SaleResponse(ApiModel):
    sale: SaleOut


class SaleListResponse(ApiModel):
    sales: list[SaleOut]
