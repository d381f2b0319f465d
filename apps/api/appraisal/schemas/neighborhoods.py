"""Schemas for neighborhood endpoints."""
from __future__ import annotations

from typing import Literal, Union

from pydantic import Field

from .common import ApiModel, RawNumber
from .properties import PropertyOut


class NeighborhoodOut(ApiModel):
    id: int
    code: str
    name: str


class NeighborhoodDetail(NeighborhoodOut):
    properties: list[PropertyOut] = Field(default_factory=list)


class CreateNeighborhoodRequest(ApiModel):
    action: Literal["createNeighborhood"]
    code: str | None = None
    name: str | None = None


class AssignPropertyToNeighborhoodRequest(ApiModel):
    action: Literal["assignPropertyToNeighborhood"]
    property_id: RawNumber = None
    neighborhood_id: RawNumber = None


NeighborhoodAction = Union[CreateNeighborhoodRequest, AssignPropertyToNeighborhoodRequest]


class NeighborhoodResponse(ApiModel):
    neighborhood: NeighborhoodOut


class NeighborhoodDetailResponse(ApiModel):
    neighborhood: NeighborhoodDetail | None


class NeighborhoodListResponse(ApiModel):
    neighborhoods: list[NeighborhoodOut]


class NeighborhoodAssignmentResponse(ApiModel):
    property: PropertyOut
