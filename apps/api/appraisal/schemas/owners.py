"""Schemas for owner endpoints."""
from __future__ import annotations

from typing import Literal, Union

from .common import ApiModel, RawNumber
from .properties import PropertyOut


class OwnerOut(ApiModel):
    id: int
    name: str
    phone: str | None = None
    email: str | None = None


class CreateOwnerRequest(ApiModel):
    action: Literal["createOwner"]
    name: str | None = None
    phone: str | None = None
    email: str | None = None


class AssignOwnerRequest(ApiModel):
    action: Literal["assignOwner"]
    property_id: RawNumber = None
    owner_id: RawNumber = None


OwnerAction = Union[CreateOwnerRequest, AssignOwnerRequest]


class OwnerResponse(ApiModel):
    owner: OwnerOut


class OwnerListResponse(ApiModel):
    owners: list[OwnerOut]


class OwnerAssignmentResponse(ApiModel):
    property: PropertyOut
