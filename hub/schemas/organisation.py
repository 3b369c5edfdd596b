"""Pydantic schemas for organisations."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field

from hub.schemas.common import PartialUpdate


class Address(BaseModel):
    street: str | None = None
    suburb: str | None = None
    state: str | None = None
    postcode: str | None = None
    country: str | None = None


class OrganisationBase(BaseModel):
    organisation_type: str | None = None
    industry: str | None = None
    status: str | None = None
    website: str | None = None
    email: str | None = None
    phone: str | None = None
    billing_address: Address | None = None
    shipping_address: Address | None = None
    custom_fields: dict[str, Any] | None = None
    icon: str | None = None
    color: str | None = None
    notes: str | None = None


class OrganisationCreate(OrganisationBase):
    organisation_name: str = Field(min_length=1, max_length=300)


class OrganisationUpdate(OrganisationBase, PartialUpdate):
    required_fields: ClassVar[tuple[str, ...]] = ("organisation_name",)

    organisation_name: str | None = Field(default=None, min_length=1, max_length=300)


class OrganisationRead(OrganisationBase):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    organisation_name: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
