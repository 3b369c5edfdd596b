"""Pydantic schemas for organisation-contact relationships."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

from hub.models.organisation_contact import DEFAULT_PRIORITY
from hub.schemas.common import PartialUpdate
from hub.schemas.contact import ContactRead


class OrganisationContactCreate(BaseModel):
    organisation_id: uuid.UUID
    contact_id: uuid.UUID
    role: str | None = None
    is_primary: bool = False
    priority: int = Field(default=DEFAULT_PRIORITY, ge=0)


class OrganisationContactUpdate(PartialUpdate):
    required_fields: ClassVar[tuple[str, ...]] = ("is_primary", "priority")

    role: str | None = None
    is_primary: bool | None = None
    priority: int | None = Field(default=None, ge=0)


class OrganisationContactRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    organisation_id: uuid.UUID
    contact_id: uuid.UUID
    role: str | None = None
    is_primary: bool
    priority: int
    created_at: datetime | None = None
    updated_at: datetime | None = None


class OrganisationMember(ContactRead):
    """A contact as seen from an organisation, with its relationship data."""

    relationship_id: uuid.UUID
    relationship_role: str | None = None
    is_primary: bool = False
    priority: int = DEFAULT_PRIORITY
