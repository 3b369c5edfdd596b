"""Pydantic schemas for leads."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

from hub.models.enums import LeadStatus
from hub.schemas.common import PartialUpdate


class ContactPerson(BaseModel):
    full_name: str = Field(min_length=1, max_length=200)
    email: str | None = None
    phone: str | None = None
    job_title: str | None = None


class LeadCreate(BaseModel):
    contact_person: ContactPerson
    organisation_id: uuid.UUID | None = None
    organisation_name: str | None = None
    status: LeadStatus = LeadStatus.NEW
    source: str | None = None
    notes: str | None = None
    contact_ids: list[str] = Field(default_factory=list)


class LeadUpdate(PartialUpdate):
    required_fields: ClassVar[tuple[str, ...]] = ("contact_person", "status")

    contact_person: ContactPerson | None = None
    status: LeadStatus | None = None
    source: str | None = None
    notes: str | None = None


class LeadRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    contact_person: ContactPerson
    organisation_id: uuid.UUID | None = None
    organisation_name: str | None = None
    status: LeadStatus
    source: str | None = None
    notes: str | None = None
    contact_ids: list[str] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None
