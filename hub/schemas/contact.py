"""Pydantic schemas for contacts."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

from hub.schemas.common import PartialUpdate


class ContactBase(BaseModel):
    email: str | None = Field(default=None, max_length=255)
    phone: str | None = None
    mobile: str | None = None
    job_title: str | None = None
    department: str | None = None
    role: str | None = None
    status: str | None = None
    linked_in: str | None = None
    image: str | None = None
    notes: str | None = None


class ContactCreate(ContactBase):
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(default="", max_length=100)


class ContactUpdate(ContactBase, PartialUpdate):
    required_fields: ClassVar[tuple[str, ...]] = ("first_name", "last_name")

    first_name: str | None = Field(default=None, min_length=1, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)


class ContactRead(ContactBase):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    first_name: str
    last_name: str
    full_name: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
