"""Pydantic schemas for websites."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

from hub.schemas.common import PartialUpdate


class WebsiteBase(BaseModel):
    status: str | None = None
    cms: str | None = None
    hosting: str | None = None
    ssl_certificate: str | None = None
    notes: str | None = None


class WebsiteCreate(WebsiteBase):
    domain: str = Field(min_length=1, max_length=255)
    organisation_id: uuid.UUID | None = None
    organisation_name: str | None = None


class WebsiteUpdate(WebsiteBase, PartialUpdate):
    required_fields: ClassVar[tuple[str, ...]] = ("domain",)

    domain: str | None = Field(default=None, min_length=1, max_length=255)


class WebsiteRead(WebsiteBase):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    domain: str
    organisation_id: uuid.UUID | None = None
    organisation_name: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
