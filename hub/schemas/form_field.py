"""Pydantic schemas for configurable form field values."""

from __future__ import annotations

import uuid
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class FieldValueIn(BaseModel):
    """A dropdown option. ``id`` is required for updates only."""

    id: uuid.UUID | None = None
    value: str = Field(min_length=1, max_length=200)
    label: str = Field(min_length=1, max_length=200)
    order: int | None = Field(default=None, ge=0)
    is_default: bool = False
    is_active: bool | None = None
    metadata: dict[str, Any] | None = None


class FieldValueRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    field_type: str
    value: str
    label: str
    order: int
    is_default: bool
    is_active: bool
    metadata: dict[str, Any] | None = Field(
        default=None, validation_alias=AliasChoices("extra", "metadata")
    )


class FieldTypeCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100, pattern=r"^[A-Za-z0-9_-]+$")
