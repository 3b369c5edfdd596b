"""Shared request/response schemas: list filters, id envelopes, link payloads."""

from __future__ import annotations

import uuid
from typing import Any, ClassVar

from pydantic import BaseModel, Field, model_validator

from hub.models.enums import FilterOperator, SortDirection


class Filter(BaseModel):
    """A single list predicate, translated to a WHERE clause by the services."""

    field: str
    op: FilterOperator = FilterOperator.EQ
    value: Any = None


class ListQuery(BaseModel):
    """Filters, sort and limit for a list call."""

    filters: list[Filter] = Field(default_factory=list)
    sort_field: str | None = None
    sort_direction: SortDirection | None = None
    limit: int | None = Field(default=None, ge=1, le=1000)


class CreatedResponse(BaseModel):
    id: uuid.UUID


class LinkRequest(BaseModel):
    """Link an owning record to another record, caching its display name."""

    target_id: uuid.UUID
    target_name: str = Field(min_length=1, max_length=300)


class PartialUpdate(BaseModel):
    """Base for PATCH payloads: unset fields are left alone.

    Fields in ``required_fields`` back NOT NULL columns. They may be omitted
    but never sent as null.
    """

    required_fields: ClassVar[tuple[str, ...]] = ()

    @model_validator(mode="after")
    def required_fields_not_null(self) -> PartialUpdate:
        cleared = sorted(
            name
            for name in self.required_fields
            if name in self.model_fields_set and getattr(self, name) is None
        )
        if cleared:
            msg = f"Cannot clear required field(s): {', '.join(cleared)}"
            raise ValueError(msg)
        return self
