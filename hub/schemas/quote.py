"""Pydantic schemas for quotes and quote line items.

Create/update payloads carry the client-side form checks: required subject
and dates, expiry after the quote date, positive quantities and
non-negative prices. Money fields are always derived by the service.
"""

from __future__ import annotations

import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from hub.models.enums import QuoteStatus
from hub.schemas.common import PartialUpdate


class QuoteItemIn(BaseModel):
    """A line item as submitted by the quote form. ``amount`` is ignored."""

    item_id: str | None = None
    description: str = Field(min_length=1, max_length=1000)
    quantity: Decimal = Field(gt=0)
    unit_price: Decimal = Field(ge=0)
    amount: Decimal | None = None

    @field_validator("description")
    @classmethod
    def description_not_blank(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            msg = "Description is required"
            raise ValueError(msg)
        return stripped


class QuoteItem(BaseModel):
    """A stored line item with its computed amount."""

    item_id: str
    description: str
    quantity: Decimal
    unit_price: Decimal
    amount: Decimal


class QuoteLinks(BaseModel):
    """Optional links written at create time."""

    organisation_id: uuid.UUID | None = None
    organisation_name: str | None = None
    contact_id: uuid.UUID | None = None
    contact_name: str | None = None
    lead_id: uuid.UUID | None = None
    lead_name: str | None = None
    project_id: uuid.UUID | None = None


class QuoteCreate(QuoteLinks):
    subject: str = Field(min_length=1, max_length=300)
    quote_date: date
    expiry_date: date
    status: QuoteStatus = QuoteStatus.DRAFT
    items: list[QuoteItemIn] = Field(default_factory=list)
    notes: str | None = None

    @field_validator("subject")
    @classmethod
    def subject_not_blank(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            msg = "Subject is required"
            raise ValueError(msg)
        return stripped

    @model_validator(mode="after")
    def expiry_after_quote_date(self) -> QuoteCreate:
        if self.expiry_date <= self.quote_date:
            msg = "Expiry date must be after quote date"
            raise ValueError(msg)
        return self


class QuoteUpdate(PartialUpdate):
    """Partial update; only fields explicitly set are written."""

    required_fields: ClassVar[tuple[str, ...]] = (
        "subject",
        "quote_date",
        "expiry_date",
        "status",
        "items",
    )

    subject: str | None = Field(default=None, min_length=1, max_length=300)
    quote_date: date | None = None
    expiry_date: date | None = None
    status: QuoteStatus | None = None
    items: list[QuoteItemIn] | None = None
    notes: str | None = None

    @model_validator(mode="after")
    def expiry_after_quote_date(self) -> QuoteUpdate:
        if self.quote_date and self.expiry_date and self.expiry_date <= self.quote_date:
            msg = "Expiry date must be after quote date"
            raise ValueError(msg)
        return self


class QuoteStatusUpdate(BaseModel):
    status: QuoteStatus


class QuoteRead(QuoteLinks):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    quote_number: str
    subject: str
    quote_date: date
    expiry_date: date
    status: QuoteStatus
    items: list[QuoteItem]
    subtotal: Decimal
    tax: Decimal
    total: Decimal
    notes: str | None = None
    quote_html: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class QuoteStatusOption(BaseModel):
    """A value/label pair for the status dropdown."""

    value: QuoteStatus
    label: str
