"""Quote model — a priced proposal with embedded line items."""

from __future__ import annotations

import uuid
from datetime import date
from decimal import Decimal
from typing import Any

from sqlalchemy import Date, Numeric, String, Text
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column

from hub.models.base import Base, RecordMixin
from hub.models.enums import QuoteStatus


class Quote(RecordMixin, Base):
    """A quote sent to an organisation, contact or lead.

    The ``*_name`` columns are a denormalised projection of the linked
    record's display name. They are written on link and are not refreshed
    when the linked record is renamed.
    """

    __tablename__ = "quotes"

    quote_number: Mapped[str] = mapped_column(String(20), nullable=False, unique=True)
    subject: Mapped[str] = mapped_column(String(300), nullable=False)
    quote_date: Mapped[date] = mapped_column(Date, nullable=False)
    expiry_date: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), default=QuoteStatus.DRAFT.value, nullable=False, index=True
    )

    # Links (id + display name)
    organisation_id: Mapped[uuid.UUID | None] = mapped_column(UUID(as_uuid=True), index=True)
    organisation_name: Mapped[str | None] = mapped_column(String(300))
    contact_id: Mapped[uuid.UUID | None] = mapped_column(UUID(as_uuid=True), index=True)
    contact_name: Mapped[str | None] = mapped_column(String(300))
    lead_id: Mapped[uuid.UUID | None] = mapped_column(UUID(as_uuid=True), index=True)
    lead_name: Mapped[str | None] = mapped_column(String(300))
    project_id: Mapped[uuid.UUID | None] = mapped_column(UUID(as_uuid=True))

    # Line items as an ordered list of documents
    items: Mapped[list[dict[str, Any]]] = mapped_column(JSONB, nullable=False, default=list)

    # Derived money fields; 4 dp so an unrounded tax is stored exactly
    subtotal: Mapped[Decimal] = mapped_column(Numeric(14, 4), nullable=False, default=Decimal("0"))
    tax: Mapped[Decimal] = mapped_column(Numeric(14, 4), nullable=False, default=Decimal("0"))
    total: Mapped[Decimal] = mapped_column(Numeric(14, 4), nullable=False, default=Decimal("0"))

    notes: Mapped[str | None] = mapped_column(Text)
    quote_html: Mapped[str | None] = mapped_column(Text)

    def __repr__(self) -> str:
        return f"<Quote {self.quote_number} status={self.status} total={self.total}>"
