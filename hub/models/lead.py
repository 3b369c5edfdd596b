"""Lead model — a sales opportunity not yet converted into work."""

from __future__ import annotations

import uuid
from typing import Any

from sqlalchemy import String, Text
from sqlalchemy.dialects.postgresql import ARRAY, JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column

from hub.models.base import Base, RecordMixin
from hub.models.enums import LeadStatus


class Lead(RecordMixin, Base):
    """A lead with an embedded contact person and optional organisation link."""

    __tablename__ = "leads"

    # full_name / email / phone / job_title
    contact_person: Mapped[dict[str, Any]] = mapped_column(JSONB, nullable=False, default=dict)
    organisation_id: Mapped[uuid.UUID | None] = mapped_column(UUID(as_uuid=True), index=True)
    organisation_name: Mapped[str | None] = mapped_column(String(300))
    status: Mapped[str] = mapped_column(
        String(20), default=LeadStatus.NEW.value, nullable=False, index=True
    )
    source: Mapped[str | None] = mapped_column(String(100))
    notes: Mapped[str | None] = mapped_column(Text)
    contact_ids: Mapped[list[str]] = mapped_column(
        ARRAY(String(36)), nullable=False, default=list, comment="Linked contact ids"
    )

    @property
    def display_name(self) -> str:
        """Name written onto quotes linked to this lead."""
        person = self.contact_person or {}
        return person.get("full_name") or self.organisation_name or ""

    def __repr__(self) -> str:
        return f"<Lead {self.display_name} status={self.status}>"
