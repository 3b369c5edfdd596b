"""Website model — a site managed for an organisation."""

from __future__ import annotations

import uuid

from sqlalchemy import String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from hub.models.base import Base, RecordMixin


class Website(RecordMixin, Base):
    """A website; ``organisation_name`` is a denormalised projection."""

    __tablename__ = "websites"

    domain: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    organisation_id: Mapped[uuid.UUID | None] = mapped_column(UUID(as_uuid=True), index=True)
    organisation_name: Mapped[str | None] = mapped_column(String(300))
    status: Mapped[str | None] = mapped_column(String(50))
    cms: Mapped[str | None] = mapped_column(String(100))
    hosting: Mapped[str | None] = mapped_column(String(100))
    ssl_certificate: Mapped[str | None] = mapped_column(String(100))
    notes: Mapped[str | None] = mapped_column(Text)

    def __repr__(self) -> str:
        return f"<Website {self.domain}>"
