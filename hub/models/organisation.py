"""Organisation model — a client or partner business."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import String, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hub.models.base import Base, RecordMixin

if TYPE_CHECKING:
    from hub.models.organisation_contact import OrganisationContact


class Organisation(RecordMixin, Base):
    """A business; addresses and custom fields are embedded documents."""

    __tablename__ = "organisations"

    organisation_name: Mapped[str] = mapped_column(String(300), nullable=False, index=True)
    organisation_type: Mapped[str | None] = mapped_column(String(100))
    industry: Mapped[str | None] = mapped_column(String(100))
    status: Mapped[str | None] = mapped_column(String(50))
    website: Mapped[str | None] = mapped_column(String(300))
    email: Mapped[str | None] = mapped_column(String(255))
    phone: Mapped[str | None] = mapped_column(String(40))

    # street / suburb / state / postcode / country
    billing_address: Mapped[dict[str, Any] | None] = mapped_column(JSONB)
    shipping_address: Mapped[dict[str, Any] | None] = mapped_column(JSONB)
    custom_fields: Mapped[dict[str, Any] | None] = mapped_column(JSONB)

    icon: Mapped[str | None] = mapped_column(String(20))
    color: Mapped[str | None] = mapped_column(String(20))
    notes: Mapped[str | None] = mapped_column(Text)

    contact_links: Mapped[list[OrganisationContact]] = relationship(
        "OrganisationContact", back_populates="organisation", passive_deletes=True
    )

    def __repr__(self) -> str:
        return f"<Organisation {self.organisation_name}>"
