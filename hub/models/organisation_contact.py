"""OrganisationContact model — many-to-many link between organisations and contacts."""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, ForeignKey, Index, Integer, String, text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hub.models.base import Base, RecordMixin

if TYPE_CHECKING:
    from hub.models.contact import Contact
    from hub.models.organisation import Organisation

DEFAULT_PRIORITY = 999


class OrganisationContact(RecordMixin, Base):
    """A contact's role at an organisation.

    At most one relationship per organisation may be primary; the partial
    unique index turns a lost demotion race into an IntegrityError.
    """

    __tablename__ = "organisation_contacts"
    __table_args__ = (
        Index(
            "uq_organisation_contacts_primary",
            "organisation_id",
            unique=True,
            postgresql_where=text("is_primary"),
        ),
    )

    organisation_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("organisations.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    contact_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("contacts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    role: Mapped[str | None] = mapped_column(String(100))
    is_primary: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    priority: Mapped[int] = mapped_column(Integer, default=DEFAULT_PRIORITY, nullable=False)

    organisation: Mapped[Organisation] = relationship("Organisation", back_populates="contact_links")
    contact: Mapped[Contact] = relationship("Contact", back_populates="organisation_links")

    def __repr__(self) -> str:
        return (
            f"<OrganisationContact org={self.organisation_id} contact={self.contact_id} "
            f"primary={self.is_primary}>"
        )
