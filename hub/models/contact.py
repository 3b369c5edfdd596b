"""Contact model — a person the business deals with."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hub.models.base import Base, RecordMixin

if TYPE_CHECKING:
    from hub.models.organisation_contact import OrganisationContact


class Contact(RecordMixin, Base):
    """A person; ``full_name`` is derived from first and last name."""

    __tablename__ = "contacts"

    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    full_name: Mapped[str] = mapped_column(String(201), nullable=False, index=True)
    email: Mapped[str | None] = mapped_column(String(255), index=True)
    phone: Mapped[str | None] = mapped_column(String(40))
    mobile: Mapped[str | None] = mapped_column(String(40))
    job_title: Mapped[str | None] = mapped_column(String(150))
    department: Mapped[str | None] = mapped_column(String(150))
    role: Mapped[str | None] = mapped_column(String(100))
    status: Mapped[str | None] = mapped_column(String(50))
    linked_in: Mapped[str | None] = mapped_column(String(300))
    image: Mapped[str | None] = mapped_column(String(500), comment="Profile photo URL")
    notes: Mapped[str | None] = mapped_column(Text)

    organisation_links: Mapped[list[OrganisationContact]] = relationship(
        "OrganisationContact", back_populates="contact", passive_deletes=True
    )

    def __repr__(self) -> str:
        return f"<Contact {self.full_name}>"
