"""Organisation-contact relationship service.

Maintains the "one primary contact per organisation" rule: before a
relationship is written as primary, every other primary relationship of the
same organisation is demoted in one UPDATE. Demotion and write share the
caller's transaction; the partial unique index on ``organisation_id WHERE
is_primary`` rejects the loser of two concurrent promotions.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Mapping
from typing import Any, ClassVar

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from hub.models.enums import SortDirection
from hub.models.organisation_contact import DEFAULT_PRIORITY, OrganisationContact
from hub.schemas.contact import ContactRead
from hub.schemas.organisation_contact import OrganisationMember
from hub.services.base import EntityService

logger = logging.getLogger(__name__)


class OrganisationContactService(EntityService[OrganisationContact]):
    """Manages rows of ``organisation_contacts``."""

    model = OrganisationContact
    entity_name = "organisation contact"
    default_sort_field = "priority"
    default_sort_direction = SortDirection.ASC
    search_fields: ClassVar[tuple[str, ...]] = ("role",)

    async def demote_other_primaries(
        self,
        db: AsyncSession,
        organisation_id: uuid.UUID,
        exclude_contact_id: uuid.UUID,
    ) -> int:
        """Set ``is_primary=False`` on the organisation's other primary rows.

        Returns the number of relationships demoted.
        """
        try:
            result = await db.execute(
                update(OrganisationContact)
                .where(
                    OrganisationContact.organisation_id == organisation_id,
                    OrganisationContact.contact_id != exclude_contact_id,
                    OrganisationContact.is_primary.is_(True),
                )
                .values(is_primary=False)
            )
        except SQLAlchemyError as exc:
            raise self._fail("demote primary for", exc) from exc
        demoted = result.rowcount or 0
        if demoted:
            logger.info(
                "Demoted %d primary contact(s) of organisation %s", demoted, organisation_id
            )
        return demoted

    async def create(self, db: AsyncSession, data: Mapping[str, Any]) -> uuid.UUID:
        values = dict(data)
        values.setdefault("priority", DEFAULT_PRIORITY)
        if values.get("is_primary"):
            await self.demote_other_primaries(db, values["organisation_id"], values["contact_id"])
        return await super().create(db, values)

    async def prepare_update(
        self, db: AsyncSession, record_id: uuid.UUID, data: Mapping[str, Any]
    ) -> dict[str, Any]:
        values = dict(data)
        # Relationships are re-created rather than re-pointed
        values.pop("organisation_id", None)
        values.pop("contact_id", None)
        if values.get("is_primary"):
            current = await self.get_or_raise(db, record_id)
            await self.demote_other_primaries(db, current.organisation_id, current.contact_id)
        return values

    async def contacts_for_organisation(
        self, db: AsyncSession, organisation_id: uuid.UUID
    ) -> list[OrganisationMember]:
        """Contacts of an organisation ordered by priority, with relationship data.

        Relationships whose contact no longer exists are skipped.
        """
        try:
            result = await db.execute(
                select(OrganisationContact)
                .where(OrganisationContact.organisation_id == organisation_id)
                .options(selectinload(OrganisationContact.contact))
                .order_by(OrganisationContact.priority.asc())
            )
        except SQLAlchemyError as exc:
            raise self._fail("list contacts of", exc) from exc

        members: list[OrganisationMember] = []
        for rel in result.scalars().all():
            if rel.contact is None:
                continue
            contact = ContactRead.model_validate(rel.contact)
            members.append(
                OrganisationMember(
                    **contact.model_dump(),
                    relationship_id=rel.id,
                    relationship_role=rel.role,
                    is_primary=bool(rel.is_primary),
                    priority=rel.priority if rel.priority is not None else DEFAULT_PRIORITY,
                )
            )
        return members

    async def organisations_for_contact(
        self, db: AsyncSession, contact_id: uuid.UUID
    ) -> list[OrganisationContact]:
        """Relationships of a contact, primary first then by priority."""
        try:
            result = await db.execute(
                select(OrganisationContact)
                .where(OrganisationContact.contact_id == contact_id)
                .order_by(
                    OrganisationContact.is_primary.desc(),
                    OrganisationContact.priority.asc(),
                )
            )
        except SQLAlchemyError as exc:
            raise self._fail("list organisations of", exc) from exc
        return list(result.scalars().all())
