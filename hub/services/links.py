"""Relationship linking between records.

A link writes the foreign id together with a denormalised display name on
the owning record; unlink clears both to NULL. ``updated_at`` is refreshed
by the column's ``onupdate``. Display names are a read-model projection: a
renamed organisation stays stale on its quotes until they are relinked.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any

from sqlalchemy import func, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from hub.models.lead import Lead
from hub.models.quote import Quote
from hub.models.website import Website
from hub.services.errors import NotFoundError, RemoteFailureError

logger = logging.getLogger(__name__)


class LinkService:
    """Link/unlink operations for quotes, websites and leads."""

    async def _write(
        self,
        db: AsyncSession,
        model: type[Any],
        entity: str,
        record_id: uuid.UUID,
        values: dict[str, Any],
        action: str,
    ) -> None:
        try:
            result = await db.execute(update(model).where(model.id == record_id).values(**values))
        except SQLAlchemyError as exc:
            logger.exception("Error %s %s %s", action, entity, record_id)
            raise RemoteFailureError(f"Failed to {action} {entity}: {exc}") from exc
        if result.rowcount == 0:
            raise NotFoundError(entity, record_id)
        logger.info("%s %s: id=%s", action, entity, record_id)

    # ── Quote ↔ organisation / contact / lead ────────────────────────

    async def link_quote_to_organisation(
        self, db: AsyncSession, quote_id: uuid.UUID, organisation_id: uuid.UUID, organisation_name: str
    ) -> None:
        await self._write(
            db, Quote, "quote", quote_id,
            {"organisation_id": organisation_id, "organisation_name": organisation_name},
            "link organisation to",
        )

    async def unlink_quote_from_organisation(self, db: AsyncSession, quote_id: uuid.UUID) -> None:
        await self._write(
            db, Quote, "quote", quote_id,
            {"organisation_id": None, "organisation_name": None},
            "unlink organisation from",
        )

    async def link_quote_to_contact(
        self, db: AsyncSession, quote_id: uuid.UUID, contact_id: uuid.UUID, contact_name: str
    ) -> None:
        await self._write(
            db, Quote, "quote", quote_id,
            {"contact_id": contact_id, "contact_name": contact_name},
            "link contact to",
        )

    async def unlink_quote_from_contact(self, db: AsyncSession, quote_id: uuid.UUID) -> None:
        await self._write(
            db, Quote, "quote", quote_id,
            {"contact_id": None, "contact_name": None},
            "unlink contact from",
        )

    async def link_quote_to_lead(
        self, db: AsyncSession, quote_id: uuid.UUID, lead_id: uuid.UUID, lead_name: str
    ) -> None:
        await self._write(
            db, Quote, "quote", quote_id,
            {"lead_id": lead_id, "lead_name": lead_name},
            "link lead to",
        )

    async def unlink_quote_from_lead(self, db: AsyncSession, quote_id: uuid.UUID) -> None:
        await self._write(
            db, Quote, "quote", quote_id,
            {"lead_id": None, "lead_name": None},
            "unlink lead from",
        )

    # ── Website ↔ organisation ───────────────────────────────────────

    async def link_website_to_organisation(
        self, db: AsyncSession, website_id: uuid.UUID, organisation_id: uuid.UUID, organisation_name: str
    ) -> None:
        await self._write(
            db, Website, "website", website_id,
            {"organisation_id": organisation_id, "organisation_name": organisation_name},
            "link organisation to",
        )

    async def unlink_website_from_organisation(self, db: AsyncSession, website_id: uuid.UUID) -> None:
        await self._write(
            db, Website, "website", website_id,
            {"organisation_id": None, "organisation_name": None},
            "unlink organisation from",
        )

    # ── Lead ↔ organisation / contacts ───────────────────────────────

    async def link_lead_to_organisation(
        self, db: AsyncSession, lead_id: uuid.UUID, organisation_id: uuid.UUID, organisation_name: str
    ) -> None:
        await self._write(
            db, Lead, "lead", lead_id,
            {"organisation_id": organisation_id, "organisation_name": organisation_name},
            "link organisation to",
        )

    async def unlink_lead_from_organisation(self, db: AsyncSession, lead_id: uuid.UUID) -> None:
        await self._write(
            db, Lead, "lead", lead_id,
            {"organisation_id": None, "organisation_name": None},
            "unlink organisation from",
        )

    async def add_contact_to_lead(
        self, db: AsyncSession, lead_id: uuid.UUID, contact_id: uuid.UUID
    ) -> None:
        """Append the contact id unless already present."""
        cid = str(contact_id)
        await self._write(
            db, Lead, "lead", lead_id,
            {
                "contact_ids": func.array_append(
                    func.array_remove(Lead.contact_ids, cid), cid
                )
            },
            "add contact to",
        )

    async def remove_contact_from_lead(
        self, db: AsyncSession, lead_id: uuid.UUID, contact_id: uuid.UUID
    ) -> None:
        await self._write(
            db, Lead, "lead", lead_id,
            {"contact_ids": func.array_remove(Lead.contact_ids, str(contact_id))},
            "remove contact from",
        )
