"""Organisation-contact relationship state and link/unlink state."""

from __future__ import annotations

import contextlib
import uuid
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from hub.schemas.organisation_contact import (
    OrganisationContactCreate,
    OrganisationContactRead,
    OrganisationContactUpdate,
    OrganisationMember,
)
from hub.schemas.quote import QuoteRead
from hub.services.links import LinkService
from hub.services.organisation_contacts import OrganisationContactService
from hub.services.quotes import QuoteService
from hub.state.base import STORE_ERRORS, BaseStore


class OrganisationContactStore(BaseStore):
    """Members of one organisation and memberships of one contact.

    Promoting a primary contact demotes others server-side, so writes reload
    the organisation's member list instead of patching it.
    """

    label = "organisation contacts"

    def __init__(
        self,
        service: OrganisationContactService,
        session_factory: async_sessionmaker[AsyncSession],
    ) -> None:
        super().__init__(session_factory)
        self.service = service
        self.members: list[OrganisationMember] = []
        self.memberships: list[OrganisationContactRead] = []
        self.organisation_id: uuid.UUID | None = None
        self.loading = False
        self.submitting = False
        self.error: Exception | None = None
        self.submit_error: Exception | None = None

    async def fetch_contacts_for_organisation(self, organisation_id: uuid.UUID) -> None:
        self.organisation_id = organisation_id
        with contextlib.suppress(*STORE_ERRORS):
            async with self._track("loading", "error", "fetching"), self._session() as db:
                self.members = await self.service.contacts_for_organisation(db, organisation_id)

    async def fetch_organisations_for_contact(self, contact_id: uuid.UUID) -> None:
        with contextlib.suppress(*STORE_ERRORS):
            async with self._track("loading", "error", "fetching"), self._session() as db:
                rows = await self.service.organisations_for_contact(db, contact_id)
                self.memberships = [OrganisationContactRead.model_validate(r) for r in rows]

    async def _reload(self, organisation_id: uuid.UUID | None) -> None:
        if organisation_id is not None and organisation_id == self.organisation_id:
            await self.fetch_contacts_for_organisation(organisation_id)

    async def add(self, data: OrganisationContactCreate) -> uuid.UUID:
        async with self._track("submitting", "submit_error", "creating"):
            async with self._session() as db:
                relationship_id = await self.service.create(db, data.model_dump())
        await self._reload(data.organisation_id)
        return relationship_id

    async def update(self, relationship_id: uuid.UUID, data: OrganisationContactUpdate) -> None:
        async with self._track("submitting", "submit_error", "updating"):
            async with self._session() as db:
                await self.service.update(db, relationship_id, data.model_dump(exclude_unset=True))
        await self._reload(self.organisation_id)

    async def remove(self, relationship_id: uuid.UUID) -> None:
        async with self._track("submitting", "submit_error", "deleting"):
            async with self._session() as db:
                await self.service.delete(db, relationship_id)
            self.members = [m for m in self.members if m.relationship_id != relationship_id]
            self.memberships = [m for m in self.memberships if m.id != relationship_id]


class LinkStore(BaseStore):
    """Link/unlink actions with a single loading flag and error."""

    label = "links"

    def __init__(
        self,
        links: LinkService,
        quotes: QuoteService,
        session_factory: async_sessionmaker[AsyncSession],
    ) -> None:
        super().__init__(session_factory)
        self.links = links
        self.quotes = quotes
        self.loading = False
        self.error: Exception | None = None

    async def _run(self, action: str, method: str, *args: Any) -> bool:
        async with self._track("loading", "error", action), self._session() as db:
            await getattr(self.links, method)(db, *args)
        return True

    async def link_quote_to_organisation(
        self, quote_id: uuid.UUID, organisation_id: uuid.UUID, organisation_name: str
    ) -> bool:
        return await self._run(
            "linking", "link_quote_to_organisation", quote_id, organisation_id, organisation_name
        )

    async def unlink_quote_from_organisation(self, quote_id: uuid.UUID) -> bool:
        return await self._run("unlinking", "unlink_quote_from_organisation", quote_id)

    async def link_quote_to_contact(
        self, quote_id: uuid.UUID, contact_id: uuid.UUID, contact_name: str
    ) -> bool:
        return await self._run("linking", "link_quote_to_contact", quote_id, contact_id, contact_name)

    async def unlink_quote_from_contact(self, quote_id: uuid.UUID) -> bool:
        return await self._run("unlinking", "unlink_quote_from_contact", quote_id)

    async def link_quote_to_lead(
        self, quote_id: uuid.UUID, lead_id: uuid.UUID, lead_name: str
    ) -> bool:
        return await self._run("linking", "link_quote_to_lead", quote_id, lead_id, lead_name)

    async def unlink_quote_from_lead(self, quote_id: uuid.UUID) -> bool:
        return await self._run("unlinking", "unlink_quote_from_lead", quote_id)

    async def link_website_to_organisation(
        self, website_id: uuid.UUID, organisation_id: uuid.UUID, organisation_name: str
    ) -> bool:
        return await self._run(
            "linking", "link_website_to_organisation", website_id, organisation_id, organisation_name
        )

    async def unlink_website_from_organisation(self, website_id: uuid.UUID) -> bool:
        return await self._run("unlinking", "unlink_website_from_organisation", website_id)

    async def quotes_for_organisation(self, organisation_id: uuid.UUID) -> list[QuoteRead]:
        async with self._track("loading", "error", "fetching quotes for"), self._session() as db:
            rows = await self.quotes.list_by_organisation(db, organisation_id)
        return [QuoteRead.model_validate(r) for r in rows]
