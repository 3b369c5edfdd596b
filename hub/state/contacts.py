"""Contact, organisation, website and lead state."""

from __future__ import annotations

import contextlib
import uuid

from hub.schemas.contact import ContactRead
from hub.schemas.lead import LeadRead
from hub.schemas.organisation import OrganisationRead
from hub.schemas.website import WebsiteRead
from hub.services.leads import LeadService
from hub.services.websites import WebsiteService
from hub.state.base import STORE_ERRORS, EntityStore


class ContactStore(EntityStore[ContactRead]):
    read_schema = ContactRead
    label = "contacts"


class OrganisationStore(EntityStore[OrganisationRead]):
    read_schema = OrganisationRead
    label = "organisations"


class WebsiteStore(EntityStore[WebsiteRead]):
    read_schema = WebsiteRead
    label = "websites"
    service: WebsiteService

    async def fetch_by_organisation(self, organisation_id: uuid.UUID) -> None:
        with contextlib.suppress(*STORE_ERRORS):
            async with self._track("loading", "error", "fetching"), self._session() as db:
                records = await self.service.list_by_organisation(db, organisation_id)
                self.items = [self._to_read(r) for r in records]


class LeadStore(EntityStore[LeadRead]):
    read_schema = LeadRead
    label = "leads"
    service: LeadService

    async def fetch_by_organisation(self, organisation_id: uuid.UUID) -> None:
        with contextlib.suppress(*STORE_ERRORS):
            async with self._track("loading", "error", "fetching"), self._session() as db:
                records = await self.service.list_by_organisation(db, organisation_id)
                self.items = [self._to_read(r) for r in records]

    async def fetch_by_contact(self, contact_id: uuid.UUID) -> None:
        with contextlib.suppress(*STORE_ERRORS):
            async with self._track("loading", "error", "fetching"), self._session() as db:
                records = await self.service.list_by_contact(db, contact_id)
                self.items = [self._to_read(r) for r in records]
