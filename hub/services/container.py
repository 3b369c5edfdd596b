"""Service container built once at startup and passed by reference.

Routers reach it through ``request.app.state.services``; state containers
receive it in their constructor.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from hub.config import Settings
from hub.services.contacts import ContactService
from hub.services.form_fields import FormFieldsService
from hub.services.leads import LeadService
from hub.services.links import LinkService
from hub.services.organisation_contacts import OrganisationContactService
from hub.services.organisations import OrganisationService
from hub.services.quotes import QuoteService
from hub.services.websites import WebsiteService


@dataclass
class HubServices:
    quotes: QuoteService
    contacts: ContactService = field(default_factory=ContactService)
    organisations: OrganisationService = field(default_factory=OrganisationService)
    organisation_contacts: OrganisationContactService = field(
        default_factory=OrganisationContactService
    )
    websites: WebsiteService = field(default_factory=WebsiteService)
    leads: LeadService = field(default_factory=LeadService)
    form_fields: FormFieldsService = field(default_factory=FormFieldsService)
    links: LinkService = field(default_factory=LinkService)

    @classmethod
    def from_settings(cls, settings: Settings) -> HubServices:
        return cls(quotes=QuoteService(settings.quotes))
