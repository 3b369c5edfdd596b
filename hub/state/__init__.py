"""State containers — per-entity loading/error flags and optimistic list refresh."""

from hub.state.contacts import ContactStore, LeadStore, OrganisationStore, WebsiteStore
from hub.state.form_fields import FormFieldStore
from hub.state.quotes import QuoteStore
from hub.state.relationships import LinkStore, OrganisationContactStore

__all__ = [
    "QuoteStore",
    "ContactStore",
    "OrganisationStore",
    "WebsiteStore",
    "LeadStore",
    "OrganisationContactStore",
    "LinkStore",
    "FormFieldStore",
]
