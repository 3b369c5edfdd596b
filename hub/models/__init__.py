"""SQLAlchemy ORM models for the hub.

Import all models here so Alembic and Base.metadata.create_all() discover them.
"""

from __future__ import annotations

from hub.models.base import Base
from hub.models.contact import Contact
from hub.models.enums import FilterOperator, LeadStatus, QuoteStatus, SortDirection
from hub.models.form_field import FieldValue, FormFieldType
from hub.models.lead import Lead
from hub.models.organisation import Organisation
from hub.models.organisation_contact import OrganisationContact
from hub.models.quote import Quote
from hub.models.website import Website

__all__ = [
    # Base
    "Base",
    # Models
    "Quote",
    "Contact",
    "Organisation",
    "OrganisationContact",
    "Website",
    "Lead",
    "FormFieldType",
    "FieldValue",
    # Enums
    "QuoteStatus",
    "LeadStatus",
    "SortDirection",
    "FilterOperator",
]
