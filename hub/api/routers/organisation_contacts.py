"""Organisation-contact relationship routes."""

from __future__ import annotations

from fastapi import APIRouter

from hub.api.crud import add_crud_routes
from hub.schemas.organisation_contact import (
    OrganisationContactCreate,
    OrganisationContactRead,
    OrganisationContactUpdate,
)

router = APIRouter(prefix="/organisation-contacts", tags=["organisation-contacts"])

add_crud_routes(
    router,
    "organisation_contacts",
    OrganisationContactCreate,
    OrganisationContactUpdate,
    OrganisationContactRead,
)
