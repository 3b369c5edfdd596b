"""Contact routes."""
# ruff: noqa: B008

from __future__ import annotations

import uuid
from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from hub.api.crud import add_crud_routes
from hub.api.deps import get_services, get_session
from hub.schemas.contact import ContactCreate, ContactRead, ContactUpdate
from hub.schemas.lead import LeadRead
from hub.schemas.organisation_contact import OrganisationContactRead
from hub.schemas.quote import QuoteRead
from hub.services.container import HubServices

router = APIRouter(prefix="/contacts", tags=["contacts"])


@router.get("/{contact_id}/organisations", response_model=list[OrganisationContactRead])
async def contact_organisations(
    contact_id: uuid.UUID,
    db: AsyncSession = Depends(get_session),
    services: HubServices = Depends(get_services),
) -> Any:
    """Relationships of the contact, primary first."""
    return await services.organisation_contacts.organisations_for_contact(db, contact_id)


@router.get("/{contact_id}/quotes", response_model=list[QuoteRead])
async def contact_quotes(
    contact_id: uuid.UUID,
    db: AsyncSession = Depends(get_session),
    services: HubServices = Depends(get_services),
) -> Any:
    return await services.quotes.list_by_contact(db, contact_id)


@router.get("/{contact_id}/leads", response_model=list[LeadRead])
async def contact_leads(
    contact_id: uuid.UUID,
    db: AsyncSession = Depends(get_session),
    services: HubServices = Depends(get_services),
) -> Any:
    return await services.leads.list_by_contact(db, contact_id)


add_crud_routes(router, "contacts", ContactCreate, ContactUpdate, ContactRead)
