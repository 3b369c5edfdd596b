"""Organisation routes, with the records that hang off an organisation."""
# ruff: noqa: B008

from __future__ import annotations

import uuid
from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from hub.api.crud import add_crud_routes
from hub.api.deps import get_services, get_session
from hub.schemas.lead import LeadRead
from hub.schemas.organisation import OrganisationCreate, OrganisationRead, OrganisationUpdate
from hub.schemas.organisation_contact import OrganisationMember
from hub.schemas.quote import QuoteRead
from hub.schemas.website import WebsiteRead
from hub.services.container import HubServices

router = APIRouter(prefix="/organisations", tags=["organisations"])


@router.get("/{organisation_id}/contacts", response_model=list[OrganisationMember])
async def organisation_contacts(
    organisation_id: uuid.UUID,
    db: AsyncSession = Depends(get_session),
    services: HubServices = Depends(get_services),
) -> Any:
    """Contacts ordered by priority, with their relationship fields."""
    return await services.organisation_contacts.contacts_for_organisation(db, organisation_id)


@router.get("/{organisation_id}/websites", response_model=list[WebsiteRead])
async def organisation_websites(
    organisation_id: uuid.UUID,
    db: AsyncSession = Depends(get_session),
    services: HubServices = Depends(get_services),
) -> Any:
    return await services.websites.list_by_organisation(db, organisation_id)


@router.get("/{organisation_id}/quotes", response_model=list[QuoteRead])
async def organisation_quotes(
    organisation_id: uuid.UUID,
    db: AsyncSession = Depends(get_session),
    services: HubServices = Depends(get_services),
) -> Any:
    return await services.quotes.list_by_organisation(db, organisation_id)


@router.get("/{organisation_id}/leads", response_model=list[LeadRead])
async def organisation_leads(
    organisation_id: uuid.UUID,
    db: AsyncSession = Depends(get_session),
    services: HubServices = Depends(get_services),
) -> Any:
    return await services.leads.list_by_organisation(db, organisation_id)


add_crud_routes(router, "organisations", OrganisationCreate, OrganisationUpdate, OrganisationRead)
