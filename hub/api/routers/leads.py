"""Lead routes."""
# ruff: noqa: B008

from __future__ import annotations

import uuid
from typing import Any

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from hub.api.crud import add_crud_routes
from hub.api.deps import get_services, get_session
from hub.schemas.common import LinkRequest
from hub.schemas.lead import LeadCreate, LeadRead, LeadUpdate
from hub.schemas.quote import QuoteRead
from hub.services.container import HubServices

router = APIRouter(prefix="/leads", tags=["leads"])

_NO_CONTENT = status.HTTP_204_NO_CONTENT


@router.get("/{lead_id}/quotes", response_model=list[QuoteRead])
async def lead_quotes(
    lead_id: uuid.UUID,
    db: AsyncSession = Depends(get_session),
    services: HubServices = Depends(get_services),
) -> Any:
    return await services.quotes.list_by_lead(db, lead_id)


@router.put("/{lead_id}/organisation", status_code=_NO_CONTENT)
async def link_organisation(
    lead_id: uuid.UUID,
    body: LinkRequest,
    db: AsyncSession = Depends(get_session),
    services: HubServices = Depends(get_services),
) -> Response:
    await services.links.link_lead_to_organisation(db, lead_id, body.target_id, body.target_name)
    return Response(status_code=_NO_CONTENT)


@router.delete("/{lead_id}/organisation", status_code=_NO_CONTENT)
async def unlink_organisation(
    lead_id: uuid.UUID,
    db: AsyncSession = Depends(get_session),
    services: HubServices = Depends(get_services),
) -> Response:
    await services.links.unlink_lead_from_organisation(db, lead_id)
    return Response(status_code=_NO_CONTENT)


@router.put("/{lead_id}/contacts/{contact_id}", status_code=_NO_CONTENT)
async def add_contact(
    lead_id: uuid.UUID,
    contact_id: uuid.UUID,
    db: AsyncSession = Depends(get_session),
    services: HubServices = Depends(get_services),
) -> Response:
    await services.links.add_contact_to_lead(db, lead_id, contact_id)
    return Response(status_code=_NO_CONTENT)


@router.delete("/{lead_id}/contacts/{contact_id}", status_code=_NO_CONTENT)
async def remove_contact(
    lead_id: uuid.UUID,
    contact_id: uuid.UUID,
    db: AsyncSession = Depends(get_session),
    services: HubServices = Depends(get_services),
) -> Response:
    await services.links.remove_contact_from_lead(db, lead_id, contact_id)
    return Response(status_code=_NO_CONTENT)


add_crud_routes(router, "leads", LeadCreate, LeadUpdate, LeadRead)
