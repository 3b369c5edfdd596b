"""Website routes."""
# ruff: noqa: B008

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from hub.api.crud import add_crud_routes
from hub.api.deps import get_services, get_session
from hub.schemas.common import LinkRequest
from hub.schemas.website import WebsiteCreate, WebsiteRead, WebsiteUpdate
from hub.services.container import HubServices

router = APIRouter(prefix="/websites", tags=["websites"])


@router.put("/{website_id}/organisation", status_code=status.HTTP_204_NO_CONTENT)
async def link_organisation(
    website_id: uuid.UUID,
    body: LinkRequest,
    db: AsyncSession = Depends(get_session),
    services: HubServices = Depends(get_services),
) -> Response:
    await services.links.link_website_to_organisation(
        db, website_id, body.target_id, body.target_name
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{website_id}/organisation", status_code=status.HTTP_204_NO_CONTENT)
async def unlink_organisation(
    website_id: uuid.UUID,
    db: AsyncSession = Depends(get_session),
    services: HubServices = Depends(get_services),
) -> Response:
    await services.links.unlink_website_from_organisation(db, website_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


add_crud_routes(router, "websites", WebsiteCreate, WebsiteUpdate, WebsiteRead)
