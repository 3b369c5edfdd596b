"""Quote routes — CRUD plus status, sending, rendering and links."""
# ruff: noqa: B008

from __future__ import annotations

import uuid
from typing import Any

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import HTMLResponse
from sqlalchemy.ext.asyncio import AsyncSession

from hub.api.crud import add_crud_routes
from hub.api.deps import get_services, get_session
from hub.config import settings
from hub.quotes.totals import QUOTE_STATUS_OPTIONS, default_quote_dates
from hub.schemas.common import LinkRequest
from hub.schemas.quote import (
    QuoteCreate,
    QuoteRead,
    QuoteStatusOption,
    QuoteStatusUpdate,
    QuoteUpdate,
)
from hub.services.container import HubServices

router = APIRouter(prefix="/quotes", tags=["quotes"])

_NO_CONTENT = status.HTTP_204_NO_CONTENT


@router.get("/status-options", response_model=list[QuoteStatusOption])
async def status_options() -> Any:
    return list(QUOTE_STATUS_OPTIONS)


@router.get("/defaults")
async def quote_defaults(services: HubServices = Depends(get_services)) -> dict[str, Any]:
    """Values pre-filled on a new quote form."""
    quote_date, expiry_date = default_quote_dates(
        validity_days=settings.quotes.default_validity_days
    )
    return {
        "quote_date": quote_date.isoformat(),
        "expiry_date": expiry_date.isoformat(),
        "status": QUOTE_STATUS_OPTIONS[0].value.value,
        "tax_rate": str(services.quotes.tax_rate),
        "currency": settings.quotes.currency,
    }


@router.put("/{quote_id}/status", status_code=_NO_CONTENT)
async def update_quote_status(
    quote_id: uuid.UUID,
    body: QuoteStatusUpdate,
    db: AsyncSession = Depends(get_session),
    services: HubServices = Depends(get_services),
) -> Response:
    await services.quotes.update_status(db, quote_id, body.status)
    return Response(status_code=_NO_CONTENT)


@router.post("/{quote_id}/send", status_code=_NO_CONTENT)
async def send_quote(
    quote_id: uuid.UUID,
    db: AsyncSession = Depends(get_session),
    services: HubServices = Depends(get_services),
) -> Response:
    await services.quotes.send(db, quote_id)
    return Response(status_code=_NO_CONTENT)


@router.get("/{quote_id}/pdf")
async def quote_pdf_url(
    quote_id: uuid.UUID,
    db: AsyncSession = Depends(get_session),
    services: HubServices = Depends(get_services),
) -> dict[str, str]:
    return {"url": await services.quotes.generate_pdf(db, quote_id)}


@router.post("/{quote_id}/render", response_class=HTMLResponse)
async def render_quote(
    quote_id: uuid.UUID,
    db: AsyncSession = Depends(get_session),
    services: HubServices = Depends(get_services),
) -> HTMLResponse:
    return HTMLResponse(await services.quotes.render_html(db, quote_id))


# ── Links ────────────────────────────────────────────────────────────


@router.put("/{quote_id}/organisation", status_code=_NO_CONTENT)
async def link_organisation(
    quote_id: uuid.UUID,
    body: LinkRequest,
    db: AsyncSession = Depends(get_session),
    services: HubServices = Depends(get_services),
) -> Response:
    await services.links.link_quote_to_organisation(db, quote_id, body.target_id, body.target_name)
    return Response(status_code=_NO_CONTENT)


@router.delete("/{quote_id}/organisation", status_code=_NO_CONTENT)
async def unlink_organisation(
    quote_id: uuid.UUID,
    db: AsyncSession = Depends(get_session),
    services: HubServices = Depends(get_services),
) -> Response:
    await services.links.unlink_quote_from_organisation(db, quote_id)
    return Response(status_code=_NO_CONTENT)


@router.put("/{quote_id}/contact", status_code=_NO_CONTENT)
async def link_contact(
    quote_id: uuid.UUID,
    body: LinkRequest,
    db: AsyncSession = Depends(get_session),
    services: HubServices = Depends(get_services),
) -> Response:
    await services.links.link_quote_to_contact(db, quote_id, body.target_id, body.target_name)
    return Response(status_code=_NO_CONTENT)


@router.delete("/{quote_id}/contact", status_code=_NO_CONTENT)
async def unlink_contact(
    quote_id: uuid.UUID,
    db: AsyncSession = Depends(get_session),
    services: HubServices = Depends(get_services),
) -> Response:
    await services.links.unlink_quote_from_contact(db, quote_id)
    return Response(status_code=_NO_CONTENT)


@router.put("/{quote_id}/lead", status_code=_NO_CONTENT)
async def link_lead(
    quote_id: uuid.UUID,
    body: LinkRequest,
    db: AsyncSession = Depends(get_session),
    services: HubServices = Depends(get_services),
) -> Response:
    await services.links.link_quote_to_lead(db, quote_id, body.target_id, body.target_name)
    return Response(status_code=_NO_CONTENT)


@router.delete("/{quote_id}/lead", status_code=_NO_CONTENT)
async def unlink_lead(
    quote_id: uuid.UUID,
    db: AsyncSession = Depends(get_session),
    services: HubServices = Depends(get_services),
) -> Response:
    await services.links.unlink_quote_from_lead(db, quote_id)
    return Response(status_code=_NO_CONTENT)


add_crud_routes(router, "quotes", QuoteCreate, QuoteUpdate, QuoteRead)
