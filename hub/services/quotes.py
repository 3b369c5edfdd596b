"""Quote service — CRUD, numbering, totals, status changes and rendering.

Totals are always recomputed here from the submitted items; values sent by
the form for amount, subtotal, tax or total are never trusted.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Mapping
from decimal import Decimal
from typing import Any, ClassVar

from pydantic import BaseModel
from pydantic import ValidationError as SchemaError
from sqlalchemy import update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from hub.config import QuoteSettings
from hub.models.enums import QuoteStatus, SortDirection
from hub.models.quote import Quote
from hub.quotes.numbering import generate_quote_number
from hub.quotes.render import render_quote_html
from hub.quotes.totals import QuoteTotals, build_items, calculate_quote_totals
from hub.schemas.common import Filter
from hub.schemas.quote import QuoteCreate, QuoteItemIn, QuoteUpdate
from hub.services.base import EntityService
from hub.services.errors import ConflictError, ValidationError

logger = logging.getLogger(__name__)


def _validate(schema: type[BaseModel], data: Mapping[str, Any]) -> Any:
    """Parse a raw mapping, reporting schema failures as ValidationError."""
    if isinstance(data, schema):
        return data
    try:
        return schema.model_validate(data)
    except SchemaError as exc:
        first = exc.errors()[0]
        field = ".".join(str(part) for part in first["loc"])
        msg = f"{field}: {first['msg']}" if field else first["msg"]
        raise ValidationError(msg) from exc


class QuoteService(EntityService[Quote]):
    """Manages quotes in the ``quotes`` table."""

    model = Quote
    entity_name = "quote"
    default_sort_field = "created_at"
    default_sort_direction = SortDirection.DESC
    search_fields: ClassVar[tuple[str, ...]] = ("subject", "quote_number")

    def __init__(self, quote_settings: QuoteSettings | None = None) -> None:
        self._settings = quote_settings or QuoteSettings()

    @property
    def tax_rate(self) -> Decimal:
        return self._settings.tax_rate

    # ── Pricing ──────────────────────────────────────────────────────

    def price_items(self, raw_items: list[QuoteItemIn]) -> tuple[list[dict[str, Any]], QuoteTotals]:
        """Normalise items and compute totals. Items come back JSON-ready."""
        items = build_items(raw_items)
        totals = calculate_quote_totals(
            items, tax_rate=self._settings.tax_rate, round_tax=self._settings.round_tax
        )
        return [item.model_dump(mode="json") for item in items], totals

    # ── CRUD ─────────────────────────────────────────────────────────

    async def create(self, db: AsyncSession, data: QuoteCreate | Mapping[str, Any]) -> uuid.UUID:  # type: ignore[override]
        """Number, price and insert a quote.

        The insert runs inside a SAVEPOINT so a quote number lost to a
        concurrent create can be regenerated without aborting the caller's
        transaction.
        """
        payload: QuoteCreate = _validate(QuoteCreate, data)
        items, totals = self.price_items(payload.items)
        values = payload.model_dump(exclude={"items"})
        values["status"] = payload.status.value

        attempts = max(1, self._settings.number_attempts)
        for attempt in range(1, attempts + 1):
            quote_number = await generate_quote_number(db, prefix=self._settings.number_prefix)
            quote = Quote(
                **values,
                quote_number=quote_number,
                items=items,
                subtotal=totals.subtotal,
                tax=totals.tax,
                total=totals.total,
            )
            try:
                async with db.begin_nested():
                    db.add(quote)
                    await db.flush()
            except IntegrityError:
                logger.warning(
                    "Quote number %s taken (attempt %d/%d)", quote_number, attempt, attempts
                )
                continue
            except SQLAlchemyError as exc:
                raise self._fail("create", exc) from exc

            logger.info(
                "Quote created: id=%s number=%s total=%s", quote.id, quote_number, totals.total
            )
            return quote.id

        msg = f"Could not allocate a unique quote number after {attempts} attempts"
        raise ConflictError(msg)

    async def prepare_update(
        self, db: AsyncSession, record_id: uuid.UUID, data: Mapping[str, Any]
    ) -> dict[str, Any]:
        """Re-price when items change; check dates against the stored quote."""
        payload: QuoteUpdate = _validate(QuoteUpdate, data)
        values = payload.model_dump(exclude_unset=True, exclude={"items"})
        if "status" in values:
            values["status"] = QuoteStatus(values["status"]).value

        if payload.items is not None:
            items, totals = self.price_items(payload.items)
            values.update(
                items=items, subtotal=totals.subtotal, tax=totals.tax, total=totals.total
            )

        if ("quote_date" in values) != ("expiry_date" in values):
            current = await self.get_or_raise(db, record_id)
            quote_date = values.get("quote_date", current.quote_date)
            expiry_date = values.get("expiry_date", current.expiry_date)
            if expiry_date <= quote_date:
                msg = "Expiry date must be after quote date"
                raise ValidationError(msg)
        return values

    async def update_status(
        self, db: AsyncSession, quote_id: uuid.UUID, status: QuoteStatus
    ) -> None:
        """Set any status; no transition graph is enforced."""
        await self.update(db, quote_id, {"status": QuoteStatus(status)})

    async def send(self, db: AsyncSession, quote_id: uuid.UUID) -> None:
        """Mark the quote as sent. Email delivery is handled elsewhere."""
        await self.update_status(db, quote_id, QuoteStatus.SENT)
        logger.info("Quote sent: id=%s", quote_id)

    async def generate_pdf(self, db: AsyncSession, quote_id: uuid.UUID) -> str:
        """URL the PDF renderer serves the quote from."""
        await self.get_or_raise(db, quote_id)
        return f"/quotes/{quote_id}/pdf"

    async def render_html(self, db: AsyncSession, quote_id: uuid.UUID) -> str:
        """Render the quote, store it on ``quote_html`` and return it."""
        quote = await self.get_or_raise(db, quote_id)
        html = render_quote_html(quote, tax_rate=self._settings.tax_rate)
        try:
            await db.execute(update(Quote).where(Quote.id == quote_id).values(quote_html=html))
        except SQLAlchemyError as exc:
            raise self._fail("render", exc) from exc
        return html

    # ── Lookups by link ──────────────────────────────────────────────

    async def list_by_organisation(self, db: AsyncSession, organisation_id: uuid.UUID) -> list[Quote]:
        return await self.list(db, [Filter(field="organisation_id", value=organisation_id)])

    async def list_by_contact(self, db: AsyncSession, contact_id: uuid.UUID) -> list[Quote]:
        return await self.list(db, [Filter(field="contact_id", value=contact_id)])

    async def list_by_lead(self, db: AsyncSession, lead_id: uuid.UUID) -> list[Quote]:
        return await self.list(db, [Filter(field="lead_id", value=lead_id)])

