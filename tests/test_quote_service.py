"""Tests for the quote service.

Covers:
- Create: numbering, server-side pricing, SAVEPOINT retry on number clashes
- Update: re-pricing, date checks against the stored quote
- Status changes, sending, PDF URL and HTML rendering
"""

from __future__ import annotations

import uuid
from datetime import date
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from hub.config import QuoteSettings
from hub.models.enums import QuoteStatus
from hub.models.quote import Quote
from hub.schemas.quote import QuoteCreate
from hub.services.errors import ConflictError, NotFoundError, RemoteFailureError, ValidationError
from hub.services.quotes import QuoteService

# ── Helpers ──────────────────────────────────────────────────────────


def _nested() -> MagicMock:
    """Stand-in for ``AsyncSession.begin_nested()`` that lets errors through."""
    cm = MagicMock()
    cm.__aenter__ = AsyncMock(return_value=None)
    cm.__aexit__ = AsyncMock(return_value=False)
    return cm


def _make_db(record_id: uuid.UUID | None = None) -> AsyncMock:
    db = AsyncMock()
    db.added = []

    def _add(obj: Quote) -> None:
        obj.id = record_id or uuid.uuid4()
        db.added.append(obj)

    db.add = MagicMock(side_effect=_add)
    db.begin_nested = MagicMock(side_effect=lambda: _nested())
    return db


def _payload(**overrides) -> QuoteCreate:
    data = {
        "subject": "Website rebuild",
        "quote_date": date(2026, 3, 1),
        "expiry_date": date(2026, 3, 31),
        "items": [
            {"description": "Design", "quantity": "2", "unit_price": "50.00"},
            {"description": "Hosting", "quantity": "1", "unit_price": "30.05", "amount": "1"},
        ],
    }
    data.update(overrides)
    return QuoteCreate.model_validate(data)


def _integrity_error() -> IntegrityError:
    return IntegrityError("INSERT INTO quotes", {}, Exception("duplicate key quote_number"))


def _rowcount(n: int) -> MagicMock:
    result = MagicMock()
    result.rowcount = n
    return result


# ── Create ───────────────────────────────────────────────────────────


class TestCreateQuote:
    """Test QuoteService.create."""

    @pytest.mark.asyncio()
    async def test_create_numbers_and_prices(self):
        """Number assigned, amounts and totals computed server-side."""
        record_id = uuid.uuid4()
        db = _make_db(record_id)
        service = QuoteService(QuoteSettings())

        with patch(
            "hub.services.quotes.generate_quote_number",
            new_callable=AsyncMock,
            return_value="Q-2026-0001",
        ):
            result = await service.create(db, _payload())

        assert result == record_id
        [quote] = db.added
        assert quote.quote_number == "Q-2026-0001"
        assert quote.status == QuoteStatus.DRAFT.value
        assert [i["amount"] for i in quote.items] == ["100.00", "30.05"]
        assert all(i["item_id"].startswith("item_") for i in quote.items)
        assert quote.subtotal == Decimal("130.05")
        assert quote.tax == Decimal("13.005")
        assert quote.total == Decimal("143.055")
        db.flush.assert_awaited_once()

    @pytest.mark.asyncio()
    async def test_create_accepts_mapping(self):
        db = _make_db()
        service = QuoteService(QuoteSettings())
        with patch(
            "hub.services.quotes.generate_quote_number",
            new_callable=AsyncMock,
            return_value="Q-2026-0002",
        ):
            await service.create(db, _payload().model_dump())
        assert db.added[0].subject == "Website rebuild"

    @pytest.mark.asyncio()
    async def test_round_tax_setting(self):
        db = _make_db()
        service = QuoteService(QuoteSettings(round_tax=True))
        with patch(
            "hub.services.quotes.generate_quote_number",
            new_callable=AsyncMock,
            return_value="Q-2026-0003",
        ):
            await service.create(db, _payload())
        assert db.added[0].tax == Decimal("13.01")
        assert db.added[0].total == Decimal("143.06")

    @pytest.mark.asyncio()
    async def test_retries_on_number_clash(self):
        """A lost race on quote_number regenerates and retries in a new SAVEPOINT."""
        db = _make_db()
        db.flush.side_effect = [_integrity_error(), None]
        service = QuoteService(QuoteSettings())

        with patch(
            "hub.services.quotes.generate_quote_number",
            new_callable=AsyncMock,
            side_effect=["Q-2026-0004", "Q-2026-0005"],
        ) as mock_gen:
            await service.create(db, _payload())

        assert mock_gen.await_count == 2
        assert [q.quote_number for q in db.added] == ["Q-2026-0004", "Q-2026-0005"]
        assert db.begin_nested.call_count == 2

    @pytest.mark.asyncio()
    async def test_gives_up_after_attempts(self):
        db = _make_db()
        db.flush.side_effect = _integrity_error()
        service = QuoteService(QuoteSettings(number_attempts=2))

        with patch(
            "hub.services.quotes.generate_quote_number",
            new_callable=AsyncMock,
            return_value="Q-2026-0006",
        ):
            with pytest.raises(ConflictError):
                await service.create(db, _payload())
        assert db.flush.await_count == 2

    @pytest.mark.asyncio()
    async def test_database_failure(self):
        db = _make_db()
        db.flush.side_effect = OperationalError("INSERT", {}, Exception("connection lost"))
        service = QuoteService(QuoteSettings())

        with patch(
            "hub.services.quotes.generate_quote_number",
            new_callable=AsyncMock,
            return_value="Q-2026-0007",
        ):
            with pytest.raises(RemoteFailureError) as exc_info:
                await service.create(db, _payload())
        assert isinstance(exc_info.value.__cause__, OperationalError)


# ── Update ───────────────────────────────────────────────────────────


class TestPrepareUpdate:
    """Test QuoteService.prepare_update."""

    @pytest.mark.asyncio()
    async def test_items_reprice(self):
        db = AsyncMock()
        service = QuoteService(QuoteSettings())
        values = await service.prepare_update(
            db, uuid.uuid4(), {"items": [{"description": "Audit", "quantity": 4, "unit_price": "25"}]}
        )
        assert values["subtotal"] == Decimal("100.00")
        assert values["tax"] == Decimal("10.0000")
        assert values["total"] == Decimal("110.0000")
        assert values["items"][0]["amount"] == "100.00"

    @pytest.mark.asyncio()
    async def test_only_given_fields(self):
        db = AsyncMock()
        service = QuoteService(QuoteSettings())
        values = await service.prepare_update(db, uuid.uuid4(), {"notes": "Call first"})
        assert values == {"notes": "Call first"}

    @pytest.mark.asyncio()
    async def test_status_stored_as_value(self):
        db = AsyncMock()
        service = QuoteService(QuoteSettings())
        values = await service.prepare_update(db, uuid.uuid4(), {"status": QuoteStatus.ACCEPTED})
        assert values == {"status": "accepted"}

    @pytest.mark.asyncio()
    async def test_expiry_checked_against_stored_date(self):
        db = AsyncMock()
        db.get.return_value = SimpleNamespace(
            quote_date=date(2026, 3, 10), expiry_date=date(2026, 4, 10)
        )
        service = QuoteService(QuoteSettings())
        with pytest.raises(ValidationError, match="Expiry date must be after quote date"):
            await service.prepare_update(db, uuid.uuid4(), {"expiry_date": date(2026, 3, 1)})

    @pytest.mark.asyncio()
    async def test_quote_date_alone_ok(self):
        db = AsyncMock()
        db.get.return_value = SimpleNamespace(
            quote_date=date(2026, 3, 10), expiry_date=date(2026, 4, 10)
        )
        service = QuoteService(QuoteSettings())
        values = await service.prepare_update(db, uuid.uuid4(), {"quote_date": date(2026, 3, 20)})
        assert values == {"quote_date": date(2026, 3, 20)}

    @pytest.mark.asyncio()
    @pytest.mark.parametrize("field", ["quote_date", "expiry_date"])
    async def test_null_date_rejected(self, field):
        db = AsyncMock()
        db.get.return_value = SimpleNamespace(
            quote_date=date(2026, 3, 10), expiry_date=date(2026, 4, 10)
        )
        service = QuoteService(QuoteSettings())
        with pytest.raises(ValidationError, match="Cannot clear required field"):
            await service.prepare_update(db, uuid.uuid4(), {field: None})
        db.get.assert_not_awaited()

    @pytest.mark.asyncio()
    async def test_null_subject_and_status_rejected(self):
        db = AsyncMock()
        service = QuoteService(QuoteSettings())
        with pytest.raises(ValidationError, match="status, subject"):
            await service.prepare_update(db, uuid.uuid4(), {"subject": None, "status": None})

    @pytest.mark.asyncio()
    async def test_null_notes_allowed(self):
        db = AsyncMock()
        service = QuoteService(QuoteSettings())
        values = await service.prepare_update(db, uuid.uuid4(), {"notes": None})
        assert values == {"notes": None}

    @pytest.mark.asyncio()
    async def test_null_subject_never_written(self):
        db = AsyncMock()
        service = QuoteService(QuoteSettings())
        with pytest.raises(ValidationError):
            await service.update(db, uuid.uuid4(), {"subject": None})
        db.execute.assert_not_awaited()


# ── Status, send, PDF, render ────────────────────────────────────────


class TestQuoteActions:
    @pytest.mark.asyncio()
    async def test_update_status(self):
        db = AsyncMock()
        db.execute.return_value = _rowcount(1)
        service = QuoteService(QuoteSettings())
        await service.update_status(db, uuid.uuid4(), QuoteStatus.REJECTED)
        stmt = db.execute.await_args.args[0]
        assert stmt.compile().params["status"] == "rejected"

    @pytest.mark.asyncio()
    async def test_send_sets_sent(self):
        db = AsyncMock()
        db.execute.return_value = _rowcount(1)
        service = QuoteService(QuoteSettings())
        await service.send(db, uuid.uuid4())
        stmt = db.execute.await_args.args[0]
        assert stmt.compile().params["status"] == "sent"

    @pytest.mark.asyncio()
    async def test_send_missing_quote(self):
        db = AsyncMock()
        db.execute.return_value = _rowcount(0)
        service = QuoteService(QuoteSettings())
        with pytest.raises(NotFoundError):
            await service.send(db, uuid.uuid4())

    @pytest.mark.asyncio()
    async def test_pdf_url(self):
        quote_id = uuid.uuid4()
        db = AsyncMock()
        db.get.return_value = MagicMock()
        service = QuoteService(QuoteSettings())
        assert await service.generate_pdf(db, quote_id) == f"/quotes/{quote_id}/pdf"

    @pytest.mark.asyncio()
    async def test_pdf_missing_quote(self):
        db = AsyncMock()
        db.get.return_value = None
        service = QuoteService(QuoteSettings())
        with pytest.raises(NotFoundError):
            await service.generate_pdf(db, uuid.uuid4())

    @pytest.mark.asyncio()
    async def test_render_stores_html(self):
        quote_id = uuid.uuid4()
        db = AsyncMock()
        db.get.return_value = SimpleNamespace(
            quote_number="Q-2026-0010",
            subject="Logo",
            quote_date=date(2026, 3, 1),
            expiry_date=date(2026, 3, 31),
            status="draft",
            organisation_name="Acme",
            contact_name=None,
            items=[{"description": "Logo", "quantity": "1", "unit_price": "500", "amount": "500.00"}],
            subtotal=Decimal("500"),
            tax=Decimal("50"),
            total=Decimal("550"),
            notes=None,
        )
        service = QuoteService(QuoteSettings())

        html = await service.render_html(db, quote_id)

        assert "Q-2026-0010" in html
        assert "$550.00" in html
        stmt = db.execute.await_args.args[0]
        assert stmt.compile().params["quote_html"] == html
