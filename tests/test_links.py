"""Tests for record linking.

Covers:
- Link writes id + display name; unlink clears both
- Missing owning record → NotFoundError
- Lead contact id list maintenance
"""

from __future__ import annotations

import uuid
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import OperationalError

from hub.services.errors import NotFoundError, RemoteFailureError
from hub.services.links import LinkService

# ── Helpers ──────────────────────────────────────────────────────────


def _db(rowcount: int = 1) -> AsyncMock:
    db = AsyncMock()
    result = MagicMock()
    result.rowcount = rowcount
    db.execute.return_value = result
    return db


def _statement(db: AsyncMock):
    return db.execute.await_args.args[0]


# ── Quotes ───────────────────────────────────────────────────────────


class TestQuoteLinks:
    @pytest.mark.asyncio()
    async def test_link_organisation(self):
        org_id = uuid.uuid4()
        db = _db()
        await LinkService().link_quote_to_organisation(db, uuid.uuid4(), org_id, "Acme")
        params = _statement(db).compile().params
        assert params["organisation_id"] == org_id
        assert params["organisation_name"] == "Acme"

    @pytest.mark.asyncio()
    async def test_unlink_organisation_clears_both(self):
        db = _db()
        await LinkService().unlink_quote_from_organisation(db, uuid.uuid4())
        params = _statement(db).compile().params
        assert params["organisation_id"] is None
        assert params["organisation_name"] is None

    @pytest.mark.asyncio()
    async def test_link_contact(self):
        db = _db()
        await LinkService().link_quote_to_contact(db, uuid.uuid4(), uuid.uuid4(), "Ada Lovelace")
        assert _statement(db).compile().params["contact_name"] == "Ada Lovelace"

    @pytest.mark.asyncio()
    async def test_link_lead(self):
        db = _db()
        await LinkService().link_quote_to_lead(db, uuid.uuid4(), uuid.uuid4(), "Sam Lee")
        assert _statement(db).compile().params["lead_name"] == "Sam Lee"

    @pytest.mark.asyncio()
    async def test_missing_quote(self):
        db = _db(rowcount=0)
        with pytest.raises(NotFoundError, match="quote"):
            await LinkService().unlink_quote_from_lead(db, uuid.uuid4())

    @pytest.mark.asyncio()
    async def test_database_error(self):
        db = AsyncMock()
        db.execute.side_effect = OperationalError("UPDATE", {}, Exception("down"))
        with pytest.raises(RemoteFailureError):
            await LinkService().unlink_quote_from_contact(db, uuid.uuid4())


# ── Websites / leads ─────────────────────────────────────────────────


class TestWebsiteAndLeadLinks:
    @pytest.mark.asyncio()
    async def test_link_website(self):
        db = _db()
        await LinkService().link_website_to_organisation(db, uuid.uuid4(), uuid.uuid4(), "Acme")
        sql = str(_statement(db).compile(dialect=postgresql.dialect()))
        assert sql.startswith("UPDATE websites SET")

    @pytest.mark.asyncio()
    async def test_unlink_missing_website(self):
        with pytest.raises(NotFoundError, match="website"):
            await LinkService().unlink_website_from_organisation(_db(rowcount=0), uuid.uuid4())

    @pytest.mark.asyncio()
    async def test_link_lead_to_organisation(self):
        db = _db()
        await LinkService().link_lead_to_organisation(db, uuid.uuid4(), uuid.uuid4(), "Acme")
        sql = str(_statement(db).compile(dialect=postgresql.dialect()))
        assert sql.startswith("UPDATE leads SET")

    @pytest.mark.asyncio()
    async def test_add_contact_to_lead_is_idempotent(self):
        """Remove-then-append keeps a contact id from appearing twice."""
        db = _db()
        await LinkService().add_contact_to_lead(db, uuid.uuid4(), uuid.uuid4())
        sql = str(_statement(db).compile(dialect=postgresql.dialect()))
        assert "array_append(array_remove(leads.contact_ids" in sql

    @pytest.mark.asyncio()
    async def test_remove_contact_from_lead(self):
        contact_id = uuid.uuid4()
        db = _db()
        await LinkService().remove_contact_from_lead(db, uuid.uuid4(), contact_id)
        stmt = _statement(db)
        assert "array_remove(leads.contact_ids" in str(stmt.compile(dialect=postgresql.dialect()))
        assert str(contact_id) in stmt.compile().params.values()
