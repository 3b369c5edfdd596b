"""Tests for quote number generation.

Covers:
- Sequence increments and zero padding
- Start of a new year
- Fallback on database errors and unparseable stored numbers
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from sqlalchemy.exc import OperationalError

from hub.quotes.numbering import fallback_number, generate_quote_number, next_in_sequence

# ── Helpers ──────────────────────────────────────────────────────────


def _db_with_latest(number: str | None) -> AsyncMock:
    db = AsyncMock()
    result = MagicMock()
    result.scalar_one_or_none.return_value = number
    db.execute.return_value = result
    return db


# ── Pure sequence logic ──────────────────────────────────────────────


class TestNextInSequence:
    def test_first_of_year(self):
        assert next_in_sequence(None, 2026) == "Q-2026-0001"

    def test_increment(self):
        assert next_in_sequence("Q-2026-0042", 2026) == "Q-2026-0043"

    def test_padding_overflow(self):
        assert next_in_sequence("Q-2026-9999", 2026) == "Q-2026-10000"

    def test_custom_prefix(self):
        assert next_in_sequence("INV-2026-0009", 2026, prefix="INV") == "INV-2026-0010"

    def test_unparseable_raises(self):
        with pytest.raises(ValueError):
            next_in_sequence("Q-2026-abc", 2026)


class TestFallbackNumber:
    def test_last_four_millis(self):
        with patch("hub.quotes.numbering.time.time", return_value=1700000001.25):
            assert fallback_number(2026) == "Q-2026-1250"


# ── Database-backed generation ───────────────────────────────────────


class TestGenerateQuoteNumber:
    @pytest.mark.asyncio()
    async def test_next_after_latest(self):
        db = _db_with_latest("Q-2026-0007")
        assert await generate_quote_number(db, year=2026) == "Q-2026-0008"

    @pytest.mark.asyncio()
    async def test_next_after_latest_2024(self):
        db = _db_with_latest("Q-2024-0037")
        assert await generate_quote_number(db, year=2024) == "Q-2024-0038"

    @pytest.mark.asyncio()
    async def test_empty_year(self):
        db = _db_with_latest(None)
        assert await generate_quote_number(db, year=2027) == "Q-2027-0001"

    @pytest.mark.asyncio()
    async def test_db_error_uses_fallback(self):
        db = AsyncMock()
        db.execute.side_effect = OperationalError("SELECT", {}, Exception("down"))
        with patch("hub.quotes.numbering.time.time", return_value=1700000005.75):
            assert await generate_quote_number(db, year=2026) == "Q-2026-5750"

    @pytest.mark.asyncio()
    async def test_bad_stored_number_uses_fallback(self):
        db = _db_with_latest("Q-2026-oops")
        with patch("hub.quotes.numbering.time.time", return_value=1700000009.5):
            assert await generate_quote_number(db, year=2026) == "Q-2026-9500"
