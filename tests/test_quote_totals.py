"""Tests for quote line-item and totals arithmetic.

Covers:
- Per-item amount rounding (half-up to cents)
- Subtotal / tax / total, with and without tax rounding
- Item normalisation (generated ids, client amounts ignored)
- Default quote dates and status options
- Quote form validation
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pydantic
import pytest

from hub.models.enums import QuoteStatus
from hub.quotes.totals import (
    DEFAULT_TAX_RATE,
    QUOTE_STATUS_OPTIONS,
    build_items,
    calculate_item_amount,
    calculate_quote_totals,
    default_quote_dates,
    generate_item_id,
)
from hub.schemas.quote import QuoteCreate, QuoteItemIn, QuoteUpdate

# ── Helpers ──────────────────────────────────────────────────────────


def _items(*pairs: tuple[str, str]) -> list[QuoteItemIn]:
    return [
        QuoteItemIn(description=f"Line {i}", quantity=Decimal(q), unit_price=Decimal(p))
        for i, (q, p) in enumerate(pairs, start=1)
    ]


# ── Item amounts ─────────────────────────────────────────────────────


class TestItemAmount:
    def test_simple_product(self):
        assert calculate_item_amount(Decimal("2"), Decimal("50.00")) == Decimal("100.00")

    def test_rounds_half_up(self):
        assert calculate_item_amount(Decimal("3"), Decimal("0.335")) == Decimal("1.01")

    def test_rounds_down_below_half(self):
        assert calculate_item_amount(Decimal("1"), Decimal("10.004")) == Decimal("10.00")

    def test_fractional_quantity(self):
        assert calculate_item_amount(Decimal("1.5"), Decimal("80")) == Decimal("120.00")


# ── Totals ───────────────────────────────────────────────────────────


class TestQuoteTotals:
    def test_subtotal_tax_total(self):
        """Tax keeps full precision by default: 130.05 × 10% = 13.005."""
        items = build_items(_items(("2", "50.00"), ("1", "30.05")))
        totals = calculate_quote_totals(items)
        assert totals.subtotal == Decimal("130.05")
        assert totals.tax == Decimal("13.005")
        assert totals.total == Decimal("143.055")

    def test_whole_dollar_quote(self):
        items = build_items(_items(("2", "50"), ("1", "30")))
        totals = calculate_quote_totals(items)
        assert totals.subtotal == Decimal("130.00")
        assert totals.tax == Decimal("13.00")
        assert totals.total == Decimal("143.00")

    def test_round_tax(self):
        items = build_items(_items(("2", "50.00"), ("1", "30.05")))
        totals = calculate_quote_totals(items, round_tax=True)
        assert totals.tax == Decimal("13.01")
        assert totals.total == Decimal("143.06")

    def test_custom_rate(self):
        items = build_items(_items(("1", "200")))
        totals = calculate_quote_totals(items, tax_rate=Decimal("0.15"))
        assert totals.tax == Decimal("30.00")
        assert totals.total == Decimal("230.00")

    def test_no_items(self):
        totals = calculate_quote_totals([])
        assert totals.subtotal == Decimal("0")
        assert totals.tax == Decimal("0")
        assert totals.total == Decimal("0")

    def test_total_is_subtotal_plus_tax(self):
        items = build_items(_items(("7", "13.37"), ("3", "0.99")))
        totals = calculate_quote_totals(items, tax_rate=DEFAULT_TAX_RATE)
        assert totals.total == totals.subtotal + totals.tax


# ── Item normalisation ───────────────────────────────────────────────


class TestBuildItems:
    def test_client_amount_ignored(self):
        raw = QuoteItemIn(
            description="Design", quantity=Decimal("2"), unit_price=Decimal("10"), amount=Decimal("999")
        )
        [item] = build_items([raw])
        assert item.amount == Decimal("20.00")

    def test_missing_id_generated(self):
        [item] = build_items(_items(("1", "1")))
        assert item.item_id.startswith("item_")

    def test_existing_id_kept(self):
        raw = QuoteItemIn(item_id="item_keep", description="X", quantity=1, unit_price=1)
        [item] = build_items([raw])
        assert item.item_id == "item_keep"

    def test_generated_ids_unique(self):
        assert generate_item_id() != generate_item_id()

    def test_blank_description_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            QuoteItemIn(description="   ", quantity=1, unit_price=1)

    def test_zero_quantity_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            QuoteItemIn(description="X", quantity=0, unit_price=1)

    def test_negative_price_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            QuoteItemIn(description="X", quantity=1, unit_price=-1)


# ── Defaults ─────────────────────────────────────────────────────────


class TestDefaults:
    def test_default_dates(self):
        quote_date, expiry_date = default_quote_dates(date(2026, 1, 31))
        assert quote_date == date(2026, 1, 31)
        assert expiry_date == date(2026, 3, 2)

    def test_custom_validity(self):
        _, expiry_date = default_quote_dates(date(2026, 5, 1), validity_days=14)
        assert expiry_date == date(2026, 5, 15)

    def test_status_options(self):
        assert [o.value for o in QUOTE_STATUS_OPTIONS] == list(QuoteStatus)
        assert QUOTE_STATUS_OPTIONS[0].label == "Draft"


# ── Form validation ──────────────────────────────────────────────────


class TestQuoteForm:
    def test_expiry_must_follow_quote_date(self):
        with pytest.raises(pydantic.ValidationError, match="Expiry date must be after quote date"):
            QuoteCreate(subject="Site", quote_date=date(2026, 3, 1), expiry_date=date(2026, 3, 1))

    def test_subject_required(self):
        with pytest.raises(pydantic.ValidationError):
            QuoteCreate(subject="  ", quote_date=date(2026, 3, 1), expiry_date=date(2026, 3, 31))

    def test_defaults_to_draft(self):
        quote = QuoteCreate(subject="Site", quote_date=date(2026, 3, 1), expiry_date=date(2026, 3, 31))
        assert quote.status is QuoteStatus.DRAFT
        assert quote.items == []

    def test_update_checks_dates_only_when_both_given(self):
        QuoteUpdate(expiry_date=date(2020, 1, 1))
        with pytest.raises(pydantic.ValidationError):
            QuoteUpdate(quote_date=date(2026, 3, 2), expiry_date=date(2026, 3, 1))
