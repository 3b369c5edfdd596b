"""Quote line-item and totals arithmetic.

Pure Python, Decimal arithmetic:
- item amount = quantity × unit price, rounded half-up to cents
- subtotal = sum of item amounts
- tax = subtotal × tax rate
- total = subtotal + tax

Only the per-item amount is rounded. Tax and total keep whatever precision
the multiplication produces unless ``round_tax`` is set, so a subtotal of
130.05 yields a tax of 13.005.
"""

from __future__ import annotations

import uuid
from collections.abc import Iterable
from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import NamedTuple

from hub.models.enums import QuoteStatus
from hub.schemas.quote import QuoteItem, QuoteItemIn, QuoteStatusOption

DEFAULT_TAX_RATE = Decimal("0.10")
DEFAULT_VALIDITY_DAYS = 30

_CENT = Decimal("0.01")

QUOTE_STATUS_OPTIONS: tuple[QuoteStatusOption, ...] = tuple(
    QuoteStatusOption(value=status, label=status.value.capitalize()) for status in QuoteStatus
)


class QuoteTotals(NamedTuple):
    subtotal: Decimal
    tax: Decimal
    total: Decimal


def _to_cents(value: Decimal) -> Decimal:
    return value.quantize(_CENT, rounding=ROUND_HALF_UP)


def calculate_item_amount(quantity: Decimal, unit_price: Decimal) -> Decimal:
    """Line amount rounded to 2 decimal places."""
    return _to_cents(Decimal(quantity) * Decimal(unit_price))


def calculate_quote_totals(
    items: Iterable[QuoteItem],
    tax_rate: Decimal = DEFAULT_TAX_RATE,
    round_tax: bool = False,
) -> QuoteTotals:
    """Compute subtotal, tax and total from already-priced items.

    Args:
        items: Line items whose ``amount`` is already computed.
        tax_rate: Fraction applied to the subtotal.
        round_tax: Quantise the tax to cents before adding it to the total.
    """
    subtotal = sum((Decimal(item.amount) for item in items), Decimal("0"))
    tax = subtotal * tax_rate
    if round_tax:
        tax = _to_cents(tax)
    return QuoteTotals(subtotal=subtotal, tax=tax, total=subtotal + tax)


def generate_item_id() -> str:
    return f"item_{uuid.uuid4().hex}"


def build_items(raw_items: Iterable[QuoteItemIn]) -> list[QuoteItem]:
    """Assign missing ids and recompute every amount. Client amounts are ignored."""
    return [
        QuoteItem(
            item_id=raw.item_id or generate_item_id(),
            description=raw.description,
            quantity=raw.quantity,
            unit_price=raw.unit_price,
            amount=calculate_item_amount(raw.quantity, raw.unit_price),
        )
        for raw in raw_items
    ]


def default_quote_dates(
    today: date | None = None,
    validity_days: int = DEFAULT_VALIDITY_DAYS,
) -> tuple[date, date]:
    """Quote date and expiry date pre-filled on a new quote form."""
    start = today or date.today()
    return start, start + timedelta(days=validity_days)
