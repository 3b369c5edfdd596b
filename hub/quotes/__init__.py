"""Quote core — numbering, totals, rendering."""

from hub.quotes.numbering import generate_quote_number
from hub.quotes.totals import build_items, calculate_item_amount, calculate_quote_totals

__all__ = [
    "generate_quote_number",
    "build_items",
    "calculate_item_amount",
    "calculate_quote_totals",
]
