"""Jinja2 filters for Australian locale formatting.

Registered on the quote rendering environment in render.py.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal


def format_currency(value: Decimal | float | int | None, symbol: str = "$") -> str:
    """Format as en-AU currency: 1234.5 -> "$1,234.50"."""
    if value is None:
        return "-"
    d = Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if d < 0 else ""
    return f"{sign}{symbol}{abs(d):,.2f}"


def format_date(value: date | datetime | str | None) -> str:
    """Format as DD/MM/YYYY. ISO strings are accepted."""
    if value is None or value == "":
        return "-"
    if isinstance(value, str):
        value = date.fromisoformat(value[:10])
    return value.strftime("%d/%m/%Y")


def format_number(value: Decimal | float | int | None) -> str:
    """Thousands separators, trailing zeros dropped: 1500.50 -> "1,500.5"."""
    if value is None:
        return "-"
    d = Decimal(str(value)).normalize()
    if d == d.to_integral():
        return f"{int(d):,}"
    return f"{d:,f}"


def format_percentage(value: float | Decimal | None, digits: int = 2) -> str:
    """Format a ratio as a percentage: 0.1 -> "10.00%"."""
    if value is None:
        return "-"
    return f"{float(value) * 100:.{digits}f}%"
