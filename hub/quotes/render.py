"""Quote HTML rendering with Jinja2.

Produces the ``quote_html`` projection stored on a quote. PDF conversion and
email delivery are handled outside this service.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape

from hub.quotes.formatters import format_currency, format_date, format_number, format_percentage

_template_dir = Path(__file__).parent / "templates"

env = Environment(
    loader=FileSystemLoader(str(_template_dir)),
    autoescape=select_autoescape(["html"]),
    trim_blocks=True,
    lstrip_blocks=True,
)

# Register custom filters
env.filters["currency"] = format_currency
env.filters["date"] = format_date
env.filters["number"] = format_number
env.filters["percentage"] = format_percentage


def render_quote_html(quote: Any, tax_rate: Any = None) -> str:
    """Render a quote (ORM row or QuoteRead) to a standalone HTML document."""
    return env.get_template("quote.html").render(quote=quote, tax_rate=tax_rate)
