"""Sequential quote numbers in the form ``Q-YYYY-NNNN``.

The next number is the highest existing number of the year plus one. Reading
the current maximum and inserting the new quote are separate statements, so
two concurrent creates can compute the same number; the unique index on
``quotes.quote_number`` rejects the loser and QuoteService retries.
"""

from __future__ import annotations

import logging
import time
from datetime import date

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from hub.models.quote import Quote

logger = logging.getLogger(__name__)

SEQUENCE_WIDTH = 4


def year_prefix(year: int, prefix: str = "Q") -> str:
    return f"{prefix}-{year}-"


def next_in_sequence(last_number: str | None, year: int, prefix: str = "Q") -> str:
    """Increment the trailing counter of ``last_number``, or start at 0001.

    Raises:
        ValueError: ``last_number`` has no integer third segment.
    """
    head = year_prefix(year, prefix)
    if last_number is None:
        return f"{head}{1:0{SEQUENCE_WIDTH}d}"
    counter = int(last_number.split("-")[2])
    return f"{head}{counter + 1:0{SEQUENCE_WIDTH}d}"


def fallback_number(year: int, prefix: str = "Q") -> str:
    """Non-sequential suffix taken from the epoch milliseconds."""
    millis = str(int(time.time() * 1000))
    return f"{year_prefix(year, prefix)}{millis[-SEQUENCE_WIDTH:]}"


async def latest_quote_number(db: AsyncSession, year: int, prefix: str = "Q") -> str | None:
    """Highest quote number issued in ``year``, if any."""
    result = await db.execute(
        select(Quote.quote_number)
        .where(
            Quote.quote_number >= year_prefix(year, prefix),
            Quote.quote_number < year_prefix(year + 1, prefix),
        )
        .order_by(Quote.quote_number.desc())
        .limit(1)
    )
    return result.scalar_one_or_none()


async def generate_quote_number(
    db: AsyncSession,
    year: int | None = None,
    prefix: str = "Q",
) -> str:
    """Next quote number for ``year`` (default: current year).

    Never raises: a failed read or an unparseable stored number degrades to
    :func:`fallback_number`.
    """
    year = year or date.today().year
    try:
        last = await latest_quote_number(db, year, prefix)
        return next_in_sequence(last, year, prefix)
    except Exception:
        logger.exception("Error generating quote number for %s, using fallback", year)
        return fallback_number(year, prefix)
