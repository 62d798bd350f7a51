"""Date formatting and currency conversion helpers."""
from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from .ingest.utils import parse_timestamp

DEFAULT_BASE_CURRENCY = "GBP"


def format_date(value: datetime | date | str) -> str:
    """Render the calendar date of ``value`` as ``MM/DD/YYYY``.

    Only the date portion is used; time of day and any UTC offset are dropped.
    """

    if isinstance(value, str):
        parsed = parse_timestamp(value)
        if parsed is None:
            raise ValueError(f"Unparseable timestamp: {value!r}")
        value = parsed
    return f"{value.month:02d}/{value.day:02d}/{value.year:04d}"


def convert_to_base_currency(
    price: float,
    currency: str,
    rate: Optional[float],
    base_currency: str = DEFAULT_BASE_CURRENCY,
) -> float:
    """Convert ``price`` into the base currency.

    Prices already in the base currency are returned unchanged. A missing or
    unparseable ``rate`` falls back to the unconverted price.
    """

    if currency == base_currency or rate is None:
        return price
    return price * rate


__all__ = ["DEFAULT_BASE_CURRENCY", "convert_to_base_currency", "format_date"]
