"""Utility helpers for parsing ledger and pie cells."""
from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Optional

from dateutil import parser


def clean_cell(value: str | None) -> str:
    """Return a stripped cell value, treating missing cells as empty text."""

    if value is None:
        return ""
    return value.strip()


def parse_float(value: str | None) -> Optional[float]:
    """Parse a numeric cell, returning ``None`` when it is not a finite number."""

    cleaned = clean_cell(value)
    if not cleaned:
        return None
    try:
        number = float(cleaned)
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return number


def parse_timestamp(value: str | None) -> Optional[datetime]:
    """Parse a broker timestamp using dateutil."""

    cleaned = clean_cell(value)
    if not cleaned:
        return None
    try:
        return parser.parse(cleaned)
    except (ValueError, OverflowError):
        return None


def sort_key(timestamp: datetime | None) -> float:
    """Order key for timestamps; aware values compare on their UTC instant."""

    if timestamp is None:
        return float("-inf")
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)
    return timestamp.timestamp()


__all__ = ["clean_cell", "parse_float", "parse_timestamp", "sort_key"]
