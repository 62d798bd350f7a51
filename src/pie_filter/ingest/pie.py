"""Reader for target allocation ("pie") exports."""
from __future__ import annotations

import csv
import logging
from collections.abc import Iterable, Mapping
from os import PathLike
from pathlib import Path

from .utils import clean_cell, parse_float

LOGGER = logging.getLogger(__name__)

SLICE = "Slice"
INVESTED_VALUE_COLUMNS = ("InvestedValue", "Invested value")


def _invested_value(row: Mapping[str, str]) -> str:
    for column in INVESTED_VALUE_COLUMNS:
        value = clean_cell(row.get(column))
        if value:
            return value
    return ""


def to_targets(rows: Iterable[Mapping[str, str]]) -> dict[str, float]:
    """Map each slice to its invested value, skipping rows without a number."""

    targets: dict[str, float] = {}
    for row in rows:
        symbol = clean_cell(row.get(SLICE))
        invested = parse_float(_invested_value(row))
        if invested is None:
            LOGGER.debug("Skipping pie row for %r without a numeric invested value", symbol)
            continue
        targets[symbol] = invested
    return targets


def read_targets(path: str | PathLike[str]) -> dict[str, float]:
    """Read the pie export at ``path`` into ``{security: invested value}``."""

    p = Path(path)
    LOGGER.debug("Reading pie from %s", p)
    with p.open(encoding="utf-8-sig", newline="") as f:
        targets = to_targets(csv.DictReader(f))
    LOGGER.info("Read %d pie targets from %s", len(targets), p)
    return targets


__all__ = ["INVESTED_VALUE_COLUMNS", "read_targets", "to_targets"]
