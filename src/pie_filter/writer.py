"""CSV output for filtered and normalized transactions."""
from __future__ import annotations

import csv
import logging
import threading
import time
from collections.abc import Iterable
from datetime import datetime, timezone
from os import PathLike
from pathlib import Path
from typing import IO, Literal

from .ingest.utils import clean_cell, parse_float
from .models import OUTPUT_COLUMNS, FilteredTransaction

LOGGER = logging.getLogger(__name__)

NameStyle = Literal["filtered", "generated"]

MAX_CREATE_ATTEMPTS = 100


class _StampClock:
    """Hands out strictly increasing millisecond stamps within the process."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._last = 0

    def next(self) -> int:
        with self._lock:
            stamp = max(int(time.time() * 1000), self._last + 1)
            self._last = stamp
            return stamp


_CLOCK = _StampClock()


def _file_name(stem: str, stamp: int, style: NameStyle) -> str:
    if style == "filtered":
        return f"{stem}_filtered_{stamp}.csv"
    moment = datetime.fromtimestamp(stamp / 1000, tz=timezone.utc)
    return f"{stem}_{moment:%Y-%m-%d}_{moment:%H-%M-%S}_{stamp % 1000:03d}.csv"


def unique_output_path(
    directory: str | PathLike[str],
    stem: str,
    *,
    style: NameStyle = "filtered",
) -> Path:
    """Return a fresh timestamp-suffixed path in ``directory``.

    The file is created empty (exclusive create) before returning, so a name is
    never handed out twice even across processes sharing the directory.
    """

    folder = Path(directory)
    folder.mkdir(parents=True, exist_ok=True)
    for _ in range(MAX_CREATE_ATTEMPTS):
        candidate = folder / _file_name(stem, _CLOCK.next(), style)
        try:
            with candidate.open("x", encoding="utf-8"):
                pass
        except FileExistsError:
            LOGGER.debug("Output file %s already exists, retrying", candidate)
            continue
        return candidate
    raise FileExistsError(f"Could not allocate a unique output file in {folder}")


def format_number(value: float) -> str:
    """Render integral floats without a trailing ``.0``."""

    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def _write(f: IO[str], records: Iterable[FilteredTransaction]) -> int:
    writer = csv.writer(f)
    writer.writerow(OUTPUT_COLUMNS)
    count = 0
    for record in records:
        writer.writerow(
            [record.symbol, record.date, format_number(record.quantity), format_number(record.price)]
        )
        count += 1
    return count


def write_records(path: str | PathLike[str], records: Iterable[FilteredTransaction]) -> Path:
    """Write ``records`` to ``path`` with the fixed output header."""

    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("w", encoding="utf-8", newline="") as f:
        count = _write(f, records)
    LOGGER.info("Wrote %d rows to %s", count, p)
    return p


def read_records(path: str | PathLike[str]) -> list[FilteredTransaction]:
    """Read a file produced by :func:`write_records`."""

    p = Path(path)
    records: list[FilteredTransaction] = []
    with p.open(encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        for row in reader:
            quantity = parse_float(row.get("Quantity"))
            price = parse_float(row.get("Price"))
            if quantity is None or price is None:
                raise csv.Error(f"Malformed output row in {p}: {row!r}")
            records.append(
                FilteredTransaction(
                    symbol=clean_cell(row.get("Symbol")),
                    date=clean_cell(row.get("Date")),
                    quantity=quantity,
                    price=price,
                )
            )
    return records


__all__ = [
    "format_number",
    "read_records",
    "unique_output_path",
    "write_records",
]
