"""Shared fixtures for writing ledger and pie exports to disk."""

from __future__ import annotations

import csv
from collections.abc import Callable, Iterable, Mapping
from pathlib import Path

import pytest

LEDGER_HEADER = [
    "Action",
    "Time",
    "ISIN",
    "Ticker",
    "Name",
    "No. of shares",
    "Price / share",
    "Currency (Price / share)",
    "Exchange rate",
    "Total",
]


def ledger_row(
    ticker: str,
    time: str,
    shares: str | float,
    price: str | float,
    *,
    action: str = "Market buy",
    currency: str = "GBP",
    rate: str | float = "1.00",
) -> dict[str, str]:
    return {
        "Action": action,
        "Time": time,
        "ISIN": "",
        "Ticker": ticker,
        "Name": f"{ticker} Inc",
        "No. of shares": str(shares),
        "Price / share": str(price),
        "Currency (Price / share)": currency,
        "Exchange rate": str(rate),
        "Total": "",
    }


def _write_csv(path: Path, header: list[str], rows: Iterable[Mapping[str, str]]) -> Path:
    with path.open("w", encoding="utf-8", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=header)
        writer.writeheader()
        for row in rows:
            writer.writerow(row)
    return path


@pytest.fixture
def write_ledger(tmp_path: Path) -> Callable[..., Path]:
    def _write(rows: Iterable[Mapping[str, str]], name: str = "all_data.csv") -> Path:
        return _write_csv(tmp_path / name, LEDGER_HEADER, rows)

    return _write


@pytest.fixture
def write_pie(tmp_path: Path) -> Callable[..., Path]:
    def _write(
        rows: Iterable[Mapping[str, str]],
        name: str = "pie.csv",
        value_column: str = "Invested value",
    ) -> Path:
        return _write_csv(tmp_path / name, ["Slice", "Name", value_column], rows)

    return _write
