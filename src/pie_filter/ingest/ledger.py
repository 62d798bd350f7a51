"""Reader for broker-exported transaction ledgers."""
from __future__ import annotations

import csv
import logging
from collections.abc import Iterable, Iterator, Mapping
from os import PathLike
from pathlib import Path

from ..models import DEFAULT_BUY_ACTIONS, DEFAULT_SELL_ACTIONS, Action, RawTransaction
from .utils import clean_cell, parse_float, parse_timestamp

LOGGER = logging.getLogger(__name__)

TICKER = "Ticker"
TIME = "Time"
ACTION = "Action"
SHARES = "No. of shares"
PRICE = "Price / share"
CURRENCY = "Currency (Price / share)"
EXCHANGE_RATE = "Exchange rate"

LEDGER_COLUMNS = (TICKER, TIME, ACTION, SHARES, PRICE, CURRENCY, EXCHANGE_RATE)


def to_transactions(
    rows: Iterable[Mapping[str, str]],
    buy_actions: Iterable[str] = DEFAULT_BUY_ACTIONS,
    sell_actions: Iterable[str] = DEFAULT_SELL_ACTIONS,
) -> Iterator[RawTransaction]:
    """Convert CSV ledger rows into :class:`RawTransaction` records.

    Unparseable numbers and timestamps are kept as ``None`` rather than raising,
    so one bad row never aborts ingestion.
    """

    buy_actions = frozenset(buy_actions)
    sell_actions = frozenset(sell_actions)
    for row in rows:
        label = clean_cell(row.get(ACTION))
        raw_time = clean_cell(row.get(TIME))
        yield RawTransaction(
            security_id=clean_cell(row.get(TICKER)),
            raw_time=raw_time,
            timestamp=parse_timestamp(raw_time),
            action=Action.classify(label, buy_actions, sell_actions),
            action_label=label,
            share_count=parse_float(row.get(SHARES)),
            price_per_share=parse_float(row.get(PRICE)),
            price_currency=clean_cell(row.get(CURRENCY)),
            exchange_rate=parse_float(row.get(EXCHANGE_RATE)),
        )


def read_ledger(
    path: str | PathLike[str],
    *,
    buy_actions: Iterable[str] = DEFAULT_BUY_ACTIONS,
    sell_actions: Iterable[str] = DEFAULT_SELL_ACTIONS,
) -> list[RawTransaction]:
    """Read every ledger row from ``path`` in source order."""

    p = Path(path)
    LOGGER.debug("Reading ledger from %s", p)
    with p.open(encoding="utf-8-sig", newline="") as f:
        transactions = list(to_transactions(csv.DictReader(f), buy_actions, sell_actions))
    LOGGER.info("Read %d ledger rows from %s", len(transactions), p)
    return transactions


__all__ = ["LEDGER_COLUMNS", "read_ledger", "to_transactions"]
