"""Export every buy and sell of a ledger in ``Symbol, Date, Quantity, Price`` form."""
from __future__ import annotations

import logging
from collections.abc import Iterable

from .converters import format_date
from .models import Action, FilteredTransaction, RawTransaction

LOGGER = logging.getLogger(__name__)


def normalize_ledger(transactions: Iterable[RawTransaction]) -> list[FilteredTransaction]:
    """Keep buys and sells in source order, negating sell quantities.

    Prices are copied as exported; no currency conversion happens here.
    """

    records: list[FilteredTransaction] = []
    for tx in transactions:
        if tx.action not in (Action.BUY, Action.SELL):
            continue
        if tx.share_count is None or tx.price_per_share is None or tx.timestamp is None:
            LOGGER.debug("Skipping malformed %s row for %s", tx.action_label, tx.security_id)
            continue
        quantity = -tx.share_count if tx.action is Action.SELL else tx.share_count
        records.append(
            FilteredTransaction(
                symbol=tx.security_id,
                date=format_date(tx.timestamp),
                quantity=quantity,
                price=tx.price_per_share,
            )
        )
    return records


__all__ = ["normalize_ledger"]
