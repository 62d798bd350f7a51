"""Cap ledger activity per security at a target invested value.

Transactions are visited most recent first. Each security accumulates the
base-currency value of its visited rows; a row that would push the total past
the target is cut down to the exact remainder, and the security is then closed
for the rest of the pass so older rows are never considered.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from .converters import DEFAULT_BASE_CURRENCY, convert_to_base_currency, format_date
from .ingest.utils import sort_key
from .models import AllocationResult, FilteredTransaction, RawTransaction

LOGGER = logging.getLogger(__name__)


def sort_most_recent_first(transactions: Iterable[RawTransaction]) -> list[RawTransaction]:
    """Return transactions newest first; undated rows go last in source order."""

    return sorted(transactions, key=lambda tx: sort_key(tx.timestamp), reverse=True)


class AllocationState:
    """Running totals for a single filter pass.

    The caller's targets are read but never modified; exhausted securities are
    tracked here instead.
    """

    def __init__(self, targets: Mapping[str, float]) -> None:
        self.targets = targets
        self.running: dict[str, float] = {}
        self.exhausted: set[str] = set()

    def is_open(self, security_id: str) -> bool:
        return security_id in self.targets and security_id not in self.exhausted

    def consume(self, tx: RawTransaction, price: float) -> FilteredTransaction | None:
        """Apply one row, returning the row to emit (possibly partial) or ``None``."""

        security_id = tx.security_id
        target = self.targets[security_id]
        current = self.running.get(security_id, 0.0)
        new_total = current + tx.share_count * price

        emitted: FilteredTransaction | None = None
        if new_total <= target:
            emitted = self._emit(tx, tx.share_count, price)
            self.running[security_id] = new_total
        elif current < target:
            partial_quantity = (target - current) / price
            LOGGER.debug(
                "Partially including %s on %s: %s of %s shares",
                security_id,
                tx.raw_time,
                partial_quantity,
                tx.share_count,
            )
            emitted = self._emit(tx, partial_quantity, price)
            self.running[security_id] = target
        else:
            self.running.setdefault(security_id, current)

        if self.running[security_id] >= target:
            LOGGER.debug("Target of %s reached for %s", target, security_id)
            self.exhausted.add(security_id)
        return emitted

    @staticmethod
    def _emit(tx: RawTransaction, quantity: float, price: float) -> FilteredTransaction:
        return FilteredTransaction(
            symbol=tx.security_id,
            date=format_date(tx.timestamp),
            quantity=quantity,
            price=price,
        )


def filter_transactions(
    transactions: Iterable[RawTransaction],
    targets: Mapping[str, float],
    *,
    base_currency: str = DEFAULT_BASE_CURRENCY,
) -> AllocationResult:
    """Select the most recent transactions whose value fits each target.

    Rows for securities without a target, rows with unparseable share counts,
    prices or timestamps, and rows for securities whose target is already met
    are skipped silently. Output preserves the newest-first visit order.
    """

    state = AllocationState(targets)
    emitted: list[FilteredTransaction] = []
    skipped = 0

    for tx in sort_most_recent_first(transactions):
        if not state.is_open(tx.security_id):
            continue
        if tx.share_count is None or tx.price_per_share is None or tx.timestamp is None:
            skipped += 1
            LOGGER.debug("Skipping malformed row for %s at %r", tx.security_id, tx.raw_time)
            continue

        price = convert_to_base_currency(
            tx.price_per_share, tx.price_currency, tx.exchange_rate, base_currency
        )
        row = state.consume(tx, price)
        if row is not None:
            emitted.append(row)

    if skipped:
        LOGGER.info("Skipped %d malformed ledger rows", skipped)
    LOGGER.info(
        "Filtered %d rows across %d securities (%d targets met)",
        len(emitted),
        len(state.running),
        len(state.exhausted),
    )
    return AllocationResult(
        transactions=emitted,
        running_totals=dict(state.running),
        exhausted=frozenset(state.exhausted),
        total_target=sum(targets.values()),
        remaining_target=sum(
            value for security_id, value in targets.items() if security_id not in state.exhausted
        ),
    )


__all__ = ["AllocationState", "filter_transactions", "sort_most_recent_first"]
