"""Domain models representing ledger rows and filter output."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Iterable, Optional

DEFAULT_BUY_ACTIONS = ("Market buy",)
DEFAULT_SELL_ACTIONS = ("Market sell",)

OUTPUT_COLUMNS = ("Symbol", "Date", "Quantity", "Price")


class Action(str, Enum):
    """Normalized ledger action."""

    BUY = "buy"
    SELL = "sell"
    OTHER = "other"

    @classmethod
    def classify(
        cls,
        label: str,
        buy_actions: Iterable[str] = DEFAULT_BUY_ACTIONS,
        sell_actions: Iterable[str] = DEFAULT_SELL_ACTIONS,
    ) -> "Action":
        if label in buy_actions:
            return cls.BUY
        if label in sell_actions:
            return cls.SELL
        return cls.OTHER


@dataclass(frozen=True, slots=True)
class RawTransaction:
    """A single ledger row.

    Numeric and timestamp fields are ``None`` when the exported text could not
    be parsed; such rows are kept so that filtering can decide to skip them.
    """

    security_id: str
    raw_time: str
    timestamp: Optional[datetime]
    action: Action
    action_label: str
    share_count: Optional[float]
    price_per_share: Optional[float]
    price_currency: str
    exchange_rate: Optional[float]


@dataclass(frozen=True, slots=True)
class FilteredTransaction:
    """An output row: ``Symbol, Date, Quantity, Price``."""

    symbol: str
    date: str  # MM/DD/YYYY
    quantity: float
    price: float

    @property
    def value(self) -> float:
        return self.quantity * self.price


@dataclass(frozen=True, slots=True)
class AllocationResult:
    """Outcome of one allocation filter pass."""

    transactions: list[FilteredTransaction]
    running_totals: dict[str, float] = field(default_factory=dict)
    exhausted: frozenset[str] = frozenset()
    total_target: float = 0.0
    remaining_target: float = 0.0


__all__ = [
    "Action",
    "AllocationResult",
    "DEFAULT_BUY_ACTIONS",
    "DEFAULT_SELL_ACTIONS",
    "FilteredTransaction",
    "OUTPUT_COLUMNS",
    "RawTransaction",
]
