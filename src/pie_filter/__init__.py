"""Filter broker ledgers down to a pie's target invested values."""
from __future__ import annotations

from .allocation import filter_transactions
from .models import Action, AllocationResult, FilteredTransaction, RawTransaction
from .normalizer import normalize_ledger

__all__ = [
    "Action",
    "AllocationResult",
    "FilteredTransaction",
    "RawTransaction",
    "filter_transactions",
    "normalize_ledger",
]
