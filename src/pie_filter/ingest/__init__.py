"""Readers for ledger and pie CSV exports."""
from __future__ import annotations

from .ledger import LEDGER_COLUMNS, read_ledger, to_transactions
from .pie import INVESTED_VALUE_COLUMNS, read_targets, to_targets

__all__ = [
    "INVESTED_VALUE_COLUMNS",
    "LEDGER_COLUMNS",
    "read_ledger",
    "read_targets",
    "to_targets",
    "to_transactions",
]
