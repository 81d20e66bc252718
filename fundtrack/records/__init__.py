"""Mini README: Record types, seed data and the in-memory record store.

The ``store`` module owns all mutation (append, delete, category rename);
``models`` defines the records and their persisted field names; ``defaults``
holds the built-in data used when nothing has been saved yet.
"""

from .models import Account, DieselLogEntry, FinancialSummary, Transaction, TransactionType
from .store import CategoryError, RecordStore, StoreSnapshot, TransactionDraft

__all__ = [
    "Account",
    "CategoryError",
    "DieselLogEntry",
    "FinancialSummary",
    "RecordStore",
    "StoreSnapshot",
    "Transaction",
    "TransactionDraft",
    "TransactionType",
]
