"""Mini README: The single source of truth for ledger records.

Structure:
    * CategoryError - user-facing rejection of a category edit.
    * TransactionDraft - loosely typed transaction fields awaiting validation.
    * StoreSnapshot - immutable copy of the three collections.
    * RecordStore - append/delete of whole records plus category maintenance.

The store is created by the application root and handed to whoever needs it;
there is no module-level instance. Transactions and diesel logs are never
edited in place: corrections are a delete followed by a new entry. The one
bulk rewrite is a category rename, which retags every matching transaction.
Listeners registered with ``subscribe`` run after each successful mutation.
"""

from __future__ import annotations

import threading
import uuid
from dataclasses import dataclass, replace
from datetime import date
from typing import Callable, Iterable, List, Optional, Tuple

from ..ledger.balances import compute_financial_summary
from ..logging_utils import get_logger
from .defaults import default_categories, default_diesel_logs, default_transactions
from .models import (
    Account,
    DieselLogEntry,
    FinancialSummary,
    Transaction,
    TransactionType,
    parse_amount,
    parse_date,
)

LOGGER = get_logger(__name__)

Listener = Callable[["RecordStore"], None]


class CategoryError(ValueError):
    """Raised when a category name is empty or already taken."""


@dataclass(slots=True)
class TransactionDraft:
    """Transaction fields as supplied by a form or the free-text parser."""

    description: str
    amount: object
    transaction_type: object
    account: object
    category: str
    occurred_on: Optional[object] = None

    def as_dict(self) -> dict:
        return {
            "date": parse_date(self.occurred_on).isoformat() if self.occurred_on else None,
            "description": self.description,
            "amount": float(parse_amount(self.amount)),
            "type": TransactionType.from_str(self.transaction_type).value,
            "mode": Account.from_str(self.account).value,
            "category": self.category,
        }


@dataclass(slots=True, frozen=True)
class StoreSnapshot:
    transactions: Tuple[Transaction, ...]
    diesel_logs: Tuple[DieselLogEntry, ...]
    categories: Tuple[str, ...]


class RecordStore:
    """Hold transactions, diesel logs and the category list."""

    def __init__(
        self,
        transactions: Optional[Iterable[Transaction]] = None,
        diesel_logs: Optional[Iterable[DieselLogEntry]] = None,
        categories: Optional[Iterable[str]] = None,
    ) -> None:
        self._lock = threading.RLock()
        self._listeners: List[Listener] = []
        self._transactions: List[Transaction] = []
        self._diesel_logs: List[DieselLogEntry] = []
        self._categories: List[str] = []

        for transaction in default_transactions() if transactions is None else transactions:
            self._register_transaction(transaction)
        for entry in default_diesel_logs() if diesel_logs is None else diesel_logs:
            self._register_diesel_log(entry)
        for name in default_categories() if categories is None else categories:
            if name not in self._categories:
                self._categories.append(name)

        LOGGER.debug(
            "Record store initialised with %s transactions, %s diesel logs, %s categories",
            len(self._transactions),
            len(self._diesel_logs),
            len(self._categories),
        )

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def transactions(self) -> Tuple[Transaction, ...]:
        return tuple(self._transactions)

    @property
    def diesel_logs(self) -> Tuple[DieselLogEntry, ...]:
        return tuple(self._diesel_logs)

    @property
    def categories(self) -> Tuple[str, ...]:
        return tuple(self._categories)

    def snapshot(self) -> StoreSnapshot:
        """Copy all three collections under the store lock."""

        with self._lock:
            return StoreSnapshot(
                transactions=tuple(self._transactions),
                diesel_logs=tuple(self._diesel_logs),
                categories=tuple(self._categories),
            )

    def list_transactions(self) -> List[Transaction]:
        """Return transactions ordered by most recent date first."""

        return sorted(
            self._transactions,
            key=lambda transaction: transaction.occurred_on,
            reverse=True,
        )

    def list_diesel_logs(self) -> List[DieselLogEntry]:
        return sorted(self._diesel_logs, key=lambda entry: entry.occurred_on, reverse=True)

    def get_transaction(self, transaction_id: str) -> Transaction:
        """Retrieve a transaction, raising informative errors when missing."""

        for transaction in self._transactions:
            if transaction.transaction_id == transaction_id:
                return transaction
        raise KeyError(f"Transaction {transaction_id} not found")

    def summary(self) -> FinancialSummary:
        """Dashboard totals for the current state."""

        state = self.snapshot()
        return compute_financial_summary(state.transactions, state.diesel_logs)

    # ------------------------------------------------------------------
    # Change notification
    # ------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener``; the returned callable removes it again."""

        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    def _next_id(self, prefix: str) -> str:
        taken = {txn.transaction_id for txn in self._transactions}
        taken.update(entry.entry_id for entry in self._diesel_logs)
        while True:
            candidate = f"{prefix}_{uuid.uuid4().hex[:12]}"
            if candidate not in taken:
                return candidate

    def _register_transaction(self, transaction: Transaction) -> None:
        if any(existing.transaction_id == transaction.transaction_id for existing in self._transactions):
            raise ValueError(f"Transaction {transaction.transaction_id} already exists.")
        self._transactions.append(transaction)

    def _register_diesel_log(self, entry: DieselLogEntry) -> None:
        if any(existing.entry_id == entry.entry_id for existing in self._diesel_logs):
            raise ValueError(f"Diesel log {entry.entry_id} already exists.")
        self._diesel_logs.append(entry)

    def add_transaction(
        self,
        *,
        occurred_on: object,
        description: str,
        amount: object,
        transaction_type: object,
        account: object,
        category: str,
    ) -> Transaction:
        """Append a transaction, storing the amount with the sign its type implies."""

        kind = TransactionType.from_str(transaction_type)
        magnitude = abs(parse_amount(amount))
        if magnitude == 0:
            raise ValueError("Amount must be greater than zero.")
        text = (description or "").strip().upper()
        if not text:
            raise ValueError("Description is required.")
        label = (category or "").strip()
        if not label:
            raise ValueError("Category is required.")

        with self._lock:
            transaction = Transaction(
                transaction_id=self._next_id("txn"),
                occurred_on=parse_date(occurred_on),
                description=text,
                amount=magnitude * kind.sign,
                transaction_type=kind,
                account=Account.from_str(account),
                category=label,
            )
            self._register_transaction(transaction)
        LOGGER.info(
            "Recorded %s %s on %s for %s",
            kind.value,
            transaction.amount,
            transaction.account.value,
            transaction.occurred_on.isoformat(),
        )
        self._notify()
        return transaction

    def add_draft(self, draft: TransactionDraft, *, default_date: Optional[date] = None) -> Transaction:
        """Commit a draft, falling back to ``default_date`` (today) when it has none."""

        return self.add_transaction(
            occurred_on=draft.occurred_on or default_date or date.today(),
            description=draft.description,
            amount=draft.amount,
            transaction_type=draft.transaction_type,
            account=draft.account,
            category=draft.category,
        )

    def delete_transaction(self, transaction_id: str) -> bool:
        """Remove a transaction; ``False`` signals that the id was unknown."""

        with self._lock:
            remaining = [txn for txn in self._transactions if txn.transaction_id != transaction_id]
            if len(remaining) == len(self._transactions):
                LOGGER.warning("Delete requested for unknown transaction %s", transaction_id)
                return False
            self._transactions = remaining
        LOGGER.info("Deleted transaction %s", transaction_id)
        self._notify()
        return True

    # ------------------------------------------------------------------
    # Diesel logs
    # ------------------------------------------------------------------

    def add_diesel_log(
        self,
        *,
        occurred_on: object,
        amount: object,
        vehicle: str,
        area_code: str,
        assigned_staff: str,
    ) -> DieselLogEntry:
        """Append a fuel cost report; labels are stored upper-case."""

        cost = parse_amount(amount)
        if cost < 0:
            raise ValueError("Diesel cost cannot be negative.")
        fields = {
            "vehicle": (vehicle or "").strip().upper(),
            "area_code": (area_code or "").strip().upper(),
            "assigned_staff": (assigned_staff or "").strip().upper(),
        }
        missing = [name for name, value in fields.items() if not value]
        if missing:
            raise ValueError(f"Missing diesel log fields: {', '.join(missing)}")

        with self._lock:
            entry = DieselLogEntry(
                entry_id=self._next_id("dsl"),
                occurred_on=parse_date(occurred_on),
                amount=cost,
                **fields,
            )
            self._register_diesel_log(entry)
        LOGGER.info("Logged diesel cost %s for %s on %s", cost, entry.vehicle, entry.occurred_on.isoformat())
        self._notify()
        return entry

    def delete_diesel_log(self, entry_id: str) -> bool:
        """Remove a diesel log; ``False`` signals that the id was unknown."""

        with self._lock:
            remaining = [entry for entry in self._diesel_logs if entry.entry_id != entry_id]
            if len(remaining) == len(self._diesel_logs):
                LOGGER.warning("Delete requested for unknown diesel log %s", entry_id)
                return False
            self._diesel_logs = remaining
        LOGGER.info("Deleted diesel log %s", entry_id)
        self._notify()
        return True

    # ------------------------------------------------------------------
    # Categories
    # ------------------------------------------------------------------

    def add_category(self, name: str) -> str:
        """Append a new category label; exact duplicates are rejected."""

        label = (name or "").strip()
        if not label:
            raise CategoryError("Category name cannot be empty.")
        with self._lock:
            if label in self._categories:
                raise CategoryError(f"Category '{label}' already exists.")
            self._categories.append(label)
        LOGGER.info("Added category %s", label)
        self._notify()
        return label

    def rename_category(self, old: str, new: str) -> int:
        """Rename a category and retag its transactions; returns the retag count."""

        label = (new or "").strip()
        if not label:
            raise CategoryError("Category name cannot be empty.")
        with self._lock:
            if old not in self._categories:
                raise KeyError(f"Category {old} not found")
            if label == old:
                return 0
            if label in self._categories:
                raise CategoryError(f"Category '{label}' already exists.")
            self._categories[self._categories.index(old)] = label
            retagged = 0
            rewritten: List[Transaction] = []
            for transaction in self._transactions:
                if transaction.category == old:
                    transaction = replace(transaction, category=label)
                    retagged += 1
                rewritten.append(transaction)
            self._transactions = rewritten
        LOGGER.info("Renamed category %s -> %s (%s transactions retagged)", old, label, retagged)
        self._notify()
        return retagged

    def delete_category(self, name: str) -> bool:
        """Drop a label from the list; transactions keep their stored category."""

        with self._lock:
            if name not in self._categories:
                return False
            self._categories.remove(name)
        LOGGER.info("Deleted category %s", name)
        self._notify()
        return True
