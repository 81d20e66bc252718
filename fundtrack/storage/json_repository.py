"""Mini README: JSON persistence for the three record collections.

Structure:
    * JsonLedgerRepository - load/save of transactions, diesel logs, categories.

Each collection lives in its own file as a flat JSON list using the persisted
field names. A blob that is missing, unreadable, not a list, or holds a record
that fails validation is replaced by the built-in defaults; the problem is
logged and never raised to the caller.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, List, Optional, TypeVar

from ..configuration import get_settings
from ..logging_utils import get_logger
from ..records.defaults import default_categories, default_diesel_logs, default_transactions
from ..records.models import DieselLogEntry, Transaction
from ..records.store import RecordStore, StoreSnapshot

LOGGER = get_logger(__name__)

TRANSACTIONS_FILE = "transactions.json"
DIESEL_LOGS_FILE = "diesel_logs.json"
CATEGORIES_FILE = "categories.json"

T = TypeVar("T")


class JsonLedgerRepository:
    """Read and write the ledger blobs inside a data directory."""

    def __init__(self, directory: Optional[Path] = None) -> None:
        self.directory = Path(directory) if directory is not None else get_settings().data_directory
        LOGGER.debug("Ledger repository rooted at %s", self.directory)

    @property
    def transactions_path(self) -> Path:
        return self.directory / TRANSACTIONS_FILE

    @property
    def diesel_logs_path(self) -> Path:
        return self.directory / DIESEL_LOGS_FILE

    @property
    def categories_path(self) -> Path:
        return self.directory / CATEGORIES_FILE

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def _read_list(self, target: Path) -> Optional[List[Any]]:
        if not target.exists():
            return None
        try:
            with target.open("r", encoding="utf-8") as handle:
                data = json.load(handle)
        except (json.JSONDecodeError, OSError, UnicodeDecodeError) as error:
            LOGGER.warning("Could not read %s (%s); using defaults", target.name, error)
            return None
        if not isinstance(data, list):
            LOGGER.warning("%s does not hold a list; using defaults", target.name)
            return None
        return data

    def _load_records(
        self,
        target: Path,
        parse: Callable[[Any], T],
        fallback: Callable[[], List[T]],
    ) -> List[T]:
        data = self._read_list(target)
        if data is None:
            return fallback()
        try:
            return [parse(item) for item in data]
        except (ValueError, TypeError, AttributeError, KeyError) as error:
            LOGGER.warning("Invalid record in %s (%s); using defaults", target.name, error)
            return fallback()

    def load_transactions(self) -> List[Transaction]:
        return self._load_records(self.transactions_path, Transaction.from_dict, default_transactions)

    def load_diesel_logs(self) -> List[DieselLogEntry]:
        return self._load_records(self.diesel_logs_path, DieselLogEntry.from_dict, default_diesel_logs)

    def load_categories(self) -> List[str]:
        def parse(item: Any) -> str:
            if not isinstance(item, str) or not item.strip():
                raise ValueError(f"Category entries must be non-empty strings, got {item!r}")
            return item

        return self._load_records(self.categories_path, parse, default_categories)

    def load_store(self) -> RecordStore:
        """Build a record store from whatever is on disk."""

        transactions = self.load_transactions()
        diesel_logs = self.load_diesel_logs()
        categories = self.load_categories()
        try:
            return RecordStore(transactions=transactions, diesel_logs=diesel_logs, categories=categories)
        except ValueError as error:
            LOGGER.warning("Persisted records conflict (%s); starting from defaults", error)
            return RecordStore()

    # ------------------------------------------------------------------
    # Saving
    # ------------------------------------------------------------------

    def _write_list(self, target: Path, payload: List[Any]) -> None:
        target.parent.mkdir(parents=True, exist_ok=True)
        temporary = target.with_suffix(target.suffix + ".tmp")
        with temporary.open("w", encoding="utf-8") as handle:
            json.dump(payload, handle, indent=2)
        temporary.replace(target)

    def save_transactions(self, transactions: List[Transaction]) -> None:
        self._write_list(self.transactions_path, [txn.as_dict() for txn in transactions])

    def save_diesel_logs(self, diesel_logs: List[DieselLogEntry]) -> None:
        self._write_list(self.diesel_logs_path, [entry.as_dict() for entry in diesel_logs])

    def save_categories(self, categories: List[str]) -> None:
        self._write_list(self.categories_path, list(categories))

    def save_snapshot(self, snapshot: StoreSnapshot) -> None:
        """Persist all three collections from a consistent snapshot."""

        self.save_transactions(list(snapshot.transactions))
        self.save_diesel_logs(list(snapshot.diesel_logs))
        self.save_categories(list(snapshot.categories))
        LOGGER.debug(
            "Saved %s transactions, %s diesel logs, %s categories",
            len(snapshot.transactions),
            len(snapshot.diesel_logs),
            len(snapshot.categories),
        )
