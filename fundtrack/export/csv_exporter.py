"""Mini README: Spreadsheet-friendly CSV reports of the record collections.

Structure:
    * transactions_to_csv / diesel_logs_to_csv - render one row per record.
    * transactions_from_csv / diesel_logs_from_csv - read a report back.
    * CsvReportExporter - writes full reports into an output directory.

Columns are the persisted field names, amounts are written as exact decimal
strings and dates as ``YYYY-MM-DD`` so a report re-imports field for field.
"""

from __future__ import annotations

import csv
import io
from pathlib import Path
from typing import Any, Callable, Iterable, List, Mapping, Sequence, TypeVar

from ..logging_utils import get_logger
from ..records.models import DieselLogEntry, Transaction

LOGGER = get_logger(__name__)

TRANSACTION_COLUMNS: Sequence[str] = ("id", "date", "description", "amount", "type", "mode", "category")
DIESEL_LOG_COLUMNS: Sequence[str] = ("id", "date", "amount", "vehicle", "areaCode", "assignedStaff")

TRANSACTIONS_REPORT = "transactions_full_report.csv"
DIESEL_REPORT = "diesel_full_report.csv"

T = TypeVar("T")


def _render(columns: Sequence[str], rows: Iterable[Mapping[str, Any]]) -> str:
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=list(columns), lineterminator="\n")
    writer.writeheader()
    for row in rows:
        writer.writerow(row)
    return buffer.getvalue()


def _transaction_row(transaction: Transaction) -> dict:
    row = transaction.as_dict()
    row["amount"] = str(transaction.amount)
    return row


def _diesel_row(entry: DieselLogEntry) -> dict:
    row = entry.as_dict()
    row["amount"] = str(entry.amount)
    return row


def transactions_to_csv(transactions: Iterable[Transaction]) -> str:
    return _render(TRANSACTION_COLUMNS, (_transaction_row(txn) for txn in transactions))


def diesel_logs_to_csv(diesel_logs: Iterable[DieselLogEntry]) -> str:
    return _render(DIESEL_LOG_COLUMNS, (_diesel_row(entry) for entry in diesel_logs))


def _parse(text: str, columns: Sequence[str], build: Callable[[Mapping[str, Any]], T]) -> List[T]:
    reader = csv.DictReader(io.StringIO(text.lstrip("\ufeff")))
    missing = [column for column in columns if column not in (reader.fieldnames or [])]
    if missing:
        raise ValueError(f"CSV report is missing columns: {', '.join(missing)}")
    return [build(row) for row in reader]


def transactions_from_csv(text: str) -> List[Transaction]:
    """Read a transactions report; invalid rows raise ``ValueError``."""

    return _parse(text, TRANSACTION_COLUMNS, Transaction.from_dict)


def diesel_logs_from_csv(text: str) -> List[DieselLogEntry]:
    """Read a diesel report; invalid rows raise ``ValueError``."""

    return _parse(text, DIESEL_LOG_COLUMNS, DieselLogEntry.from_dict)


class CsvReportExporter:
    """Write full CSV reports to disk."""

    def export(self, content: str, destination: Path) -> Path:
        """Write rendered CSV ``content`` to ``destination``."""

        destination.parent.mkdir(parents=True, exist_ok=True)
        # BOM lets spreadsheet tools detect UTF-8
        with destination.open("w", encoding="utf-8-sig", newline="") as report:
            report.write(content)
        LOGGER.info("Exported report to %s", destination)
        return destination

    def export_transactions(self, transactions: Iterable[Transaction], *, output_directory: Path) -> Path:
        return self.export(transactions_to_csv(transactions), output_directory / TRANSACTIONS_REPORT)

    def export_diesel_logs(self, diesel_logs: Iterable[DieselLogEntry], *, output_directory: Path) -> Path:
        return self.export(diesel_logs_to_csv(diesel_logs), output_directory / DIESEL_REPORT)
