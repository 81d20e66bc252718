"""Mini README: Record types shared by the store, the ledger engines and storage.

Structure:
    * Account - the three disjoint cash-holding buckets (BDO, GCash, Cash).
    * TransactionType - fund versus expense entries.
    * Transaction - signed fund movement affecting exactly one account.
    * DieselLogEntry - actual fuel cost incurred by a vehicle.
    * FinancialSummary - derived per-account balances and grand totals.
    * parse_date / parse_amount - coercion helpers for user and persisted input.

Records are plain dataclasses. ``as_dict`` emits the persisted field names
(``id``, ``date``, ``mode``, ``areaCode`` ...) and ``from_dict`` validates the
same shape so storage and export share one serialisation contract.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from typing import Any, Dict, Mapping

CENTAVO = Decimal("0.01")


class Account(str, Enum):
    """Enumerate the accounts a transaction may affect."""

    BDO = "BDO"
    GCASH = "GCash"
    CASH = "Cash"

    @classmethod
    def from_str(cls, value: object) -> "Account":
        """Coerce arbitrary casing (``GCASH``, ``cash``) into a valid account."""

        if isinstance(value, cls):
            return value
        try:
            normalised = str(value).strip().lower()
        except (TypeError, ValueError) as error:
            raise ValueError(f"Unsupported account: {value}") from error
        for account in cls:
            if account.value.lower() == normalised:
                return account
        raise ValueError(f"Unsupported account: {value}")


class TransactionType(str, Enum):
    """Enumerate fund (money in) and expense (money out) entries."""

    FUND = "fund"
    EXPENSE = "expense"

    @classmethod
    def from_str(cls, value: object) -> "TransactionType":
        """Coerce arbitrary casing into a valid transaction type."""

        if isinstance(value, cls):
            return value
        try:
            normalised = str(value).strip().lower()
            if normalised == "income":
                normalised = cls.FUND.value
            return cls(normalised)
        except (ValueError, AttributeError) as error:
            raise ValueError(f"Unsupported transaction type: {value}") from error

    @property
    def sign(self) -> int:
        return 1 if self is TransactionType.FUND else -1


def parse_date(value: object) -> date:
    """Parse ISO formatted strings or date objects safely."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError as error:
            raise ValueError(f"Dates must use the YYYY-MM-DD format, got '{value}'.") from error
    raise ValueError("Dates must be provided as ISO strings or date/datetime instances.")


def parse_amount(value: object) -> Decimal:
    """Convert user or persisted input into a centavo-quantised Decimal."""

    if isinstance(value, bool):
        raise ValueError("Amounts must be numeric.")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError) as error:
        raise ValueError(f"Amount '{value}' is not a valid number.") from error
    if not amount.is_finite():
        raise ValueError(f"Amount '{value}' is not a finite number.")
    try:
        return amount.quantize(CENTAVO, rounding=ROUND_HALF_UP)
    except InvalidOperation as error:
        raise ValueError(f"Amount '{value}' is too large to record.") from error


def _require(payload: Mapping[str, Any], key: str) -> Any:
    if key not in payload or payload[key] is None:
        raise ValueError(f"Record is missing required field '{key}'.")
    return payload[key]


@dataclass(slots=True, frozen=True)
class Transaction:
    """Represent a signed ledger entry against a single account."""

    transaction_id: str
    occurred_on: date
    description: str
    amount: Decimal
    transaction_type: TransactionType
    account: Account
    category: str

    @property
    def is_fund(self) -> bool:
        return self.transaction_type is TransactionType.FUND

    @property
    def is_expense(self) -> bool:
        return self.transaction_type is TransactionType.EXPENSE

    def as_dict(self) -> Dict[str, object]:
        """Export the transaction using the persisted field names."""

        return {
            "id": self.transaction_id,
            "date": self.occurred_on.isoformat(),
            "description": self.description,
            "amount": float(self.amount),
            "type": self.transaction_type.value,
            "mode": self.account.value,
            "category": self.category,
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Transaction":
        """Rebuild a transaction from its persisted representation."""

        amount = parse_amount(_require(payload, "amount"))
        transaction_type = TransactionType.from_str(_require(payload, "type"))
        if amount * transaction_type.sign <= 0:
            raise ValueError(
                f"Amount {amount} does not match the sign of a {transaction_type.value} record."
            )
        return cls(
            transaction_id=str(_require(payload, "id")),
            occurred_on=parse_date(_require(payload, "date")),
            description=str(_require(payload, "description")),
            amount=amount,
            transaction_type=transaction_type,
            account=Account.from_str(_require(payload, "mode")),
            category=str(_require(payload, "category")),
        )


@dataclass(slots=True, frozen=True)
class DieselLogEntry:
    """Actual fuel cost recorded against a vehicle and area."""

    entry_id: str
    occurred_on: date
    amount: Decimal
    vehicle: str
    area_code: str
    assigned_staff: str

    def as_dict(self) -> Dict[str, object]:
        """Export the log entry using the persisted field names."""

        return {
            "id": self.entry_id,
            "date": self.occurred_on.isoformat(),
            "amount": float(self.amount),
            "vehicle": self.vehicle,
            "areaCode": self.area_code,
            "assignedStaff": self.assigned_staff,
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "DieselLogEntry":
        """Rebuild a diesel log entry from its persisted representation."""

        amount = parse_amount(_require(payload, "amount"))
        if amount < 0:
            raise ValueError("Diesel log amounts cannot be negative.")
        return cls(
            entry_id=str(_require(payload, "id")),
            occurred_on=parse_date(_require(payload, "date")),
            amount=amount,
            vehicle=str(_require(payload, "vehicle")),
            area_code=str(_require(payload, "areaCode")),
            assigned_staff=str(_require(payload, "assignedStaff")),
        )


@dataclass(slots=True, frozen=True)
class FinancialSummary:
    """Derived balances recomputed from the full record set."""

    bdo: Decimal
    gcash: Decimal
    cash: Decimal
    total: Decimal
    funds_received: Decimal
    expenses: Decimal
    diesel_total: Decimal

    def as_dict(self) -> Dict[str, float]:
        return {
            "bdo": float(self.bdo),
            "gcash": float(self.gcash),
            "cash": float(self.cash),
            "total": float(self.total),
            "funds_received": float(self.funds_received),
            "expenses": float(self.expenses),
            "diesel_total": float(self.diesel_total),
        }
