"""Mini README: Account balances and per-day ledgers.

Structure:
    * DailyLedger - beginning balance, same-day inflows/outflows and totals.
    * compute_account_balance - all-time running balance of one account.
    * compute_daily_ledger - the day view rendered for the selected account.
    * compute_financial_summary - dashboard cards across all accounts.

Every function is a pure projection over the full record set; nothing here
caches or mutates state. Sums start from ``Decimal("0")`` so an empty
selection yields zero rather than an error.
"""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from ..logging_utils import get_logger
from ..records.models import (
    Account,
    DieselLogEntry,
    FinancialSummary,
    Transaction,
    TransactionType,
    parse_date,
)
from .diesel import is_diesel_budget_allocation

LOGGER = get_logger(__name__)

ZERO = Decimal("0")


@dataclass(slots=True, frozen=True)
class DailyLedger:
    """One account's position for a single day."""

    account: Account
    day: date
    beginning_balance: Decimal
    additional_funds: List[Transaction]
    funds_by_category: Dict[str, List[Transaction]]
    total_funds: Decimal
    expenses_by_category: Dict[str, List[Transaction]]
    total_expenses: Decimal
    available_balance: Decimal

    def as_dict(self) -> Dict[str, object]:
        return {
            "account": self.account.value,
            "date": self.day.isoformat(),
            "beginning_balance": float(self.beginning_balance),
            "additional_funds": [txn.as_dict() for txn in self.additional_funds],
            "funds_by_category": _serialise_groups(self.funds_by_category),
            "total_funds": float(self.total_funds),
            "expenses_by_category": _serialise_groups(self.expenses_by_category),
            "total_expenses": float(self.total_expenses),
            "available_balance": float(self.available_balance),
        }


def _serialise_groups(groups: Dict[str, List[Transaction]]) -> Dict[str, List[Dict[str, object]]]:
    return {category: [txn.as_dict() for txn in items] for category, items in groups.items()}


def _group_by_category(transactions: Iterable[Transaction]) -> Dict[str, List[Transaction]]:
    grouped: Dict[str, List[Transaction]] = OrderedDict()
    for transaction in transactions:
        grouped.setdefault(transaction.category, []).append(transaction)
    return grouped


def compute_account_balance(transactions: Iterable[Transaction], account: Account | str) -> Decimal:
    """Sum every amount booked against ``account`` regardless of date."""

    target = Account.from_str(account)
    return sum((txn.amount for txn in transactions if txn.account is target), ZERO)


def compute_daily_ledger(
    transactions: Iterable[Transaction],
    account: Account | str,
    day: object,
) -> Optional[DailyLedger]:
    """Build the day ledger for ``account``; ``None`` when ``day`` is empty or invalid."""

    if day is None or day == "":
        return None
    try:
        on = parse_date(day)
    except ValueError:
        LOGGER.debug("Ignoring ledger request for invalid date %r", day)
        return None

    target = Account.from_str(account)
    account_transactions = [txn for txn in transactions if txn.account is target]

    beginning_balance = sum(
        (txn.amount for txn in account_transactions if txn.occurred_on < on), ZERO
    )
    same_day = [txn for txn in account_transactions if txn.occurred_on == on]
    funds = [txn for txn in same_day if txn.transaction_type is TransactionType.FUND]
    expenses = [txn for txn in same_day if txn.transaction_type is TransactionType.EXPENSE]

    total_funds = beginning_balance + sum((txn.amount for txn in funds), ZERO)
    total_expenses = sum((abs(txn.amount) for txn in expenses), ZERO)

    return DailyLedger(
        account=target,
        day=on,
        beginning_balance=beginning_balance,
        additional_funds=funds,
        funds_by_category=_group_by_category(funds),
        total_funds=total_funds,
        expenses_by_category=_group_by_category(expenses),
        total_expenses=total_expenses,
        available_balance=total_funds - total_expenses,
    )


def compute_financial_summary(
    transactions: Iterable[Transaction],
    diesel_logs: Iterable[DieselLogEntry],
) -> FinancialSummary:
    """Recompute the dashboard cards from scratch."""

    records = list(transactions)
    balances = {account: compute_account_balance(records, account) for account in Account}
    funds_received = sum((txn.amount for txn in records if txn.is_fund), ZERO)
    expenses = sum(
        (
            abs(txn.amount)
            for txn in records
            if txn.is_expense and not is_diesel_budget_allocation(txn)
        ),
        ZERO,
    )
    diesel_total = sum((entry.amount for entry in diesel_logs), ZERO)
    LOGGER.debug("Summary recomputed over %s transactions", len(records))
    return FinancialSummary(
        bdo=balances[Account.BDO],
        gcash=balances[Account.GCASH],
        cash=balances[Account.CASH],
        total=sum(balances.values(), ZERO),
        funds_received=funds_received,
        expenses=expenses,
        diesel_total=diesel_total,
    )
