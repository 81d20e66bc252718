"""Mini README: Tests for account balances and the day ledger.

These tests pin the beginning-balance carry forward, same-day grouping by
category and the dashboard summary, including the exclusion of diesel budget
postings from general expenses.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from fundtrack.ledger import compute_account_balance, compute_daily_ledger, compute_financial_summary
from fundtrack.records import Account, DieselLogEntry, Transaction
from fundtrack.records.defaults import default_diesel_logs, default_transactions


def _txn(transaction_id: str, on: str, amount: str, mode: str, category: str = "General", description: str = "") -> Transaction:
    return Transaction.from_dict(
        {
            "id": transaction_id,
            "date": on,
            "description": description or f"ENTRY {transaction_id}",
            "amount": amount,
            "type": "fund" if Decimal(amount) > 0 else "expense",
            "mode": mode,
            "category": category,
        }
    )


def test_daily_ledger_carries_beginning_balance_forward() -> None:
    """A fund one day and an expense the next leave 700 available."""

    transactions = [
        _txn("1", "2025-12-01", "1000", "Cash", "Withdrawal"),
        _txn("2", "2025-12-02", "-300", "Cash", "Food"),
    ]

    ledger = compute_daily_ledger(transactions, "Cash", "2025-12-02")

    assert ledger is not None
    assert ledger.beginning_balance == Decimal("1000")
    assert ledger.total_funds == Decimal("1000")
    assert ledger.total_expenses == Decimal("300")
    assert ledger.available_balance == Decimal("700")
    assert list(ledger.expenses_by_category) == ["Food"]
    assert ledger.additional_funds == []


def test_daily_ledger_returns_none_without_a_valid_date() -> None:
    transactions = [_txn("1", "2025-12-01", "1000", "Cash")]

    assert compute_daily_ledger(transactions, Account.CASH, "") is None
    assert compute_daily_ledger(transactions, Account.CASH, None) is None
    assert compute_daily_ledger(transactions, Account.CASH, "2025-13-40") is None


def test_daily_ledger_with_no_history_starts_from_zero() -> None:
    transactions = [_txn("1", "2025-12-05", "200", "BDO")]

    ledger = compute_daily_ledger(transactions, Account.BDO, date(2025, 12, 5))

    assert ledger.beginning_balance == Decimal("0")
    assert ledger.total_funds == Decimal("200.00")
    assert ledger.available_balance == Decimal("200.00")


def test_daily_ledger_groups_same_day_records_and_ignores_other_accounts() -> None:
    transactions = [
        _txn("1", "2025-12-10", "-50", "GCash", "Utilities"),
        _txn("2", "2025-12-10", "-20", "GCash", "Food"),
        _txn("3", "2025-12-10", "-30", "GCash", "Utilities"),
        _txn("4", "2025-12-10", "500", "GCash", "Fund Transfer"),
        _txn("5", "2025-12-10", "-999", "BDO", "Utilities"),
        _txn("6", "2025-12-11", "-5", "GCash", "Food"),
    ]

    ledger = compute_daily_ledger(transactions, "GCash", "2025-12-10")

    assert list(ledger.expenses_by_category) == ["Utilities", "Food"]
    assert [txn.transaction_id for txn in ledger.expenses_by_category["Utilities"]] == ["1", "3"]
    assert list(ledger.funds_by_category) == ["Fund Transfer"]
    assert ledger.total_expenses == Decimal("100.00")
    assert ledger.available_balance == Decimal("400.00")


def test_daily_ledger_is_a_pure_function() -> None:
    transactions = default_transactions()

    first = compute_daily_ledger(transactions, "BDO", "2025-12-10")
    second = compute_daily_ledger(transactions, "BDO", "2025-12-10")

    assert first == second


def test_account_balances_add_up_to_all_amounts() -> None:
    transactions = default_transactions()

    per_account = sum(compute_account_balance(transactions, account) for account in Account)

    assert per_account == sum(txn.amount for txn in transactions)


def test_financial_summary_excludes_diesel_budget_from_expenses() -> None:
    transactions = [
        _txn("1", "2025-12-01", "1000", "BDO", "Fund Transfer"),
        _txn("2", "2025-12-01", "-200", "BDO", "Diesel"),
        _txn("3", "2025-12-02", "-150", "GCash", "Budget Allocation", "ALLOCATED TODAY'S BUDGET FOR DIESEL"),
        _txn("4", "2025-12-02", "-75", "Cash", "Food"),
    ]
    logs = [
        DieselLogEntry.from_dict(
            {"id": "d1", "date": "2025-12-01", "amount": "180", "vehicle": "T1", "areaCode": "A", "assignedStaff": "S"}
        )
    ]

    summary = compute_financial_summary(transactions, logs)

    assert summary.bdo == Decimal("800.00")
    assert summary.gcash == Decimal("-150.00")
    assert summary.cash == Decimal("-75.00")
    assert summary.total == Decimal("575.00")
    assert summary.funds_received == Decimal("1000.00")
    assert summary.expenses == Decimal("75.00")
    assert summary.diesel_total == Decimal("180.00")


def test_financial_summary_over_seed_data() -> None:
    summary = compute_financial_summary(default_transactions(), default_diesel_logs())

    assert summary.bdo == Decimal("137906.13")
    assert summary.gcash == Decimal("-11405.99")
    assert summary.cash == Decimal("-1110.00")
    assert summary.total == Decimal("125390.14")
    assert summary.diesel_total == Decimal("42000.00")
