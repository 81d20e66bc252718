"""Mini README: Tests for the diesel budget reconciliation.

Covers both ways a budget allocation is recognised, Daily versus Monthly
periods, overspend reporting and the per-vehicle breakdown.
"""

from __future__ import annotations

from decimal import Decimal

import pytest

from fundtrack.ledger import (
    ViewMode,
    compute_diesel_ledger,
    consumption_by_area,
    consumption_by_vehicle,
    is_diesel_budget_allocation,
)
from fundtrack.records import DieselLogEntry, Transaction


def _txn(transaction_id: str, on: str, amount: str, category: str, description: str = "FUEL") -> Transaction:
    return Transaction.from_dict(
        {
            "id": transaction_id,
            "date": on,
            "description": description,
            "amount": amount,
            "type": "fund" if Decimal(amount) > 0 else "expense",
            "mode": "BDO",
            "category": category,
        }
    )


def _log(entry_id: str, on: str, amount: str, vehicle: str = "TRUCK 1", area: str = "LIPA") -> DieselLogEntry:
    return DieselLogEntry.from_dict(
        {
            "id": entry_id,
            "date": on,
            "amount": amount,
            "vehicle": vehicle,
            "areaCode": area,
            "assignedStaff": "JUAN DELA CRUZ",
        }
    )


def test_daily_reconciliation_returns_unspent_budget() -> None:
    """A 5000 allocation against 4200 of fuel returns 800 to the fund."""

    transactions = [_txn("1", "2025-12-01", "-5000", "Diesel")]
    logs = [_log("d1", "2025-12-01", "4200")]

    ledger = compute_diesel_ledger(transactions, logs, ViewMode.DAILY, day="2025-12-01")

    assert ledger.budget_allocated == Decimal("5000.00")
    assert ledger.period_consumed == Decimal("4200.00")
    assert ledger.returned_to_fund == Decimal("800.00")
    assert ledger.budget_allocated - ledger.period_consumed == ledger.returned_to_fund
    assert ledger.is_over_budget is False
    assert ledger.period.label == "2025-12-01"


def test_overspend_is_reported_as_negative_return() -> None:
    transactions = [_txn("1", "2025-12-03", "-1000", "Diesel")]
    logs = [_log("d1", "2025-12-03", "1500")]

    ledger = compute_diesel_ledger(transactions, logs, "Daily", day="2025-12-03")

    assert ledger.returned_to_fund == Decimal("-500.00")
    assert ledger.is_over_budget is True


def test_legacy_marker_counts_as_allocation_in_any_case() -> None:
    legacy = _txn("1", "2025-12-01", "-700", "Budget Allocation", "allocated today's budget for diesel (truck 2)")
    tagged = _txn("2", "2025-12-01", "-300", "Diesel", "ALLOCATED TODAY'S BUDGET FOR DIESEL")
    unrelated = _txn("3", "2025-12-01", "-50", "Utilities", "MERALCO")

    assert is_diesel_budget_allocation(legacy)
    assert is_diesel_budget_allocation(tagged)
    assert not is_diesel_budget_allocation(unrelated)

    ledger = compute_diesel_ledger([legacy, tagged, unrelated], [], "Daily", day="2025-12-01")

    # Matching both predicates still counts a record once.
    assert ledger.budget_allocated == Decimal("1000.00")
    assert ledger.returned_to_fund == Decimal("1000.00")


def test_fund_type_allocations_count_by_magnitude() -> None:
    transactions = [_txn("df-1", "2025-12-01", "50000", "Diesel", "DIESEL BUDGET ALLOCATION")]

    ledger = compute_diesel_ledger(transactions, [], "Daily", day="2025-12-01")

    assert ledger.budget_allocated == Decimal("50000.00")


def test_monthly_reconciliation_covers_whole_month_only() -> None:
    transactions = [
        _txn("1", "2025-12-01", "-5000", "Diesel"),
        _txn("2", "2025-12-20", "-3000", "Diesel"),
        _txn("3", "2025-11-30", "-9999", "Diesel"),
        _txn("4", "2024-12-05", "-9999", "Diesel"),
    ]
    logs = [
        _log("d1", "2025-12-02", "2500"),
        _log("d2", "2025-12-31", "4000"),
        _log("d3", "2026-01-01", "700"),
    ]

    ledger = compute_diesel_ledger(transactions, logs, ViewMode.MONTHLY, month="12", year=2025)

    assert ledger.period.label == "2025-12"
    assert ledger.budget_allocated == Decimal("8000.00")
    assert [entry.entry_id for entry in ledger.filtered_logs] == ["d1", "d2"]
    assert ledger.period_consumed == Decimal("6500.00")
    assert ledger.returned_to_fund == Decimal("1500.00")


def test_empty_period_reconciles_to_zero() -> None:
    ledger = compute_diesel_ledger([], [], "Monthly", month=2, year=2026)

    assert ledger.budget_allocated == Decimal("0")
    assert ledger.period_consumed == Decimal("0")
    assert ledger.returned_to_fund == Decimal("0")
    assert ledger.filtered_logs == []


@pytest.mark.parametrize(
    "parameters",
    [
        {"view_mode": "Daily", "day": ""},
        {"view_mode": "Daily", "day": None},
        {"view_mode": "Daily", "day": "12/01/2025"},
        {"view_mode": "Monthly", "month": "12"},
        {"view_mode": "Monthly", "month": "All", "year": 2025},
        {"view_mode": "Weekly", "day": "2025-12-01"},
    ],
)
def test_unusable_period_parameters_yield_no_ledger(parameters) -> None:
    transactions = [_txn("1", "2025-12-01", "-5000", "Diesel")]
    logs = [_log("d1", "2025-12-01", "4200")]

    assert compute_diesel_ledger(transactions, logs, **parameters) is None


def test_consumption_breakdowns_keep_first_seen_order() -> None:
    logs = [
        _log("d1", "2025-12-01", "15000", "TRUCK 1", "LIPA"),
        _log("d2", "2025-12-08", "20000", "TRUCK 2", "MKT"),
        _log("d3", "2025-12-14", "7000", "TRUCK 1", "LIPA"),
    ]

    assert consumption_by_vehicle(logs) == {"TRUCK 1": Decimal("22000.00"), "TRUCK 2": Decimal("20000.00")}
    assert list(consumption_by_area(logs)) == ["LIPA", "MKT"]
