"""Mini README: Tests for the category distribution used by the expense chart."""

from __future__ import annotations

from decimal import Decimal

import pytest

from fundtrack.ledger import category_shares, compute_category_distribution, rank_categories
from fundtrack.records import Transaction


def _txn(transaction_id: str, on: str, amount: str, category: str) -> Transaction:
    return Transaction.from_dict(
        {
            "id": transaction_id,
            "date": on,
            "description": "ENTRY",
            "amount": amount,
            "type": "fund" if Decimal(amount) > 0 else "expense",
            "mode": "GCash",
            "category": category,
        }
    )


TRANSACTIONS = [
    _txn("1", "2025-11-03", "-100", "Utilities"),
    _txn("2", "2025-12-01", "5000", "Fund Transfer"),
    _txn("3", "2025-12-02", "-40", "Food"),
    _txn("4", "2025-12-09", "-60", "Utilities"),
    _txn("5", "2024-12-20", "-300", "Construction"),
]


def test_distribution_sums_expenses_in_first_occurrence_order() -> None:
    distribution = compute_category_distribution(TRANSACTIONS)

    assert [(item.category, item.total) for item in distribution] == [
        ("Utilities", Decimal("160.00")),
        ("Food", Decimal("40.00")),
        ("Construction", Decimal("300.00")),
    ]


def test_month_filter_matches_month_of_any_year() -> None:
    distribution = compute_category_distribution(TRANSACTIONS, "12")

    assert {item.category: item.total for item in distribution} == {
        "Food": Decimal("40.00"),
        "Utilities": Decimal("60.00"),
        "Construction": Decimal("300.00"),
    }


def test_month_filter_without_matches_is_empty() -> None:
    assert compute_category_distribution(TRANSACTIONS, "07") == []


def test_invalid_month_filter_raises() -> None:
    with pytest.raises(ValueError):
        compute_category_distribution(TRANSACTIONS, "13")


def test_rank_and_shares() -> None:
    distribution = compute_category_distribution(TRANSACTIONS)

    ranked = rank_categories(distribution)
    shares = category_shares(distribution)

    assert [item.category for item in ranked] == ["Construction", "Utilities", "Food"]
    assert shares == {
        "Utilities": Decimal("32.00"),
        "Food": Decimal("8.00"),
        "Construction": Decimal("60.00"),
    }
    assert category_shares([]) == {}
