"""Mini README: Expense distribution by category.

Structure:
    * CategoryTotal - one category and the absolute amount spent in it.
    * compute_category_distribution - totals in first-occurrence order.
    * rank_categories - largest spend first, for legends and tables.
    * category_shares - percentage of overall spend per category.
"""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Iterable, List

from ..records.models import Transaction
from .periods import ALL_MONTHS, MonthFilter, parse_month

ZERO = Decimal("0")


@dataclass(slots=True, frozen=True)
class CategoryTotal:
    category: str
    total: Decimal

    def as_dict(self) -> Dict[str, object]:
        return {"category": self.category, "total": float(self.total)}


def compute_category_distribution(
    transactions: Iterable[Transaction],
    month_filter: MonthFilter = ALL_MONTHS,
) -> List[CategoryTotal]:
    """Sum expense magnitudes per category, optionally within one month of any year."""

    month = parse_month(month_filter)
    totals: Dict[str, Decimal] = OrderedDict()
    for txn in transactions:
        if not txn.is_expense:
            continue
        if month is not None and txn.occurred_on.month != month:
            continue
        totals[txn.category] = totals.get(txn.category, ZERO) + abs(txn.amount)
    return [CategoryTotal(category=name, total=total) for name, total in totals.items()]


def rank_categories(distribution: Iterable[CategoryTotal]) -> List[CategoryTotal]:
    """Order by total descending; ties keep their original order."""

    return sorted(distribution, key=lambda item: item.total, reverse=True)


def category_shares(distribution: Iterable[CategoryTotal]) -> Dict[str, Decimal]:
    """Percentage of the grand total per category, rounded to two places."""

    items = list(distribution)
    grand_total = sum((item.total for item in items), ZERO)
    if grand_total == 0:
        return {item.category: ZERO for item in items}
    return {
        item.category: (item.total * 100 / grand_total).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
        for item in items
    }
