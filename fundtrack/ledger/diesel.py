"""Mini README: Diesel budget versus actual fuel consumption.

Structure:
    * is_diesel_budget_allocation - recognise budget postings in the main ledger.
    * DieselLedger - allocation, consumption and the amount returned to fund.
    * compute_diesel_ledger - reconcile a Daily or Monthly period.
    * consumption_by_vehicle / consumption_by_area - report breakdowns.

Diesel allocations are posted as ordinary transactions, either tagged with the
``Diesel`` category or (older data) described with the allocation marker
phrase. Both forms count. A negative ``returned_to_fund`` means the period
overspent its allocation and is reported, not rejected.
"""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from ..logging_utils import get_logger
from ..records.models import DieselLogEntry, Transaction
from .periods import MonthFilter, Period, ViewMode

LOGGER = get_logger(__name__)

DIESEL_CATEGORY = "Diesel"
LEGACY_ALLOCATION_MARKER = "ALLOCATED TODAY'S BUDGET FOR DIESEL"

ZERO = Decimal("0")


def is_diesel_budget_allocation(transaction: Transaction) -> bool:
    """True for ``Diesel``-tagged records or descriptions carrying the legacy marker."""

    tagged = transaction.category == DIESEL_CATEGORY
    described = LEGACY_ALLOCATION_MARKER in transaction.description.upper()
    return tagged or described


@dataclass(slots=True, frozen=True)
class DieselLedger:
    """Budget-allocated versus consumed for one reconciliation period."""

    period: Period
    budget_allocated: Decimal
    filtered_logs: List[DieselLogEntry]
    period_consumed: Decimal
    returned_to_fund: Decimal

    @property
    def is_over_budget(self) -> bool:
        return self.returned_to_fund < 0

    def as_dict(self) -> Dict[str, object]:
        return {
            "period": self.period.label,
            "view_mode": self.period.view_mode.value,
            "budget_allocated": float(self.budget_allocated),
            "period_consumed": float(self.period_consumed),
            "returned_to_fund": float(self.returned_to_fund),
            "is_over_budget": self.is_over_budget,
            "logs": [entry.as_dict() for entry in self.filtered_logs],
        }


def _resolve_period(
    view_mode: ViewMode | str,
    day: object,
    month: MonthFilter,
    year: Optional[int],
) -> Period:
    mode = ViewMode.from_str(view_mode)
    if mode is ViewMode.DAILY:
        return Period.daily(day)
    if year is None:
        raise ValueError("Monthly diesel reconciliation needs a year.")
    return Period.monthly(year, month)


def compute_diesel_ledger(
    transactions: Iterable[Transaction],
    diesel_logs: Iterable[DieselLogEntry],
    view_mode: ViewMode | str,
    day: object = None,
    month: MonthFilter = None,
    year: Optional[int] = None,
) -> Optional[DieselLedger]:
    """Reconcile diesel allocations against logged fuel costs for a period.

    Returns ``None`` when the view parameters do not describe a period, such
    as an empty or malformed date in Daily mode.
    """

    try:
        period = _resolve_period(view_mode, day, month, year)
    except ValueError as error:
        LOGGER.debug("No diesel period for %r/%r/%r/%r: %s", view_mode, day, month, year, error)
        return None
    budget_allocated = sum(
        (
            abs(txn.amount)
            for txn in transactions
            if period.contains(txn.occurred_on) and is_diesel_budget_allocation(txn)
        ),
        ZERO,
    )
    filtered_logs = [entry for entry in diesel_logs if period.contains(entry.occurred_on)]
    period_consumed = sum((entry.amount for entry in filtered_logs), ZERO)
    returned_to_fund = budget_allocated - period_consumed
    if returned_to_fund < 0:
        LOGGER.info(
            "Diesel overspend for %s: allocated %s consumed %s",
            period.label,
            budget_allocated,
            period_consumed,
        )
    return DieselLedger(
        period=period,
        budget_allocated=budget_allocated,
        filtered_logs=filtered_logs,
        period_consumed=period_consumed,
        returned_to_fund=returned_to_fund,
    )


def _total_by(logs: Iterable[DieselLogEntry], attribute: str) -> Dict[str, Decimal]:
    totals: Dict[str, Decimal] = OrderedDict()
    for entry in logs:
        key = getattr(entry, attribute)
        totals[key] = totals.get(key, ZERO) + entry.amount
    return totals


def consumption_by_vehicle(logs: Iterable[DieselLogEntry]) -> Dict[str, Decimal]:
    """Fuel cost per vehicle in first-seen order."""

    return _total_by(logs, "vehicle")


def consumption_by_area(logs: Iterable[DieselLogEntry]) -> Dict[str, Decimal]:
    """Fuel cost per area code in first-seen order."""

    return _total_by(logs, "area_code")
