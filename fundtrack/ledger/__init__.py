"""Mini README: Read-only projections over the record store.

Each module exposes pure functions that take the full record set plus view
parameters (account, date, month, view mode) and return derived views:

* ``periods`` - calendar windows and date enumeration
* ``balances`` - account balances, day ledgers and dashboard summary
* ``diesel`` - diesel budget reconciliation
* ``aggregation`` - expense distribution by category
"""

from .aggregation import CategoryTotal, category_shares, compute_category_distribution, rank_categories
from .balances import DailyLedger, compute_account_balance, compute_daily_ledger, compute_financial_summary
from .diesel import (
    DIESEL_CATEGORY,
    LEGACY_ALLOCATION_MARKER,
    DieselLedger,
    compute_diesel_ledger,
    consumption_by_area,
    consumption_by_vehicle,
    is_diesel_budget_allocation,
)
from .periods import ALL_MONTHS, Period, ViewMode, dates_in_month, parse_month, reconcile_selected_date

__all__ = [
    "ALL_MONTHS",
    "CategoryTotal",
    "DIESEL_CATEGORY",
    "DailyLedger",
    "DieselLedger",
    "LEGACY_ALLOCATION_MARKER",
    "Period",
    "ViewMode",
    "category_shares",
    "compute_account_balance",
    "compute_category_distribution",
    "compute_daily_ledger",
    "compute_diesel_ledger",
    "compute_financial_summary",
    "consumption_by_area",
    "consumption_by_vehicle",
    "dates_in_month",
    "is_diesel_budget_allocation",
    "parse_month",
    "rank_categories",
    "reconcile_selected_date",
]
