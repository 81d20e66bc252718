"""Mini README: Built-in seed data used when no persisted state is available.

Structure:
    * DEFAULT_CATEGORIES - starting category list shown in the entry forms.
    * default_transactions - December 2025 opening ledger.
    * default_diesel_logs - matching fuel cost reports.

Builders return fresh lists on every call so a store can mutate its copy
without leaking changes into the next fallback.
"""

from __future__ import annotations

from typing import List

from .models import DieselLogEntry, Transaction

DEFAULT_CATEGORIES: tuple[str, ...] = (
    "Fund Transfer",
    "Utilities",
    "Cooking Oil",
    "EMB Payment",
    "Evap/Construction",
    "Diesel",
    "Budget Allocation",
    "Other Expenses",
    "Construction",
    "Withdrawal",
)

_SEED_TRANSACTIONS = [
    ("1", "2025-12-01", "ADDITIONAL ERC FUND RECEIVED FROM SIR EMERSON", "227000.00", "fund", "BDO", "Fund Transfer"),
    ("df-1", "2025-12-01", "DIESEL BUDGET ALLOCATION", "50000.00", "fund", "BDO", "Diesel"),
    ("2", "2025-12-05", "FUND TRANSFER TO GCASH (PO BANK FEE INCLUDED)", "-7136.87", "expense", "BDO", "Fund Transfer"),
    ("3", "2025-12-08", "UCO PREPAYMENT", "-15010.00", "expense", "BDO", "Utilities"),
    ("4", "2025-12-10", "FUND TRANSFER TO GCASH", "-50210.00", "expense", "BDO", "Fund Transfer"),
    ("5", "2025-12-12", "FUND TRANSFER TO GCASH", "-22010.00", "expense", "BDO", "Fund Transfer"),
    ("6", "2025-12-15", "LAWSON GROUP (NOV 17-22)", "-40670.00", "expense", "BDO", "Cooking Oil"),
    ("7", "2025-12-18", "SM SURPLUS", "-4057.00", "expense", "BDO", "EMB Payment"),
    ("8", "2025-12-02", "FUND TRANSFERRED FROM BDO", "7136.87", "fund", "GCash", "Fund Transfer"),
    ("9", "2025-12-03", "MARYJUANE SOLPUNO | 1 CANS", "-1500.00", "expense", "GCash", "Evap/Construction"),
    ("10", "2025-12-06", "LAWSON ESQUERRA | 1 CANS", "-1050.00", "expense", "GCash", "Evap/Construction"),
    ("11", "2025-12-09", "MARYJUANE OPUS MALL | 5 CANS", "-2500.00", "expense", "GCash", "Evap/Construction"),
    ("12", "2025-12-11", "PILLA RDS OPUS MALL | 2 CANS", "-1000.00", "expense", "GCash", "Evap/Construction"),
    ("13", "2025-12-14", "MARYJUANE LOON LIPA | 7 CANS DIESEL", "-2800.00", "expense", "GCash", "Diesel"),
    ("14", "2025-12-16", "MERALCO", "-8842.86", "expense", "GCash", "Utilities"),
    ("15", "2025-12-19", "GLOBE", "-850.00", "expense", "GCash", "Utilities"),
    ("16", "2025-12-04", "CASH WITHDRAWAL FROM BDO", "29000.00", "fund", "Cash", "Withdrawal"),
    ("17", "2025-12-07", "ALLOCATES BUDGET FOR DEC 02", "-9750.00", "expense", "Cash", "Budget Allocation"),
    ("18", "2025-12-13", "LILIANDRA | MDA TROPICAL NUT", "-160.00", "expense", "Cash", "Other Expenses"),
    ("19", "2025-12-17", "WASTE DISPOSAL (5 WASTE DISPOSAL)", "-20200.00", "expense", "Cash", "Construction"),
]

_SEED_DIESEL_LOGS = [
    ("d1", "2025-12-01", "15000.00", "TRUCK 1", "LIPA", "JUAN DELA CRUZ"),
    ("d2", "2025-12-08", "20000.00", "TRUCK 2", "MKT", "PEDRO PENDUKO"),
    ("d3", "2025-12-14", "7000.00", "TRUCK 1", "LIPA", "JUAN DELA CRUZ"),
]


def default_categories() -> List[str]:
    return list(DEFAULT_CATEGORIES)


def default_transactions() -> List[Transaction]:
    """Return the opening ledger shipped with the dashboard."""

    return [
        Transaction.from_dict(
            {
                "id": transaction_id,
                "date": occurred_on,
                "description": description,
                "amount": amount,
                "type": transaction_type,
                "mode": mode,
                "category": category,
            }
        )
        for transaction_id, occurred_on, description, amount, transaction_type, mode, category in _SEED_TRANSACTIONS
    ]


def default_diesel_logs() -> List[DieselLogEntry]:
    """Return the fuel reports matching the opening ledger."""

    return [
        DieselLogEntry.from_dict(
            {
                "id": entry_id,
                "date": occurred_on,
                "amount": amount,
                "vehicle": vehicle,
                "areaCode": area_code,
                "assignedStaff": staff,
            }
        )
        for entry_id, occurred_on, amount, vehicle, area_code, staff in _SEED_DIESEL_LOGS
    ]
