"""Mini README: Calendar windows used to partition ledger records.

Structure:
    * ViewMode - Daily or Monthly reconciliation views.
    * Period - a single day or a calendar month with a ``contains`` test.
    * parse_month - turn ``"All"`` / ``"01"`` / ``12`` into an optional month.
    * dates_in_month - enumerate every date of a month for date pickers.
    * reconcile_selected_date - keep a selected date inside the chosen month.

Periods compare real ``date`` objects, so partitioning never depends on the
textual form of a date.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import List, Optional, Union

from ..records.models import parse_date

ALL_MONTHS = "All"

MonthFilter = Union[str, int, None]


class ViewMode(str, Enum):
    """Granularity of the diesel reconciliation view."""

    DAILY = "Daily"
    MONTHLY = "Monthly"

    @classmethod
    def from_str(cls, value: object) -> "ViewMode":
        if isinstance(value, cls):
            return value
        normalised = str(value).strip().lower()
        for mode in cls:
            if mode.value.lower() == normalised:
                return mode
        raise ValueError(f"Unsupported view mode: {value}")


@dataclass(slots=True, frozen=True)
class Period:
    """A Daily (single date) or Monthly (year + month) window."""

    year: int
    month: int
    day: Optional[int] = None

    @classmethod
    def daily(cls, value: object) -> "Period":
        on = parse_date(value)
        return cls(year=on.year, month=on.month, day=on.day)

    @classmethod
    def monthly(cls, year: int, month: MonthFilter) -> "Period":
        parsed = parse_month(month)
        if parsed is None:
            raise ValueError("A monthly period needs a concrete month, not 'All'.")
        return cls(year=int(year), month=parsed)

    @property
    def view_mode(self) -> ViewMode:
        return ViewMode.MONTHLY if self.day is None else ViewMode.DAILY

    @property
    def label(self) -> str:
        """``YYYY-MM-DD`` for daily periods, ``YYYY-MM`` for monthly ones."""

        if self.day is None:
            return f"{self.year:04d}-{self.month:02d}"
        return date(self.year, self.month, self.day).isoformat()

    def contains(self, on: date) -> bool:
        if on.year != self.year or on.month != self.month:
            return False
        return self.day is None or on.day == self.day


def parse_month(value: MonthFilter) -> Optional[int]:
    """Return ``None`` for the ``All`` filter, else the month number 1..12."""

    if value is None:
        return None
    if isinstance(value, str):
        text = value.strip()
        if text.lower() == ALL_MONTHS.lower():
            return None
        if not text.isdigit():
            raise ValueError(f"Month filter must be 'All' or a number, got '{value}'.")
        month = int(text)
    else:
        month = int(value)
    if not 1 <= month <= 12:
        raise ValueError(f"Month must be between 1 and 12, got {value}.")
    return month


def dates_in_month(year: int, month: MonthFilter) -> List[date]:
    """Enumerate the month's dates; the ``All`` filter falls back to January."""

    target = parse_month(month) or 1
    _, day_count = calendar.monthrange(int(year), target)
    return [date(int(year), target, day) for day in range(1, day_count + 1)]


def reconcile_selected_date(
    selected: Optional[date],
    month: MonthFilter,
    year: int,
    today: date,
) -> Optional[date]:
    """Move ``selected`` into ``month`` when a month switch leaves it outside.

    Today wins when the month is the current one, otherwise the first day of
    the month is chosen. The ``All`` filter leaves the selection untouched.
    """

    target = parse_month(month)
    if target is None:
        return selected
    if selected is not None and selected.month == target and selected.year == int(year):
        return selected
    if target == today.month and int(year) == today.year:
        return today
    return dates_in_month(year, target)[0]
