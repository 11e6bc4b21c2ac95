"""Calendar helpers shared by the rules services."""

from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta
from typing import Union

from core.constants import MonthRollover

DateLike = Union[date, datetime, str]


def add_months(start: date, months: int, rollover: MonthRollover = MonthRollover.CLAMP) -> date:
    """Move ``start`` by whole calendar months, keeping the day-of-month.

    When the day does not exist in the target month, CLAMP returns the last
    day of that month and OVERFLOW carries the surplus days forward
    (Jan 31 + 1 month -> Mar 3 in a common year, Mar 2 in a leap year).
    """
    index = start.month - 1 + months
    year = start.year + index // 12
    month = index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]

    if start.day <= last_day:
        return date(year, month, start.day)
    if rollover is MonthRollover.CLAMP:
        return date(year, month, last_day)
    return date(year, month, last_day) + timedelta(days=start.day - last_day)


def as_date(value: DateLike) -> date:
    """Normalise a date, datetime or ISO string to a calendar date.

    Time of day is dropped so comparisons happen at midnight granularity.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        # Accept full ISO timestamps as well as plain dates
        return datetime.fromisoformat(text).date() if "T" in text else date.fromisoformat(text)
    raise TypeError(f"Expected a date, datetime or ISO string, got {type(value).__name__}")
