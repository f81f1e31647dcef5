"""British Columbia statutory holidays.

Three kinds of rules:
  - fixed MM-DD dates, every year
  - the n-th weekday of a month (Family Day, BC Day, ...)
  - the Monday on or before a date (Victoria Day)
plus Good Friday, which follows Easter.
"""

from __future__ import annotations

import calendar
from datetime import date, timedelta
from typing import Iterable, Optional

from ..core.exceptions import ValidationError
from .model import Holiday

MONDAY = 0

FIXED_HOLIDAYS = (
    (1, 1, "New Year's Day"),
    (7, 1, "Canada Day"),
    (9, 30, "Truth and Reconciliation Day"),
    (11, 11, "Remembrance Day"),
    (12, 25, "Christmas Day"),
)

# (month, weekday, n, name)
NTH_WEEKDAY_HOLIDAYS = (
    (2, MONDAY, 3, "Family Day"),
    (8, MONDAY, 1, "BC Day"),
    (9, MONDAY, 1, "Labour Day"),
    (10, MONDAY, 2, "Thanksgiving Day"),
)

# (month, day, name): Monday on or before month/day
MONDAY_ON_OR_BEFORE_HOLIDAYS = (
    (5, 25, "Victoria Day"),
)

GOOD_FRIDAY = "Good Friday"


# Western (Gregorian) Easter calculation (Anonymous Gregorian algorithm)
def easter_date(year: int) -> date:
    a = year % 19
    b = year // 100
    c = year % 100
    d = b // 4
    e = b % 4
    f = (b + 8) // 25
    g = (b - f + 1) // 3
    h = (19 * a + b - d - g + 15) % 30
    i = c // 4
    k = c % 4
    l = (32 + 2 * e + 2 * i - h - k) % 7
    m = (a + 11 * h + 22 * l) // 451
    month = (h + l - 7 * m + 114) // 31
    day = ((h + l - 7 * m + 114) % 31) + 1
    return date(year, month, day)


def nth_weekday_of_month(year: int, month: int, weekday: int, n: int) -> date:
    """The n-th `weekday` (0=Mon..6=Sun) of a month, n >= 1."""
    if n < 1:
        raise ValueError("n must be >= 1")
    first = date(year, month, 1)
    offset = (weekday - first.weekday()) % 7
    day = 1 + offset + (n - 1) * 7
    if day > calendar.monthrange(year, month)[1]:
        raise ValueError(f"{year}-{month:02d} has no occurrence #{n} of weekday {weekday}")
    return date(year, month, day)


def monday_on_or_before(year: int, month: int, day: int) -> date:
    d = date(year, month, day)
    return d - timedelta(days=(d.weekday() - MONDAY) % 7)


def _require_year(year) -> int:
    if isinstance(year, bool) or not isinstance(year, int):
        raise ValidationError(f"Year must be an integer: {year!r}")
    if not 1 <= year <= 9999:
        raise ValidationError(f"Year out of range: {year}")
    return year


def compute_holidays(year: int) -> frozenset[Holiday]:
    """All BC statutory holidays for `year`. Pure and deterministic."""
    year = _require_year(year)

    out: set[Holiday] = set()
    for month, day, name in FIXED_HOLIDAYS:
        out.add(Holiday(date(year, month, day), name))
    for month, weekday, n, name in NTH_WEEKDAY_HOLIDAYS:
        out.add(Holiday(nth_weekday_of_month(year, month, weekday, n), name))
    for month, day, name in MONDAY_ON_OR_BEFORE_HOLIDAYS:
        out.add(Holiday(monday_on_or_before(year, month, day), name))
    out.add(Holiday(easter_date(year) - timedelta(days=2), GOOD_FRIDAY))
    return frozenset(out)


def holidays_by_date(holidays: Iterable[Holiday]) -> dict[date, str]:
    """{date: name}; useful for annotating a period grid."""
    return {h.date: h.name for h in holidays}


def holiday_on(day: date, holidays: Iterable[Holiday]) -> Optional[Holiday]:
    for h in holidays:
        if h.date == day:
            return h
    return None


def sorted_holidays(year: int) -> list[Holiday]:
    return sorted(compute_holidays(year))
