from __future__ import annotations

from typing import Iterable, Optional

from ..holidays.calendar import compute_holidays, holidays_by_date
from ..holidays.model import Holiday
from .model import DayRow, PeriodRef

# Fixed English names; strftime("%A") would follow the process locale.
WEEKDAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


def period_days(ref: PeriodRef, holidays: Optional[Iterable[Holiday]] = None) -> list[DayRow]:
    """Rows for every day of the period, annotated with statutory holidays."""
    names = holidays_by_date(compute_holidays(ref.year) if holidays is None else holidays)
    return [
        DayRow(date=d, day_name=WEEKDAY_NAMES[d.weekday()], holiday_name=names.get(d))
        for d in ref.dates()
    ]
