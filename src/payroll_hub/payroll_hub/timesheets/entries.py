from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import now_utc
from ..core.exceptions import PeriodLockedError, ValidationError
from .calculator.base import HoursCalculator
from .calculator.standard_calculator import StandardHoursCalculator
from .model import EntryPatch, PeriodData, PeriodRef, TimeEntry

_default_calculator = StandardHoursCalculator()


def compute_entry(
    existing: Optional[TimeEntry],
    patch: EntryPatch,
    *,
    work_date: Optional[date] = None,
    calculator: Optional[HoursCalculator] = None,
) -> TimeEntry:
    """Merge `patch` onto `existing` (or a blank day) and recompute hours.

    A sick day always drops its clock times; `total_hours` is whatever the
    calculator says for the merged entry.
    """
    if existing is None:
        if work_date is None:
            raise ValidationError("A date is required for a new entry")
        existing = TimeEntry(date=work_date)
    elif work_date is not None and work_date != existing.date:
        raise ValidationError("Patch date does not match the existing entry")

    merged = replace(existing, **patch.changes())
    if merged.is_sick_day:
        merged = replace(merged, start_time=None, end_time=None)

    calc = calculator or _default_calculator
    return replace(merged, total_hours=calc.total_hours(merged))


def apply_entry_patch(
    period: PeriodData,
    ref: PeriodRef,
    work_date: date,
    patch: EntryPatch,
    *,
    now: Optional[datetime] = None,
    calculator: Optional[HoursCalculator] = None,
) -> PeriodData:
    """Return a copy of `period` with the day at `work_date` updated.

    The input period is never modified; a locked period raises instead.
    """
    if period.is_locked:
        raise PeriodLockedError(f"Period {ref.key} is {period.status.value}; entries cannot be modified")
    if not ref.contains(work_date):
        raise ValidationError(f"{work_date.isoformat()} is outside period {ref.key}")

    key = work_date.isoformat()
    entry = compute_entry(period.entries.get(key), patch, work_date=work_date, calculator=calculator)

    entries = dict(period.entries)
    entries[key] = entry
    return replace(period, entries=entries, last_updated=now or now_utc())
