from __future__ import annotations

import math
from dataclasses import dataclass

from ..core.constants import SICK_DAY_HOURS
from .model import PeriodData


@dataclass(frozen=True)
class PeriodTotals:
    total_hours: float
    sick_day_count: int
    sick_hours: float


def aggregate(period: PeriodData) -> PeriodTotals:
    """Sum a period's entries.

    fsum keeps the total exact regardless of the order entries were added.
    """
    entries = list(period.entries.values())
    total = math.fsum(e.total_hours or 0.0 for e in entries)
    sick_days = sum(1 for e in entries if e.is_sick_day)
    return PeriodTotals(
        total_hours=total,
        sick_day_count=sick_days,
        sick_hours=sick_days * SICK_DAY_HOURS,
    )
