from __future__ import annotations

import logging

from .base import HoursCalculator
from ...common.datetime_utils import minutes_of_day
from ...core.constants import SICK_DAY_HOURS
from ..model import TimeEntry

logger = logging.getLogger(__name__)


class StandardHoursCalculator(HoursCalculator):
    """Standard rule: (end - start) - lunch, not below 0; sick days are a flat 7.5h."""

    def total_hours(self, entry: TimeEntry) -> float:
        if entry.is_sick_day:
            return SICK_DAY_HOURS
        if not entry.start_time or not entry.end_time:
            return 0.0

        minutes = minutes_of_day(entry.end_time) - minutes_of_day(entry.start_time)
        if minutes < 0:
            logger.warning(
                "End time %s before start time %s on %s; counting 0 hours",
                entry.end_time.strftime("%H:%M"),
                entry.start_time.strftime("%H:%M"),
                entry.date.isoformat(),
            )
        return max(0.0, minutes / 60 - float(entry.lunch_break_hours or 0))
