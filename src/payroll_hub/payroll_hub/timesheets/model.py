from __future__ import annotations

import calendar
from dataclasses import dataclass, field, fields
from datetime import date, datetime, time
from typing import Any, Iterator, Mapping, Optional

from ..common.datetime_utils import parse_clock
from ..common.validators import require_bool, require_non_negative
from ..core.constants import DEFAULT_LUNCH_BREAK_HOURS, FIRST_HALF_LAST_DAY
from ..core.enums import PayHalf, PeriodStatus
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class PeriodRef:
    """Address of a half-month pay period.

    `month` is 0-based (0 = January) so that keys match the links already
    handed out to staff: ``{year}-{month}-{half}``.
    """

    year: int
    month: int
    half: PayHalf

    def __post_init__(self):
        if not isinstance(self.year, int) or not 1 <= self.year <= 9999:
            raise ValidationError(f"Invalid year: {self.year!r}")
        if not isinstance(self.month, int) or not 0 <= self.month <= 11:
            raise ValidationError(f"Invalid month index (0-11): {self.month!r}")
        try:
            object.__setattr__(self, "half", PayHalf(self.half))
        except ValueError:
            raise ValidationError(f"Invalid half (1st/2nd): {self.half!r}")

    @property
    def key(self) -> str:
        return f"{self.year}-{self.month}-{self.half.value}"

    @classmethod
    def parse(cls, key: str) -> "PeriodRef":
        parts = (key or "").strip().split("-")
        if len(parts) != 3:
            raise ValidationError(f"Invalid period key: {key!r}")
        year_s, month_s, half_s = parts
        if not year_s.isdigit() or not month_s.isdigit():
            raise ValidationError(f"Invalid period key: {key!r}")
        return cls(int(year_s), int(month_s), half_s)

    @classmethod
    def for_date(cls, day: date) -> "PeriodRef":
        half = PayHalf.FIRST if day.day <= FIRST_HALF_LAST_DAY else PayHalf.SECOND
        return cls(day.year, day.month - 1, half)

    @classmethod
    def from_query(cls, params: Mapping[str, Any]) -> "PeriodRef":
        """Parse `year`, `month` (0-based) and `half` deep-link parameters."""
        try:
            year = int(params["year"])
            month = int(params["month"])
        except KeyError as e:
            raise ValidationError(f"Missing period parameter: {e.args[0]}")
        except (TypeError, ValueError):
            raise ValidationError("Period year/month must be integers")
        return cls(year, month, params.get("half") or PayHalf.FIRST.value)

    def to_query(self) -> dict[str, str]:
        return {"year": str(self.year), "month": str(self.month), "half": self.half.value}

    @property
    def first_day(self) -> date:
        day = 1 if self.half == PayHalf.FIRST else FIRST_HALF_LAST_DAY + 1
        return date(self.year, self.month + 1, day)

    @property
    def last_day(self) -> date:
        if self.half == PayHalf.FIRST:
            return date(self.year, self.month + 1, FIRST_HALF_LAST_DAY)
        return date(self.year, self.month + 1, calendar.monthrange(self.year, self.month + 1)[1])

    def dates(self) -> Iterator[date]:
        for d in range(self.first_day.day, self.last_day.day + 1):
            yield date(self.year, self.month + 1, d)

    def contains(self, day: date) -> bool:
        return self.first_day <= day <= self.last_day


@dataclass(frozen=True)
class TimeEntry:
    """One calendar day of one employee's period.

    `total_hours` is derived by the calculator and never set by callers.
    """

    date: date
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    lunch_break_hours: float = DEFAULT_LUNCH_BREAK_HOURS
    total_hours: float = 0.0
    notes: str = ""
    is_sick_day: bool = False

    @property
    def iso_date(self) -> str:
        return self.date.isoformat()


class _Unset:
    def __repr__(self) -> str:
        return "UNSET"


# Marks a patch field the caller did not touch.
UNSET: Any = _Unset()


@dataclass(frozen=True)
class EntryPatch:
    """Partial update of a TimeEntry.

    Only the fields listed here are editable; anything left as UNSET keeps the
    existing value. A clock field set to None or "" clears it. Values are
    checked on construction, so a patch is always valid once built.
    """

    start_time: Any = UNSET
    end_time: Any = UNSET
    lunch_break_hours: Any = UNSET
    notes: Any = UNSET
    is_sick_day: Any = UNSET

    def __post_init__(self):
        for name in ("start_time", "end_time"):
            value = getattr(self, name)
            if value is UNSET or value is None or isinstance(value, time):
                continue
            if not isinstance(value, str):
                raise ValidationError(f"{name} must be an HH:MM string")
            object.__setattr__(self, name, parse_clock(value))
        if self.lunch_break_hours is not UNSET:
            object.__setattr__(
                self, "lunch_break_hours", require_non_negative(self.lunch_break_hours, "lunch_break_hours")
            )
        if self.notes is not UNSET:
            if self.notes is not None and not isinstance(self.notes, str):
                raise ValidationError("notes must be text")
            object.__setattr__(self, "notes", self.notes or "")
        if self.is_sick_day is not UNSET:
            require_bool(self.is_sick_day, "is_sick_day")

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "EntryPatch":
        """Build a patch from raw (JSON/form) values."""
        if not isinstance(data, Mapping):
            raise ValidationError("Entry update must be an object")

        allowed = cls.field_names()
        unknown = sorted(k for k in data if k not in allowed)
        if unknown:
            raise ValidationError(f"Unknown or read-only entry fields: {', '.join(unknown)}")
        return cls(**data)

    def changes(self) -> dict[str, Any]:
        return {name: getattr(self, name) for name in self.field_names() if getattr(self, name) is not UNSET}


@dataclass(frozen=True)
class PeriodData:
    """One half-month for one employee."""

    status: PeriodStatus = PeriodStatus.DRAFT
    entries: Mapping[str, TimeEntry] = field(default_factory=dict)
    last_updated: Optional[datetime] = None

    @property
    def is_locked(self) -> bool:
        return self.status != PeriodStatus.DRAFT

    def entry_for(self, day: date) -> Optional[TimeEntry]:
        return self.entries.get(day.isoformat())


@dataclass(frozen=True)
class DayRow:
    """One line of a period grid: the date, its weekday and holiday name."""

    date: date
    day_name: str
    holiday_name: Optional[str] = None

    @property
    def is_holiday(self) -> bool:
        return self.holiday_name is not None
