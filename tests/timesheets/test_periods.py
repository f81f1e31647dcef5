from __future__ import annotations

from datetime import date

import pytest

from src.payroll_hub.payroll_hub.common.links import build_share_link
from src.payroll_hub.payroll_hub.core.enums import PayHalf
from src.payroll_hub.payroll_hub.core.exceptions import ValidationError
from src.payroll_hub.payroll_hub.timesheets.days import period_days
from src.payroll_hub.payroll_hub.timesheets.model import PeriodRef


def test_key_uses_zero_based_month():
    assert PeriodRef(2026, 0, "1st").key == "2026-0-1st"
    assert PeriodRef.parse("2026-11-2nd") == PeriodRef(2026, 11, PayHalf.SECOND)


@pytest.mark.parametrize("key", ["", "2026-12-1st", "2026-0-3rd", "2026-0", "x-0-1st", "2026--1-1st"])
def test_parse_rejects_bad_keys(key):
    with pytest.raises(ValidationError):
        PeriodRef.parse(key)


def test_halves_split_on_the_15th():
    first = PeriodRef(2026, 1, "1st")
    second = PeriodRef(2026, 1, "2nd")

    assert (first.first_day, first.last_day) == (date(2026, 2, 1), date(2026, 2, 15))
    assert (second.first_day, second.last_day) == (date(2026, 2, 16), date(2026, 2, 28))
    assert PeriodRef(2028, 1, "2nd").last_day == date(2028, 2, 29)
    assert PeriodRef.for_date(date(2026, 2, 15)) == first
    assert PeriodRef.for_date(date(2026, 2, 16)) == second


def test_period_days_marks_holidays():
    rows = period_days(PeriodRef(2026, 1, "2nd"))

    assert len(rows) == 13
    assert rows[0].date == date(2026, 2, 16)
    assert rows[0].day_name == "Monday"
    assert rows[0].holiday_name == "Family Day"
    assert not rows[1].is_holiday


def test_share_link_round_trips_through_query():
    ref = PeriodRef(2026, 3, "2nd")
    url = build_share_link("https://hub.example.com/app?stale=1", "emp_001", ref)

    assert url == "https://hub.example.com/app?user=emp_001&year=2026&month=3&half=2nd"
    assert PeriodRef.from_query({"year": "2026", "month": "3", "half": "2nd"}) == ref


def test_share_link_without_period():
    assert build_share_link("https://hub.example.com", "emp_002") == "https://hub.example.com/?user=emp_002"


def test_from_query_defaults_to_first_half_and_validates():
    assert PeriodRef.from_query({"year": 2026, "month": 0}).half == PayHalf.FIRST

    with pytest.raises(ValidationError):
        PeriodRef.from_query({"year": "2026"})
    with pytest.raises(ValidationError):
        PeriodRef.from_query({"year": "2026", "month": "12"})
