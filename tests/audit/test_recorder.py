from __future__ import annotations

import itertools
from datetime import datetime, timezone

from src.payroll_hub.payroll_hub.audit.recorder import filter_log, new_log_id, record
from src.payroll_hub.payroll_hub.core.enums import AuditAction, Role

NOW = datetime(2026, 1, 20, 9, 0, tzinfo=timezone.utc)


def _counter_ids():
    counter = itertools.count(1)
    return lambda: f"log_{next(counter)}"


def test_record_prepends_and_returns_entry():
    log, first = record((), actor_type=Role.STAFF, subject_name="John Doe", action=AuditAction.TIMESHEET_SUBMITTED, details="Period: 2026-0-1st", now=NOW)
    log, second = record(log, actor_type=Role.ADMIN, subject_name="John Doe", action=AuditAction.APPROVED_PERIOD, details="Period: 2026-0-1st", now=NOW)

    assert log == (second, first)
    assert first.action == "Timesheet Submitted"
    assert second.actor_type == Role.ADMIN
    assert second.timestamp == NOW


def test_log_is_bounded_and_drops_oldest():
    ids = _counter_ids()
    log = ()
    for i in range(160):
        log, _ = record(log, actor_type=Role.STAFF, subject_name=f"emp {i}", action="x", details="", now=NOW, id_factory=ids)

    assert len(log) == 150
    assert log[0].id == "log_160"
    assert log[-1].id == "log_11"


def test_custom_limit():
    log = ()
    for _ in range(5):
        log, _ = record(log, actor_type=Role.ADMIN, subject_name="System", action="x", details="", limit=3)
    assert len(log) == 3


def test_ids_are_unique():
    assert len({new_log_id() for _ in range(200)}) == 200


def test_filter_by_actor_type():
    log, _ = record((), actor_type=Role.STAFF, subject_name="A", action="x", details="")
    log, _ = record(log, actor_type=Role.ADMIN, subject_name="B", action="y", details="")

    assert [e.subject_name for e in filter_log(log, Role.STAFF)] == ["A"]
    assert len(filter_log(log)) == 2
