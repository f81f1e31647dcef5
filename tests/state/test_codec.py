from __future__ import annotations

import json
from datetime import date, datetime, time, timezone

import pytest

from src.payroll_hub.payroll_hub.audit.model import AuditLogEntry
from src.payroll_hub.payroll_hub.core.constants import SEED_ROSTER
from src.payroll_hub.payroll_hub.core.enums import PeriodStatus, Role
from src.payroll_hub.payroll_hub.employees.model import EmployeeRecord
from src.payroll_hub.payroll_hub.state.codec import state_from_documents, state_to_documents
from src.payroll_hub.payroll_hub.state.model import PayrollState, seed_state
from src.payroll_hub.payroll_hub.timesheets.model import PeriodData, TimeEntry

NOW = datetime(2026, 1, 20, 9, 0, tzinfo=timezone.utc)


def _state() -> PayrollState:
    entry = TimeEntry(date=date(2026, 1, 5), start_time=time(8, 30), end_time=time(16, 30), total_hours=7.5, notes="ok")
    period = PeriodData(status=PeriodStatus.SUBMITTED, entries={"2026-01-05": entry}, last_updated=NOW)
    emp = EmployeeRecord(id="emp_001", name="John Doe", periods={"2026-0-1st": period})
    log = (AuditLogEntry("log_1", NOW, Role.STAFF, "John Doe", "Timesheet Submitted", "Period: 2026-0-1st"),)
    return PayrollState(employees={"emp_001": emp}, audit_log=log)


def test_documents_use_browser_field_names():
    employees_json, audit_json = state_to_documents(_state())

    emp = json.loads(employees_json)["emp_001"]
    assert emp["empName"] == "John Doe"
    assert emp["isActive"] is True
    entry = emp["periods"]["2026-0-1st"]["entries"]["2026-01-05"]
    assert entry == {
        "date": "2026-01-05",
        "startTime": "08:30",
        "endTime": "16:30",
        "lunchBreak": 0.5,
        "totalHours": 7.5,
        "notes": "ok",
        "isSickDay": False,
    }
    assert json.loads(audit_json)[0]["type"] == "staff_action"


def test_documents_restore_the_same_state():
    state = _state()
    assert state_from_documents(*state_to_documents(state)) == state


def test_stored_totals_are_recomputed():
    payload = {
        "emp_001": {
            "empId": "emp_001",
            "empName": "John Doe",
            "periods": {
                "2026-0-1st": {
                    "status": "Draft",
                    "entries": {
                        "2026-01-06": {"date": "2026-01-06", "startTime": "09:00", "endTime": "12:00", "lunchBreak": 0, "totalHours": 99, "isSickDay": False}
                    },
                }
            },
        }
    }

    state = state_from_documents(json.dumps(payload), None)

    emp = state.get_employee("emp_001")
    assert emp.is_active is True
    assert emp.periods["2026-0-1st"].entries["2026-01-06"].total_hours == 3.0
    assert state.audit_log == ()


def test_corrupt_documents_fall_back(caplog):
    caplog.set_level("WARNING")

    state = state_from_documents("{not json", '[{"id": 1}]')

    assert [e.id for e in state.employees.values()] == [emp_id for emp_id, _ in SEED_ROSTER]
    assert state.audit_log == ()
    assert "seed roster" in caplog.text


def test_bad_period_key_falls_back_to_seed():
    payload = {"emp_009": {"empName": "X", "periods": {"2026-13-1st": {"status": "Draft"}}}}
    state = state_from_documents(json.dumps(payload), "[]")
    assert "emp_009" not in state.employees


def _one_entry_payload(key: str, entry: dict) -> str:
    return json.dumps(
        {
            "emp_001": {
                "empId": "emp_001",
                "empName": "John Doe",
                "periods": {"2026-0-1st": {"status": "Draft", "entries": {key: entry}}},
            }
        }
    )


@pytest.mark.parametrize(
    "key, entry",
    [
        ("2026-01-05", {"date": "2026-01-05", "startTime": "09:00", "endTime": "12:00", "isSickDay": "false"}),
        ("2026-01-06", {"date": "2026-01-06", "startTime": "09:00", "endTime": "12:00", "lunchBreak": -3}),
        ("2026-01-07", {"date": "2026-01-09", "startTime": "09:00", "endTime": "12:00", "lunchBreak": 0}),
    ],
)
def test_invalid_stored_entry_falls_back_to_seed(key, entry, caplog):
    caplog.set_level("WARNING")

    state = state_from_documents(_one_entry_payload(key, entry), None)

    assert state == seed_state()
    assert "seed roster" in caplog.text
