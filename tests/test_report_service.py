from __future__ import annotations

import csv
import io
from datetime import date

from src.payroll_hub.payroll_hub.core.enums import Role
from src.payroll_hub.payroll_hub.payroll.service import PayrollReportService
from src.payroll_hub.payroll_hub.state.memory_repository import InMemoryStateRepository
from src.payroll_hub.payroll_hub.state.store import StateStore
from src.payroll_hub.payroll_hub.timesheets.model import EntryPatch, PeriodRef
from src.payroll_hub.payroll_hub.timesheets.service import TimesheetService

REF = PeriodRef(2026, 0, "1st")


def _store_with_submission() -> StateStore:
    store = StateStore(InMemoryStateRepository())
    store.load()
    svc = TimesheetService(store)
    for day, data in ((5, {"start_time": "08:30", "end_time": "16:30"}), (6, {"is_sick_day": True})):
        svc.update_entry(
            current_role=Role.STAFF,
            acting_employee_id="emp_002",
            employee_id="emp_002",
            ref=REF,
            work_date=date(2026, 1, day),
            patch=EntryPatch.from_mapping(data),
        )
    svc.submit(current_role=Role.STAFF, acting_employee_id="emp_002", employee_id="emp_002", ref=REF)
    return store


def test_period_overview_rows_and_summary():
    report = PayrollReportService(_store_with_submission()).build_period_overview(REF)

    by_id = {r["employee_id"]: r for r in report.rows}
    assert set(by_id) == {"emp_001", "emp_002", "emp_003"}
    assert by_id["emp_002"]["status"] == "Submitted"
    assert by_id["emp_002"]["total_hours"] == 15.0
    assert by_id["emp_002"]["sick_days"] == 1
    assert by_id["emp_002"]["allowed_commands"] == ["approve", "reject"]
    assert by_id["emp_001"]["status"] == "Draft"
    assert by_id["emp_001"]["last_updated"] == ""

    assert report.summary["status_counts"] == {"Draft": 2, "Submitted": 1, "Approved": 0}
    assert report.summary["total_hours"] == 15.0


def test_export_csv_has_header_and_one_row_per_employee():
    text = PayrollReportService(_store_with_submission()).export_period_csv(REF)

    rows = list(csv.DictReader(io.StringIO(text)))
    assert len(rows) == 3
    assert "allowed_commands" not in rows[0]
    assert {r["employee_id"]: r["status"] for r in rows}["emp_002"] == "Submitted"


def test_list_audit_filters_and_limits():
    svc = PayrollReportService(_store_with_submission())

    assert [e.action for e in svc.list_audit(actor_type=Role.STAFF)] == ["Timesheet Submitted"]
    assert svc.list_audit(actor_type=Role.ADMIN) == []
    assert len(svc.list_audit(limit=0)) == 0
