"""Example: drive the service layer directly (no Flask, in-memory state)."""

from datetime import date

from src.payroll_hub.payroll_hub.container import build_container
from src.payroll_hub.payroll_hub.core.enums import Role
from src.payroll_hub.payroll_hub.timesheets.model import EntryPatch, PeriodRef


def main():
    container = build_container(storage_backend="memory")
    timesheets = container.timesheet_service
    ref = PeriodRef(2026, 0, "1st")

    for day, start, end, lunch in ((5, "08:30", "16:30", 0.5), (6, "09:00", "12:00", 0)):
        timesheets.update_entry(
            current_role=Role.STAFF,
            acting_employee_id="emp_001",
            employee_id="emp_001",
            ref=ref,
            work_date=date(2026, 1, day),
            patch=EntryPatch.from_mapping({"start_time": start, "end_time": end, "lunch_break_hours": lunch}),
        )

    timesheets.submit(current_role=Role.STAFF, acting_employee_id="emp_001", employee_id="emp_001", ref=ref)
    timesheets.approve(current_role=Role.ADMIN, employee_id="emp_001", ref=ref)

    print(timesheets.get_totals("emp_001", ref))
    for entry in container.payroll_report_service.list_audit():
        print(entry.timestamp.isoformat(), entry.actor_type.value, entry.subject_name, entry.action, entry.details)


if __name__ == "__main__":
    main()
