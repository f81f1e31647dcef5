from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Mapping, Optional

from ..audit.model import AuditLogEntry
from ..core.constants import SEED_ROSTER
from ..core.exceptions import EmployeeNotFoundError
from ..employees.model import EmployeeRecord
from ..timesheets.model import PeriodData


@dataclass(frozen=True)
class PayrollState:
    """Everything the engine knows: the roster and the audit log.

    Operations never mutate a state; they return a new one.
    """

    employees: Mapping[str, EmployeeRecord] = field(default_factory=dict)
    audit_log: tuple[AuditLogEntry, ...] = ()

    def get_employee(self, employee_id: str) -> EmployeeRecord:
        emp = self.employees.get(employee_id)
        if emp is None:
            raise EmployeeNotFoundError(f"Employee not found: {employee_id}")
        return emp

    def find_period(self, employee_id: str, period_key: str) -> Optional[PeriodData]:
        return self.get_employee(employee_id).periods.get(period_key)

    def with_employee(self, employee: EmployeeRecord) -> "PayrollState":
        employees = dict(self.employees)
        employees[employee.id] = employee
        return replace(self, employees=employees)

    def with_period(self, employee_id: str, period_key: str, period: PeriodData) -> "PayrollState":
        emp = self.get_employee(employee_id)
        periods = dict(emp.periods)
        periods[period_key] = period
        return self.with_employee(replace(emp, periods=periods))

    def with_audit_log(self, audit_log: tuple[AuditLogEntry, ...]) -> "PayrollState":
        return replace(self, audit_log=tuple(audit_log))


def seed_state() -> PayrollState:
    """Initial roster used when nothing has been persisted yet."""
    return PayrollState(
        employees={emp_id: EmployeeRecord(id=emp_id, name=name) for emp_id, name in SEED_ROSTER},
    )
