from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from datetime import datetime
from typing import Optional

from ..audit.recorder import record
from ..common.links import build_share_link
from ..common.validators import require_non_empty
from ..core.constants import AUDIT_LOG_LIMIT
from ..core.enums import AuditAction, Role
from ..core.exceptions import AuthorizationError
from ..state.model import PayrollState
from ..state.store import StateStore
from ..timesheets.model import PeriodRef
from .model import EmployeeRecord

logger = logging.getLogger(__name__)

# Roster changes are not tied to one employee's timesheet.
ROSTER_SUBJECT = "System"


def new_employee_id(taken) -> str:
    while True:
        candidate = f"emp_{uuid.uuid4().hex[:5]}"
        if candidate not in taken:
            return candidate


class EmployeeService:
    """Use case: manage the staff roster (admin)."""

    def __init__(self, store: StateStore, *, audit_limit: int = AUDIT_LOG_LIMIT):
        self._store = store
        self._audit_limit = audit_limit

    def get(self, employee_id: str) -> EmployeeRecord:
        return self._store.snapshot().get_employee(employee_id)

    def list_roster(self) -> list[EmployeeRecord]:
        """Everyone, active first, then by name."""
        employees = self._store.snapshot().employees.values()
        return sorted(employees, key=lambda e: (not e.is_active, e.name.lower(), e.id))

    def list_active(self) -> list[EmployeeRecord]:
        return [e for e in self.list_roster() if e.is_active]

    def add_employee(self, *, current_role: Role, name: str, now: Optional[datetime] = None) -> EmployeeRecord:
        _require_admin(current_role)
        name = require_non_empty(name, "Employee name")

        def change(state: PayrollState) -> tuple[PayrollState, EmployeeRecord]:
            emp = EmployeeRecord(id=new_employee_id(state.employees), name=name)
            log, _ = record(
                state.audit_log,
                actor_type=Role.ADMIN,
                subject_name=ROSTER_SUBJECT,
                action=AuditAction.STAFF_ADDED,
                details=f"New employee: {name}",
                now=now,
                limit=self._audit_limit,
            )
            return state.with_employee(emp).with_audit_log(log), emp

        emp = self._store.commit(change)
        logger.info("Employee added: %s (%s)", emp.id, emp.name)
        return emp

    def toggle_active(self, *, current_role: Role, employee_id: str, now: Optional[datetime] = None) -> EmployeeRecord:
        """Deactivate an active employee or restore an inactive one.

        Timesheets are kept either way.
        """
        _require_admin(current_role)

        def change(state: PayrollState) -> tuple[PayrollState, EmployeeRecord]:
            emp = state.get_employee(employee_id)
            emp = replace(emp, is_active=not emp.is_active)
            action = AuditAction.STAFF_RESTORED if emp.is_active else AuditAction.STAFF_DEACTIVATED
            log, _ = record(
                state.audit_log,
                actor_type=Role.ADMIN,
                subject_name=emp.name,
                action=action,
                details=f"Status: {'Active' if emp.is_active else 'Inactive'}",
                now=now,
                limit=self._audit_limit,
            )
            return state.with_employee(emp).with_audit_log(log), emp

        emp = self._store.commit(change)
        logger.info("Employee %s is now %s", emp.id, "active" if emp.is_active else "inactive")
        return emp

    def share_link(self, base_url: str, employee_id: str, ref: Optional[PeriodRef] = None) -> str:
        """Deep link that opens an employee's sheet, optionally on one period.

        Inactive staff get no link.
        """
        if not self.get(employee_id).is_active:
            raise AuthorizationError(f"Employee {employee_id} is inactive; no share link")
        return build_share_link(base_url, employee_id, ref)


def _require_admin(current_role: Role) -> None:
    if current_role != Role.ADMIN:
        raise AuthorizationError("Only admins can manage the roster")
