from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Callable, Optional

from ..audit.recorder import record
from ..core.constants import AUDIT_LOG_LIMIT
from ..common.datetime_utils import now_utc
from ..core.enums import PeriodCommand, PeriodStatus, Role
from ..core.exceptions import AuthorizationError, PeriodNotFoundError
from ..state.model import PayrollState
from ..state.store import StateStore
from .aggregator import PeriodTotals, aggregate
from .calculator.base import HoursCalculator
from .calculator.standard_calculator import StandardHoursCalculator
from .days import period_days
from .entries import apply_entry_patch
from .model import DayRow, EntryPatch, PeriodData, PeriodRef, TimeEntry
from .workflow import TransitionRule, transition, transition_to

logger = logging.getLogger(__name__)


class TimesheetService:
    """Use case: staff fill in a period, admins review it."""

    def __init__(
        self,
        store: StateStore,
        *,
        calculator: Optional[HoursCalculator] = None,
        audit_limit: int = AUDIT_LOG_LIMIT,
    ):
        self._store = store
        self._calculator = calculator or StandardHoursCalculator()
        self._audit_limit = audit_limit

    # ---- reads ----

    def get_period(self, employee_id: str, ref: PeriodRef) -> PeriodData:
        """Stored period, or a blank Draft if the employee never touched it."""
        return self._store.snapshot().find_period(employee_id, ref.key) or PeriodData()

    def get_totals(self, employee_id: str, ref: PeriodRef) -> PeriodTotals:
        return aggregate(self.get_period(employee_id, ref))

    def get_days(self, ref: PeriodRef) -> list[DayRow]:
        return period_days(ref)

    @staticmethod
    def current_period(now: Optional[datetime] = None) -> PeriodRef:
        return PeriodRef.for_date((now or now_utc()).date())

    # ---- staff ----

    def update_entry(
        self,
        *,
        current_role: Role,
        acting_employee_id: Optional[str],
        employee_id: str,
        ref: PeriodRef,
        work_date: date,
        patch: EntryPatch,
        now: Optional[datetime] = None,
    ) -> TimeEntry:
        self._require_staff_owner(current_role, acting_employee_id, employee_id, "edit")

        def change(state: PayrollState) -> tuple[PayrollState, TimeEntry]:
            self._require_active(state, employee_id)
            period = state.find_period(employee_id, ref.key) or PeriodData()
            updated = apply_entry_patch(period, ref, work_date, patch, now=now, calculator=self._calculator)
            return state.with_period(employee_id, ref.key, updated), updated.entries[work_date.isoformat()]

        entry = self._store.commit(change)

        logger.debug("Entry %s updated for %s (%.2fh)", entry.iso_date, employee_id, entry.total_hours)
        return entry

    def submit(
        self,
        *,
        current_role: Role,
        acting_employee_id: Optional[str],
        employee_id: str,
        ref: PeriodRef,
        now: Optional[datetime] = None,
    ) -> PeriodData:
        self._require_staff_owner(current_role, acting_employee_id, employee_id, "submit")
        return self.apply_command(
            PeriodCommand.SUBMIT, current_role=current_role, employee_id=employee_id, ref=ref, now=now
        )

    # ---- admin ----

    def approve(self, *, current_role: Role, employee_id: str, ref: PeriodRef, now: Optional[datetime] = None) -> PeriodData:
        return self.apply_command(PeriodCommand.APPROVE, current_role=current_role, employee_id=employee_id, ref=ref, now=now)

    def reject(self, *, current_role: Role, employee_id: str, ref: PeriodRef, now: Optional[datetime] = None) -> PeriodData:
        return self.apply_command(PeriodCommand.REJECT, current_role=current_role, employee_id=employee_id, ref=ref, now=now)

    def revoke(self, *, current_role: Role, employee_id: str, ref: PeriodRef, now: Optional[datetime] = None) -> PeriodData:
        return self.apply_command(PeriodCommand.REVOKE, current_role=current_role, employee_id=employee_id, ref=ref, now=now)

    def apply_command(
        self,
        command: PeriodCommand | str,
        *,
        current_role: Role,
        employee_id: str,
        ref: PeriodRef,
        now: Optional[datetime] = None,
    ) -> PeriodData:
        """Run one workflow command and record it in the audit log.

        The status change and its audit entry are committed together. Ownership
        of a submit is checked by `submit`; callers going through here directly
        only get the role check of the transition table.
        """
        return self._run_transition(
            lambda period: transition(period, command, actor_role=current_role, now=now),
            employee_id=employee_id,
            ref=ref,
            now=now,
        )

    def set_status(
        self,
        target: PeriodStatus | str,
        *,
        current_role: Role,
        employee_id: str,
        ref: PeriodRef,
        now: Optional[datetime] = None,
    ) -> PeriodData:
        """Move a period to `target` (the admin dashboard's status picker).

        The command is resolved from (current status, target); a pair outside
        the workflow raises InvalidTransitionError.
        """
        return self._run_transition(
            lambda period: transition_to(period, target, actor_role=current_role, now=now),
            employee_id=employee_id,
            ref=ref,
            now=now,
        )

    def _run_transition(
        self,
        step: Callable[[PeriodData], tuple[PeriodData, TransitionRule]],
        *,
        employee_id: str,
        ref: PeriodRef,
        now: Optional[datetime],
    ) -> PeriodData:
        def change(state: PayrollState) -> tuple[PayrollState, tuple[PeriodData, TransitionRule]]:
            emp = state.get_employee(employee_id)
            period = emp.periods.get(ref.key)
            if period is None:
                raise PeriodNotFoundError(f"No timesheet for {employee_id} in period {ref.key}")
            if period.status == PeriodStatus.DRAFT:
                self._require_active(state, employee_id)

            updated, rule = step(period)
            log, _ = record(
                state.audit_log,
                actor_type=rule.actor_role,
                subject_name=emp.name,
                action=rule.audit_action,
                details=f"Period: {ref.key}",
                now=now,
                limit=self._audit_limit,
            )
            new_state = state.with_period(employee_id, ref.key, updated).with_audit_log(log)
            return new_state, (updated, rule)

        # The period is read inside the commit lock, so two racing commands on
        # one period cannot both apply.
        updated, rule = self._store.commit(change)

        logger.info(
            "Period %s for %s: %s -> %s (%s)",
            ref.key, employee_id, rule.source.value, rule.target.value, rule.command.value,
        )
        return updated

    # ---- guards ----

    @staticmethod
    def _require_staff_owner(current_role: Role, acting_employee_id: Optional[str], employee_id: str, what: str) -> None:
        if current_role != Role.STAFF:
            raise AuthorizationError(f"Only staff may {what} a timesheet")
        if acting_employee_id != employee_id:
            raise AuthorizationError(f"Staff may only {what} their own timesheet")

    @staticmethod
    def _require_active(state: PayrollState, employee_id: str) -> None:
        if not state.get_employee(employee_id).is_active:
            raise AuthorizationError(f"Employee {employee_id} is inactive")
