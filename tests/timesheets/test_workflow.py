from __future__ import annotations

from datetime import date, datetime, time, timezone

import pytest

from src.payroll_hub.payroll_hub.core.enums import AuditAction, PeriodCommand, PeriodStatus, Role
from src.payroll_hub.payroll_hub.core.exceptions import AuthorizationError, InvalidTransitionError
from src.payroll_hub.payroll_hub.timesheets.model import PeriodData, TimeEntry
from src.payroll_hub.payroll_hub.timesheets.workflow import (
    TRANSITIONS,
    allowed_commands,
    transition,
    transition_to,
)

NOW = datetime(2026, 1, 20, 9, 0, tzinfo=timezone.utc)

ENTRIES = {
    "2026-01-05": TimeEntry(
        date=date(2026, 1, 5), start_time=time(8, 30), end_time=time(16, 30), total_hours=7.5
    )
}

ALLOWED = {
    (PeriodStatus.DRAFT, PeriodStatus.SUBMITTED),
    (PeriodStatus.SUBMITTED, PeriodStatus.APPROVED),
    (PeriodStatus.SUBMITTED, PeriodStatus.DRAFT),
    (PeriodStatus.APPROVED, PeriodStatus.DRAFT),
}


def _actor_for(source: PeriodStatus) -> Role:
    return Role.STAFF if source == PeriodStatus.DRAFT else Role.ADMIN


@pytest.mark.parametrize("source", list(PeriodStatus))
@pytest.mark.parametrize("target", list(PeriodStatus))
def test_only_table_transitions_are_reachable(source, target):
    period = PeriodData(status=source, entries=ENTRIES)

    if (source, target) in ALLOWED:
        updated, rule = transition_to(period, target, actor_role=_actor_for(source), now=NOW)
        assert updated.status == target
        assert updated.entries == ENTRIES
        assert updated.last_updated == NOW
        assert rule.source == source
    else:
        with pytest.raises(InvalidTransitionError):
            transition_to(period, target, actor_role=_actor_for(source), now=NOW)
        assert period.status == source


def test_commands_map_to_audit_actions():
    assert TRANSITIONS[PeriodCommand.SUBMIT].audit_action == AuditAction.TIMESHEET_SUBMITTED
    assert TRANSITIONS[PeriodCommand.APPROVE].audit_action == AuditAction.APPROVED_PERIOD
    assert TRANSITIONS[PeriodCommand.REJECT].audit_action == AuditAction.REJECTED_TO_DRAFT
    assert TRANSITIONS[PeriodCommand.REVOKE].audit_action == AuditAction.REVOKED_APPROVAL


def test_allowed_commands_per_status():
    assert allowed_commands(PeriodStatus.DRAFT) == [PeriodCommand.SUBMIT]
    assert set(allowed_commands(PeriodStatus.SUBMITTED)) == {PeriodCommand.APPROVE, PeriodCommand.REJECT}
    assert allowed_commands(PeriodStatus.APPROVED) == [PeriodCommand.REVOKE]


def test_admin_cannot_submit_and_staff_cannot_approve():
    with pytest.raises(AuthorizationError):
        transition(PeriodData(), PeriodCommand.SUBMIT, actor_role=Role.ADMIN)

    with pytest.raises(AuthorizationError):
        transition(PeriodData(status=PeriodStatus.SUBMITTED), PeriodCommand.APPROVE, actor_role=Role.STAFF)


def test_wrong_source_reported_before_role():
    with pytest.raises(InvalidTransitionError):
        transition(PeriodData(status=PeriodStatus.APPROVED), "approve", actor_role=Role.ADMIN)


@pytest.mark.parametrize("bad", ["archive", "", None])
def test_unknown_command_or_status(bad):
    with pytest.raises(InvalidTransitionError):
        transition(PeriodData(), bad, actor_role=Role.STAFF)
    with pytest.raises(InvalidTransitionError):
        transition_to(PeriodData(), bad, actor_role=Role.STAFF)
