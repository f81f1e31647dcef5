"""Period workflow (state machine).

    Draft --submit--> Submitted --approve--> Approved
      ^                   |                     |
      +------reject-------+                     |
      +------------------revoke-----------------+

There is no terminal state: an approval can be revoked. Entries are frozen
outside Draft (see entries.apply_entry_patch).
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import now_utc
from ..core.enums import AuditAction, PeriodCommand, PeriodStatus, Role
from ..core.exceptions import AuthorizationError, InvalidTransitionError
from .model import PeriodData


@dataclass(frozen=True)
class TransitionRule:
    command: PeriodCommand
    source: PeriodStatus
    target: PeriodStatus
    actor_role: Role
    audit_action: AuditAction


TRANSITIONS: dict[PeriodCommand, TransitionRule] = {
    rule.command: rule
    for rule in (
        TransitionRule(
            PeriodCommand.SUBMIT, PeriodStatus.DRAFT, PeriodStatus.SUBMITTED, Role.STAFF, AuditAction.TIMESHEET_SUBMITTED
        ),
        TransitionRule(
            PeriodCommand.APPROVE, PeriodStatus.SUBMITTED, PeriodStatus.APPROVED, Role.ADMIN, AuditAction.APPROVED_PERIOD
        ),
        TransitionRule(
            PeriodCommand.REJECT, PeriodStatus.SUBMITTED, PeriodStatus.DRAFT, Role.ADMIN, AuditAction.REJECTED_TO_DRAFT
        ),
        TransitionRule(
            PeriodCommand.REVOKE, PeriodStatus.APPROVED, PeriodStatus.DRAFT, Role.ADMIN, AuditAction.REVOKED_APPROVAL
        ),
    )
}


def allowed_commands(status: PeriodStatus) -> list[PeriodCommand]:
    return [rule.command for rule in TRANSITIONS.values() if rule.source == status]


def rule_for(source: PeriodStatus, target: PeriodStatus) -> TransitionRule:
    for rule in TRANSITIONS.values():
        if rule.source == source and rule.target == target:
            return rule
    raise InvalidTransitionError(f"Cannot move a period from {source.value} to {target.value}")


def transition(
    period: PeriodData,
    command: PeriodCommand,
    *,
    actor_role: Role,
    now: Optional[datetime] = None,
) -> tuple[PeriodData, TransitionRule]:
    """Apply `command` to `period`.

    Returns the new period (entries untouched, `last_updated` stamped) and the
    rule that fired, so the caller can write the matching audit entry.
    """
    try:
        rule = TRANSITIONS[PeriodCommand(command)]
    except (KeyError, ValueError):
        raise InvalidTransitionError(f"Unknown workflow command: {command!r}")
    if period.status != rule.source:
        raise InvalidTransitionError(
            f"Cannot {rule.command.value} a period in {period.status.value} (expected {rule.source.value})"
        )
    if actor_role != rule.actor_role:
        raise AuthorizationError(f"Only {rule.actor_role.value} may {rule.command.value} a period")

    return replace(period, status=rule.target, last_updated=now or now_utc()), rule


def transition_to(
    period: PeriodData,
    target: PeriodStatus,
    *,
    actor_role: Role,
    now: Optional[datetime] = None,
) -> tuple[PeriodData, TransitionRule]:
    try:
        target = PeriodStatus(target)
    except ValueError:
        raise InvalidTransitionError(f"Unknown period status: {target!r}")
    rule = rule_for(period.status, target)
    return transition(period, rule.command, actor_role=actor_role, now=now)
