"""JSON documents <-> PayrollState.

The document layout keeps the field names of the browser payload the hub
started with (``empId``, ``lunchBreak``, ``type: staff_action`` ...), so
exported state from the old app can be restored as-is.
"""

from __future__ import annotations

import json
import logging
from dataclasses import replace
from typing import Any, Optional

from ..audit.model import AuditLogEntry
from ..common.datetime_utils import format_clock, format_timestamp, parse_clock, parse_iso_date, parse_timestamp
from ..common.validators import require_bool, require_non_negative
from ..core.constants import DEFAULT_LUNCH_BREAK_HOURS
from ..core.enums import PeriodStatus, Role
from ..core.exceptions import DomainError
from ..employees.model import EmployeeRecord
from ..timesheets.calculator.standard_calculator import StandardHoursCalculator
from ..timesheets.model import PeriodData, PeriodRef, TimeEntry
from .model import PayrollState, seed_state

logger = logging.getLogger(__name__)

_calculator = StandardHoursCalculator()

_ACTOR_TO_TYPE = {Role.STAFF: "staff_action", Role.ADMIN: "admin_action"}
_TYPE_TO_ACTOR = {v: k for k, v in _ACTOR_TO_TYPE.items()}


class StateDecodeError(ValueError):
    """Raised when a persisted document cannot be turned back into state."""


# ---- encode ----

def encode_entry(entry: TimeEntry) -> dict[str, Any]:
    return {
        "date": entry.iso_date,
        "startTime": format_clock(entry.start_time),
        "endTime": format_clock(entry.end_time),
        "lunchBreak": entry.lunch_break_hours,
        "totalHours": entry.total_hours,
        "notes": entry.notes,
        "isSickDay": entry.is_sick_day,
    }


def encode_period(period: PeriodData) -> dict[str, Any]:
    return {
        "status": period.status.value,
        "entries": {key: encode_entry(e) for key, e in sorted(period.entries.items())},
        "lastUpdated": format_timestamp(period.last_updated),
    }


def encode_employees(state: PayrollState) -> dict[str, Any]:
    return {
        emp.id: {
            "empId": emp.id,
            "empName": emp.name,
            "isActive": emp.is_active,
            "periods": {key: encode_period(p) for key, p in emp.periods.items()},
        }
        for emp in state.employees.values()
    }


def encode_audit_log(state: PayrollState) -> list[dict[str, Any]]:
    return [
        {
            "id": e.id,
            "timestamp": format_timestamp(e.timestamp),
            "type": _ACTOR_TO_TYPE[e.actor_type],
            "empName": e.subject_name,
            "action": e.action,
            "details": e.details,
        }
        for e in state.audit_log
    ]


# ---- decode ----

def decode_entry(key: str, raw: dict[str, Any]) -> TimeEntry:
    day = parse_iso_date(key)
    if raw.get("date") and parse_iso_date(raw["date"]) != day:
        raise StateDecodeError(f"Entry under {key} is dated {raw['date']}")
    entry = TimeEntry(
        date=day,
        start_time=parse_clock(raw.get("startTime")),
        end_time=parse_clock(raw.get("endTime")),
        lunch_break_hours=require_non_negative(raw.get("lunchBreak", DEFAULT_LUNCH_BREAK_HOURS), "lunchBreak"),
        notes=str(raw.get("notes") or ""),
        is_sick_day=require_bool(raw.get("isSickDay", False), "isSickDay"),
    )
    if entry.is_sick_day:
        entry = replace(entry, start_time=None, end_time=None)
    # Hours are derived; a stored total is never trusted.
    return replace(entry, total_hours=_calculator.total_hours(entry))


def decode_period(raw: dict[str, Any]) -> PeriodData:
    return PeriodData(
        status=PeriodStatus(raw.get("status") or PeriodStatus.DRAFT.value),
        entries={key: decode_entry(key, e) for key, e in (raw.get("entries") or {}).items()},
        last_updated=parse_timestamp(raw.get("lastUpdated")),
    )


def decode_employees(payload: Any) -> dict[str, EmployeeRecord]:
    if not isinstance(payload, dict):
        raise StateDecodeError("employees document must be an object")
    try:
        out: dict[str, EmployeeRecord] = {}
        for emp_id, raw in payload.items():
            periods = {}
            for key, p in (raw.get("periods") or {}).items():
                PeriodRef.parse(key)
                periods[key] = decode_period(p)
            out[emp_id] = EmployeeRecord(
                id=str(raw.get("empId") or emp_id),
                name=str(raw.get("empName") or ""),
                # Records written before deactivation existed have no flag.
                is_active=raw.get("isActive") is not False,
                periods=periods,
            )
        return out
    except (AttributeError, KeyError, TypeError, ValueError, DomainError) as e:
        raise StateDecodeError(f"Malformed employees document: {e}") from e


def decode_audit_log(payload: Any) -> tuple[AuditLogEntry, ...]:
    if not isinstance(payload, list):
        raise StateDecodeError("audit log document must be a list")
    try:
        return tuple(
            AuditLogEntry(
                id=str(raw["id"]),
                timestamp=parse_timestamp(raw["timestamp"]),
                actor_type=_TYPE_TO_ACTOR[raw["type"]],
                subject_name=str(raw.get("empName") or ""),
                action=str(raw.get("action") or ""),
                details=str(raw.get("details") or ""),
            )
            for raw in payload
        )
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise StateDecodeError(f"Malformed audit log document: {e}") from e


def state_from_documents(employees_json: Optional[str], audit_log_json: Optional[str]) -> PayrollState:
    """Restore state from the two persisted JSON documents.

    A missing or corrupt employees document falls back to the seed roster, a
    missing or corrupt log to an empty log. Never raises.
    """
    state = seed_state()

    if employees_json:
        try:
            state = PayrollState(employees=decode_employees(json.loads(employees_json)))
        except ValueError as e:  # JSONDecodeError, StateDecodeError
            logger.warning("Discarding unreadable employees state, using seed roster: %s", e)

    if audit_log_json:
        try:
            state = state.with_audit_log(decode_audit_log(json.loads(audit_log_json)))
        except ValueError as e:  # JSONDecodeError, StateDecodeError
            logger.warning("Discarding unreadable audit log: %s", e)

    return state


def state_to_documents(state: PayrollState) -> tuple[str, str]:
    return (
        json.dumps(encode_employees(state), ensure_ascii=False),
        json.dumps(encode_audit_log(state), ensure_ascii=False),
    )
