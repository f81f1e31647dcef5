from __future__ import annotations

from flask import Flask, g, jsonify

from ..common.datetime_utils import format_clock, format_timestamp, parse_iso_date
from ..common.http import json_body, require_self_or_admin, role_required
from ..container import Container
from ..core.enums import PeriodCommand, Role
from ..core.exceptions import InvalidTransitionError
from .aggregator import PeriodTotals
from .model import EntryPatch, PeriodData, PeriodRef, TimeEntry
from .workflow import allowed_commands

CURRENT_PERIOD = "current"


def entry_to_dict(entry: TimeEntry) -> dict:
    return {
        "date": entry.iso_date,
        "start_time": format_clock(entry.start_time) or None,
        "end_time": format_clock(entry.end_time) or None,
        "lunch_break_hours": entry.lunch_break_hours,
        "total_hours": entry.total_hours,
        "notes": entry.notes,
        "is_sick_day": entry.is_sick_day,
    }


def totals_to_dict(totals: PeriodTotals) -> dict:
    return {
        "total_hours": round(totals.total_hours, 2),
        "sick_days": totals.sick_day_count,
        "sick_hours": totals.sick_hours,
    }


def register(app: Flask, container: Container) -> None:
    timesheets = container.timesheet_service

    def _period_payload(employee_id: str, ref: PeriodRef, period: PeriodData) -> dict:
        return {
            "employee_id": employee_id,
            "period": ref.key,
            "status": period.status.value,
            "locked": period.is_locked,
            "last_updated": format_timestamp(period.last_updated) or None,
            "allowed_commands": [c.value for c in allowed_commands(period.status)],
            "days": [
                {
                    "date": row.date.isoformat(),
                    "day_name": row.day_name,
                    "is_holiday": row.is_holiday,
                    "holiday": row.holiday_name,
                    "entry": entry_to_dict(period.entry_for(row.date)) if period.entry_for(row.date) else None,
                }
                for row in timesheets.get_days(ref)
            ],
            "totals": totals_to_dict(timesheets.get_totals(employee_id, ref)),
        }

    @app.route("/api/employees/<employee_id>/periods/<period_key>", methods=["GET"], endpoint="api_period")
    @role_required()
    def api_period(employee_id: str, period_key: str):
        require_self_or_admin(g.actor, employee_id)
        # "current" opens the half-month containing today.
        ref = timesheets.current_period() if period_key == CURRENT_PERIOD else PeriodRef.parse(period_key)
        period = timesheets.get_period(employee_id, ref)
        return jsonify(_period_payload(employee_id, ref, period))

    @app.route(
        "/api/employees/<employee_id>/periods/<period_key>/entries/<day>",
        methods=["PUT"],
        endpoint="api_update_entry",
    )
    @role_required(Role.STAFF)
    def api_update_entry(employee_id: str, period_key: str, day: str):
        ref = PeriodRef.parse(period_key)
        entry = timesheets.update_entry(
            current_role=g.actor.role,
            acting_employee_id=g.actor.employee_id,
            employee_id=employee_id,
            ref=ref,
            work_date=parse_iso_date(day),
            patch=EntryPatch.from_mapping(json_body()),
        )
        return jsonify(
            {
                "success": True,
                "entry": entry_to_dict(entry),
                "totals": totals_to_dict(timesheets.get_totals(employee_id, ref)),
            }
        )

    @app.route(
        "/api/employees/<employee_id>/periods/<period_key>/<command>",
        methods=["POST"],
        endpoint="api_period_command",
    )
    @role_required()
    def api_period_command(employee_id: str, period_key: str, command: str):
        ref = PeriodRef.parse(period_key)
        try:
            command = PeriodCommand(command)
        except ValueError:
            raise InvalidTransitionError(f"Unknown period command: {command}")

        if command == PeriodCommand.SUBMIT:
            period = timesheets.submit(
                current_role=g.actor.role,
                acting_employee_id=g.actor.employee_id,
                employee_id=employee_id,
                ref=ref,
            )
        else:
            period = timesheets.apply_command(command, current_role=g.actor.role, employee_id=employee_id, ref=ref)

        return jsonify({"success": True, "period": ref.key, "status": period.status.value})

    @app.route("/api/employees/<employee_id>/periods/<period_key>/status", methods=["PUT"], endpoint="api_period_status")
    @role_required(Role.ADMIN)
    def api_period_status(employee_id: str, period_key: str):
        ref = PeriodRef.parse(period_key)
        period = timesheets.set_status(
            str(json_body().get("status") or ""),
            current_role=g.actor.role,
            employee_id=employee_id,
            ref=ref,
        )
        return jsonify({"success": True, "period": ref.key, "status": period.status.value})
