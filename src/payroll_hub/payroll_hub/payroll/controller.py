from __future__ import annotations

from flask import Flask, jsonify, request

from ..audit.model import AuditLogEntry
from ..common.datetime_utils import format_timestamp
from ..common.http import role_required
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..timesheets.model import PeriodRef

_AUDIT_TYPES = {"staff": Role.STAFF, "admin": Role.ADMIN}


def audit_to_dict(entry: AuditLogEntry) -> dict:
    return {
        "id": entry.id,
        "timestamp": format_timestamp(entry.timestamp),
        "type": f"{entry.actor_type.value}_action",
        "subject": entry.subject_name,
        "action": entry.action,
        "details": entry.details,
    }


def register(app: Flask, container: Container) -> None:
    reports = container.payroll_report_service

    @app.route("/api/periods/<period_key>/overview", methods=["GET"], endpoint="api_period_overview")
    @role_required(Role.ADMIN)
    def api_period_overview(period_key: str):
        report = reports.build_period_overview(PeriodRef.parse(period_key))
        return jsonify({"rows": report.rows, "summary": report.summary})

    @app.route("/api/periods/<period_key>/overview.csv", methods=["GET"], endpoint="api_period_overview_csv")
    @role_required(Role.ADMIN)
    def api_period_overview_csv(period_key: str):
        ref = PeriodRef.parse(period_key)
        csv_bytes = reports.export_period_csv(ref).encode("utf-8-sig")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename=timesheets_{ref.key}.csv"},
        )

    @app.route("/api/audit", methods=["GET"], endpoint="api_audit")
    @role_required(Role.ADMIN)
    def api_audit():
        type_s = (request.args.get("type") or "").strip().lower()
        if type_s and type_s not in _AUDIT_TYPES:
            raise ValidationError("type must be staff or admin")
        try:
            limit = int(request.args["limit"]) if request.args.get("limit") else None
        except ValueError:
            raise ValidationError("limit must be an integer")
        entries = reports.list_audit(actor_type=_AUDIT_TYPES.get(type_s), limit=limit)
        return jsonify({"entries": [audit_to_dict(e) for e in entries]})
