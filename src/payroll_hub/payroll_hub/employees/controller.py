from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import json_body, role_required
from ..container import Container
from ..core.enums import Role
from ..timesheets.model import PeriodRef
from .model import EmployeeRecord


def employee_to_dict(emp: EmployeeRecord) -> dict:
    return {
        "id": emp.id,
        "name": emp.name,
        "is_active": emp.is_active,
        "periods": sorted(emp.periods),
    }


def register(app: Flask, container: Container) -> None:
    employees = container.employee_service

    @app.route("/api/employees", methods=["GET"], endpoint="api_employees")
    @role_required()
    def api_employees():
        active_only = request.args.get("active") in {"1", "true", "yes"}
        roster = employees.list_active() if active_only else employees.list_roster()
        return jsonify({"employees": [employee_to_dict(e) for e in roster]})

    @app.route("/api/employees", methods=["POST"], endpoint="api_add_employee")
    @role_required(Role.ADMIN)
    def api_add_employee():
        emp = employees.add_employee(current_role=Role.ADMIN, name=str(json_body().get("name") or ""))
        return jsonify({"success": True, "employee": employee_to_dict(emp)}), 201

    @app.route("/api/employees/<employee_id>/toggle-active", methods=["POST"], endpoint="api_toggle_employee")
    @role_required(Role.ADMIN)
    def api_toggle_employee(employee_id: str):
        emp = employees.toggle_active(current_role=Role.ADMIN, employee_id=employee_id)
        return jsonify({"success": True, "employee": employee_to_dict(emp)})

    @app.route("/api/employees/<employee_id>/link", methods=["GET"], endpoint="api_share_link")
    @role_required(Role.ADMIN)
    def api_share_link(employee_id: str):
        ref = PeriodRef.from_query(request.args) if "year" in request.args else None
        base_url = app.config.get("PUBLIC_BASE_URL") or request.host_url
        return jsonify({"employee_id": employee_id, "url": employees.share_link(base_url, employee_id, ref)})
