"""Request helpers shared by the JSON controllers."""

from __future__ import annotations

from dataclasses import dataclass
from functools import wraps
from typing import Optional

from flask import Flask, g, jsonify, request

from ..core.enums import Role
from ..core.exceptions import (
    AuthorizationError,
    DomainError,
    InvalidTransitionError,
    NotFoundError,
    PeriodLockedError,
    ValidationError,
)

ROLE_HEADER = "X-Role"
EMPLOYEE_HEADER = "X-Employee-Id"

ERROR_STATUS = (
    (ValidationError, 400),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (InvalidTransitionError, 409),
    (PeriodLockedError, 409),
)


@dataclass(frozen=True)
class Actor:
    role: Role
    employee_id: Optional[str] = None


def current_actor() -> Actor:
    """Role and employee id as declared by the caller's headers."""
    raw = (request.headers.get(ROLE_HEADER) or "").strip().lower()
    try:
        role = Role(raw)
    except ValueError:
        raise AuthorizationError(f"Missing or unknown {ROLE_HEADER} header")
    employee_id = (request.headers.get(EMPLOYEE_HEADER) or "").strip() or None
    if role == Role.STAFF and not employee_id:
        raise AuthorizationError(f"{EMPLOYEE_HEADER} is required for staff")
    return Actor(role=role, employee_id=employee_id)


def role_required(*roles: Role):
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            actor = current_actor()
            if roles and actor.role not in roles:
                raise AuthorizationError("Not allowed for role " + actor.role.value)
            g.actor = actor
            return view(*args, **kwargs)

        return wrapper

    return decorator


def require_self_or_admin(actor: Actor, employee_id: str) -> None:
    if actor.role == Role.STAFF and actor.employee_id != employee_id:
        raise AuthorizationError("Staff can only access their own timesheets")


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def status_for(error: DomainError) -> int:
    for error_type, status in ERROR_STATUS:
        if isinstance(error, error_type):
            return status
    return 400


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        return jsonify({"success": False, "error": type(e).__name__, "message": str(e)}), status_for(e)
