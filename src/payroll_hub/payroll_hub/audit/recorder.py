"""Append-with-bound audit log.

The log is a tuple ordered newest first. Recording returns a new tuple; the
only way an entry ever leaves the log is by falling off the end once the
bound is exceeded.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import now_utc
from ..core.constants import AUDIT_LOG_LIMIT
from ..core.enums import Role
from .model import AuditLogEntry

AuditLog = tuple[AuditLogEntry, ...]


def new_log_id() -> str:
    return f"log_{uuid.uuid4().hex[:16]}"


def record(
    log: Sequence[AuditLogEntry],
    *,
    actor_type: Role,
    subject_name: str,
    action: str,
    details: str,
    now: Optional[datetime] = None,
    limit: int = AUDIT_LOG_LIMIT,
    id_factory: Callable[[], str] = new_log_id,
) -> tuple[AuditLog, AuditLogEntry]:
    entry = AuditLogEntry(
        id=id_factory(),
        timestamp=now or now_utc(),
        actor_type=Role(actor_type),
        subject_name=subject_name,
        action=str(getattr(action, "value", action)),
        details=details,
    )
    return (entry, *log)[: max(int(limit), 0)], entry


def filter_log(log: Sequence[AuditLogEntry], actor_type: Optional[Role] = None) -> list[AuditLogEntry]:
    if actor_type is None:
        return list(log)
    return [e for e in log if e.actor_type == actor_type]
