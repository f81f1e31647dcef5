from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..core.enums import Role


@dataclass(frozen=True)
class AuditLogEntry:
    """Immutable fact about an action. Never edited once written."""

    id: str
    timestamp: datetime
    actor_type: Role
    subject_name: str
    action: str
    details: str
