from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Who is acting: a staff member on their own sheet, or a reviewer."""

    ADMIN = "admin"
    STAFF = "staff"


class PeriodStatus(str, Enum):
    """Lifecycle of one half-month timesheet."""

    DRAFT = "Draft"
    SUBMITTED = "Submitted"
    APPROVED = "Approved"


class PayHalf(str, Enum):
    FIRST = "1st"
    SECOND = "2nd"


class PeriodCommand(str, Enum):
    """Workflow commands a caller can request on a period."""

    SUBMIT = "submit"
    APPROVE = "approve"
    REJECT = "reject"
    REVOKE = "revoke"


class AuditAction(str, Enum):
    """Short labels written to the audit log."""

    TIMESHEET_SUBMITTED = "Timesheet Submitted"
    APPROVED_PERIOD = "Approved Period"
    REJECTED_TO_DRAFT = "Rejected to Draft"
    REVOKED_APPROVAL = "Revoked Approval"
    STAFF_ADDED = "Staff Added"
    STAFF_DEACTIVATED = "Staff Deactivated"
    STAFF_RESTORED = "Staff Restored"
