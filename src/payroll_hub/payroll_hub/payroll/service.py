from __future__ import annotations

import csv
import io
import math
from dataclasses import dataclass
from typing import Optional

from ..audit.model import AuditLogEntry
from ..audit.recorder import filter_log
from ..common.datetime_utils import format_timestamp
from ..core.enums import PeriodStatus, Role
from ..state.store import StateStore
from ..timesheets.aggregator import aggregate
from ..timesheets.model import PeriodData, PeriodRef
from ..timesheets.workflow import allowed_commands

EXPORT_FIELDS = (
    "employee_id",
    "employee_name",
    "is_active",
    "period",
    "status",
    "total_hours",
    "sick_days",
    "last_updated",
)


@dataclass(frozen=True)
class ReportData:
    rows: list[dict]
    summary: dict


class PayrollReportService:
    """Admin views across the whole roster for one period."""

    def __init__(self, store: StateStore):
        self._store = store

    def build_period_overview(self, ref: PeriodRef, *, include_inactive: bool = True) -> ReportData:
        state = self._store.snapshot()

        rows: list[dict] = []
        counts = {status.value: 0 for status in PeriodStatus}
        hours: list[float] = []

        for emp in state.employees.values():
            if not emp.is_active and not include_inactive:
                continue
            period = emp.periods.get(ref.key) or PeriodData()
            totals = aggregate(period)

            rows.append(
                {
                    "employee_id": emp.id,
                    "employee_name": emp.name,
                    "is_active": emp.is_active,
                    "period": ref.key,
                    "status": period.status.value,
                    "total_hours": round(totals.total_hours, 2),
                    "sick_days": totals.sick_day_count,
                    "last_updated": format_timestamp(period.last_updated),
                    "allowed_commands": [c.value for c in allowed_commands(period.status)],
                }
            )
            counts[period.status.value] += 1
            hours.append(totals.total_hours)

        summary = {
            "period": ref.key,
            "employees": len(rows),
            "status_counts": counts,
            "total_hours": round(math.fsum(hours), 2),
        }
        return ReportData(rows=rows, summary=summary)

    def export_period_csv(self, ref: PeriodRef) -> str:
        report = self.build_period_overview(ref)
        buf = io.StringIO()
        writer = csv.DictWriter(buf, fieldnames=list(EXPORT_FIELDS), extrasaction="ignore")
        writer.writeheader()
        for r in report.rows:
            writer.writerow(r)
        return buf.getvalue()

    def list_audit(self, *, actor_type: Optional[Role] = None, limit: Optional[int] = None) -> list[AuditLogEntry]:
        entries = filter_log(self._store.snapshot().audit_log, actor_type)
        return entries if limit is None else entries[: max(int(limit), 0)]
