from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .core.constants import AUDIT_LOG_LIMIT
from .database.connection import DBConfig, DatabaseConnection
from .employees.service import EmployeeService
from .payroll.service import PayrollReportService
from .state.memory_repository import InMemoryStateRepository
from .state.mysql_state_repository import MySQLStateRepository
from .state.repository import StateRepository
from .state.store import StateStore
from .timesheets.service import TimesheetService

logger = logging.getLogger(__name__)

STORAGE_BACKENDS = ("mysql", "memory")


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]
    state_repo: StateRepository
    store: StateStore

    timesheet_service: TimesheetService
    employee_service: EmployeeService
    payroll_report_service: PayrollReportService


def build_container(
    *,
    storage_backend: str = "mysql",
    db_config: Optional[dict] = None,
    audit_log_limit: int = AUDIT_LOG_LIMIT,
    state_repo: Optional[StateRepository] = None,
) -> Container:
    conn = None
    if state_repo is None:
        backend = (storage_backend or "mysql").strip().lower()
        if backend == "memory":
            state_repo = InMemoryStateRepository()
        elif backend == "mysql":
            config = DBConfig.from_mapping(db_config or {})
            conn = DatabaseConnection.get_instance(config)
            state_repo = MySQLStateRepository(conn)
            logger.info("Using MySQL state backend (%s)", config.describe())
        else:
            raise ValueError(f"STORAGE_BACKEND must be one of {STORAGE_BACKENDS}, got {storage_backend!r}")

    store = StateStore(state_repo)
    store.load()

    return Container(
        conn=conn,
        state_repo=state_repo,
        store=store,
        timesheet_service=TimesheetService(store, audit_limit=audit_log_limit),
        employee_service=EmployeeService(store, audit_limit=audit_log_limit),
        payroll_report_service=PayrollReportService(store),
    )
