from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .codec import state_from_documents, state_to_documents
from .model import PayrollState
from .repository import StateRepository

EMPLOYEES_KEY = "employees"
AUDIT_LOG_KEY = "audit_log"


class MySQLStateRepository(StateRepository):
    """Stores the roster and the audit log as two JSON documents in `app_state`."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def load_state(self) -> Optional[PayrollState]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT state_key, payload
                FROM app_state
                WHERE state_key IN (%s, %s)
                """,
                (EMPLOYEES_KEY, AUDIT_LOG_KEY),
            )
            docs = {r["state_key"]: r.get("payload") for r in fetchall(cur)}

        if not docs:
            return None
        return state_from_documents(docs.get(EMPLOYEES_KEY), docs.get(AUDIT_LOG_KEY))

    def save_state(self, state: PayrollState) -> None:
        employees_json, audit_log_json = state_to_documents(state)
        # One transaction for both documents.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(
                """
                INSERT INTO app_state(state_key, payload)
                VALUES(%s, %s)
                ON DUPLICATE KEY UPDATE payload=VALUES(payload), updated_at=CURRENT_TIMESTAMP
                """,
                [(EMPLOYEES_KEY, employees_json), (AUDIT_LOG_KEY, audit_log_json)],
            )
