from __future__ import annotations

from typing import Optional

from .codec import state_from_documents, state_to_documents
from .model import PayrollState
from .repository import StateRepository


class InMemoryStateRepository(StateRepository):
    """Keeps the serialized documents in memory (tests, local demos).

    State goes through the same JSON codec as the MySQL repository so that
    both backends restore identical objects.
    """

    def __init__(self, employees_json: Optional[str] = None, audit_log_json: Optional[str] = None):
        self.employees_json = employees_json
        self.audit_log_json = audit_log_json
        self.save_count = 0

    def load_state(self) -> Optional[PayrollState]:
        if self.employees_json is None and self.audit_log_json is None:
            return None
        return state_from_documents(self.employees_json, self.audit_log_json)

    def save_state(self, state: PayrollState) -> None:
        self.employees_json, self.audit_log_json = state_to_documents(state)
        self.save_count += 1
