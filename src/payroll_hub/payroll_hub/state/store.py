from __future__ import annotations

import logging
import threading
from typing import Callable, TypeVar

from .model import PayrollState, seed_state
from .repository import StateRepository

logger = logging.getLogger(__name__)

T = TypeVar("T")


class StateStore:
    """Owns the current PayrollState and its persistence.

    Every edit and status transition runs as one `commit` under a single lock:
    the change reads the latest state, so two racing transitions on a period
    cannot both succeed and edits to different periods are never lost.
    Readers take `snapshot()` and need no lock.
    """

    def __init__(self, repository: StateRepository):
        self._repository = repository
        self._state = seed_state()
        self._commit_lock = threading.Lock()

    def load(self) -> PayrollState:
        """Restore persisted state; seed (and save) the roster on first run."""
        state = self._repository.load_state()
        with self._commit_lock:
            if state is None:
                logger.info("No persisted state found; seeding initial roster")
                self._state = seed_state()
                self._repository.save_state(self._state)
            else:
                self._state = state
            logger.info(
                "State loaded: %d employees, %d audit entries",
                len(self._state.employees),
                len(self._state.audit_log),
            )
            return self._state

    def snapshot(self) -> PayrollState:
        return self._state

    def commit(self, change: Callable[[PayrollState], tuple[PayrollState, T]]) -> T:
        """Apply `change` to the latest state and persist the result.

        `change` is pure: it returns (new_state, result). If it raises, or the
        save fails, the current state is left as it was.
        """
        with self._commit_lock:
            new_state, result = change(self._state)
            self._repository.save_state(new_state)
            self._state = new_state
            return result

