from __future__ import annotations

from typing import Optional, Protocol

from .model import PayrollState


class StateRepository(Protocol):
    def load_state(self) -> Optional[PayrollState]:
        """Return the persisted state, or None when nothing was saved yet."""

        raise NotImplementedError

    def save_state(self, state: PayrollState) -> None:
        raise NotImplementedError
