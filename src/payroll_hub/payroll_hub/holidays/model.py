from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True, order=True)
class Holiday:
    """A statutory holiday. Generated per year, never persisted."""

    date: date
    name: str

    @property
    def iso_date(self) -> str:
        return self.date.isoformat()
