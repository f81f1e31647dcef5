from __future__ import annotations

from abc import ABC, abstractmethod

from ..model import TimeEntry


class HoursCalculator(ABC):
    """Calculator interface (Strategy Pattern for worked hours)."""

    @abstractmethod
    def total_hours(self, entry: TimeEntry) -> float:
        raise NotImplementedError
