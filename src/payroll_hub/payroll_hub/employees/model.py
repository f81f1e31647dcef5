from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

from ..timesheets.model import PeriodData


@dataclass(frozen=True)
class EmployeeRecord:
    """A staff member and their timesheets, keyed by period key.

    Records are never deleted; `is_active=False` hides them from the active
    roster while keeping their history.
    """

    id: str
    name: str
    is_active: bool = True
    periods: Mapping[str, PeriodData] = field(default_factory=dict)
