from __future__ import annotations

from datetime import date, datetime, time, timezone
from typing import Optional

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime((value or "").strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"Invalid date (YYYY-MM-DD): {value!r}")


def parse_clock(value: Optional[str]) -> Optional[time]:
    """Parse an HH:MM (24h) clock value; empty means "no time"."""
    v = (value or "").strip()
    if not v:
        return None
    try:
        return datetime.strptime(v, "%H:%M").time()
    except ValueError:
        raise ValidationError(f"Invalid time (HH:MM): {value!r}")


def format_clock(value: Optional[time]) -> str:
    return value.strftime("%H:%M") if value else ""


def minutes_of_day(value: time) -> int:
    return value.hour * 60 + value.minute


def now_utc() -> datetime:
    """Current UTC time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(timezone.utc)


def format_timestamp(value: Optional[datetime]) -> str:
    return value.isoformat() if value else ""


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    v = (value or "").strip()
    if not v:
        return None
    # Browsers write a trailing "Z" (Date.toISOString()).
    if v.endswith("Z"):
        v = v[:-1] + "+00:00"
    return datetime.fromisoformat(v)
