from __future__ import annotations

from datetime import date, datetime
from typing import Optional


def parse_iso_date(value) -> Optional[date]:
    """
    Parse a calendar date.

    - None / "" -> None
    - date -> returned as-is
    - datetime -> its date part
    - "YYYY-MM-DD" (or a full ISO-8601 datetime string) -> date

    Raises ValueError for anything else.
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        return value.date()

    if isinstance(value, date):
        return value

    if isinstance(value, str):
        s = value.strip()
        if not s:
            return None
        if len(s) > 10:
            # Accept trailing Z on full datetimes
            if s.endswith("Z"):
                s = s[:-1] + "+00:00"
            return datetime.fromisoformat(s).date()
        return date.fromisoformat(s)

    raise ValueError(f"invalid date: {value!r}")


def to_iso_date(value: Optional[date]) -> Optional[str]:
    """Serializes a date as YYYY-MM-DD."""
    if value is None:
        return None
    return value.isoformat()
