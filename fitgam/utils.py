# fitgam/utils.py
from datetime import date, datetime
from typing import Any, Optional


def utcnow() -> datetime:
    return datetime.utcnow()


def iso(dt: Optional[datetime]) -> Optional[str]:
    try:
        return dt.isoformat() if dt else None
    except Exception:
        return None


def calendar_day(value: Any) -> Optional[date]:
    """
    Calendar date of a stored timestamp.

    Accepts date/datetime objects or ISO strings ("2025-11-21" or
    "2025-11-21T10:05:00"). Anything unparseable gives None.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError:
            return None
    return None


def safe_int(v: Any, default: int = 0) -> int:
    try:
        return int(v)
    except (TypeError, ValueError):
        return default
