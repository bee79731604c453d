"""
Calendar-date helpers for assignment and PO validity windows.

Values arrive as ``date``/``datetime`` objects from the ORM and as ISO strings
from request payloads or imported data. Everything is reduced to a plain
``date`` before comparison so same-day boundaries are inclusive. Bad input is
never an error here: it is treated as absent, which makes a window inactive.
"""

from datetime import date, datetime
from typing import Any, Optional


def to_calendar_date(value: Any) -> Optional[date]:
    """Normalize ``value`` to a ``date`` or return None if it is missing or unparsable."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def is_active_on(today: Any, start_date: Any, end_date: Any = None) -> bool:
    """
    Whether ``today`` falls inside the window starting at ``start_date``.

    Both ends are inclusive. A missing ``end_date`` means the window is open
    ended. A missing or unparsable ``start_date`` (or ``today``) is never
    active, and neither is an ``end_date`` that was given but cannot be read.
    """
    current = to_calendar_date(today)
    start = to_calendar_date(start_date)
    if current is None or start is None:
        return False

    if _is_blank(end_date):
        return start <= current

    end = to_calendar_date(end_date)
    if end is None:
        return False
    return start <= current <= end


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())
