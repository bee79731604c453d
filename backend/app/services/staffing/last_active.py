"""Derivation of an employee's "last active" date from assignment and PO end dates."""

from datetime import date
from typing import Any, Iterable, Optional

from app.services.staffing.dates import to_calendar_date
from app.services.staffing.records import field_value


def latest_end_date(assignments: Iterable[Any]) -> Optional[date]:
    """
    Latest end date across the assignments and every PO amendment nested in them.

    Returns None when everything is ongoing or unset. Unreadable dates are skipped.
    """
    latest: Optional[date] = None
    for assignment in assignments:
        candidates = [field_value(assignment, "end_date", "endDate")]
        for amendment in field_value(assignment, "po_amendments", "poAmendments") or []:
            candidates.append(field_value(amendment, "end_date"))

        for candidate in candidates:
            parsed = to_calendar_date(candidate)
            if parsed is not None and (latest is None or parsed > latest):
                latest = parsed
    return latest


def resolve_last_active_date(assignments: Iterable[Any], manual_value: Any = None) -> Optional[date]:
    """The derived latest end date when one exists, else the manually entered value."""
    derived = latest_end_date(assignments)
    if derived is not None:
        return derived
    return to_calendar_date(manual_value)
