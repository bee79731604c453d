"""
Pure rules for a project's ledger of PO amendments.

A project carries an ordered list of purchase orders, each valid over a date
window. Which one is "active" is derived from the dates: the persistence
service stores the answer in ``is_active`` but always recomputes it with
:func:`select_active_amendment` after a change.
"""

from datetime import date, timedelta
from typing import Any, Iterable, NamedTuple, Optional

from app.core.exceptions import ValidationError
from app.services.staffing.dates import is_active_on, to_calendar_date
from app.services.staffing.records import field_value


class AmendmentFields(NamedTuple):
    po_number: str
    start_date: date
    end_date: Optional[date]


def validate_amendment(po_number: Optional[str], start_date: Any, end_date: Any = None) -> AmendmentFields:
    """
    Validate and normalize the user-editable fields of an amendment.

    The end date, when present, must fall strictly after the start date; a
    window that opens and closes on the same day is rejected.
    """
    number = (po_number or "").strip()
    if not number:
        raise ValidationError("PO number is required", field="po_number")

    start = to_calendar_date(start_date)
    if start is None:
        raise ValidationError("Start date is required and must be a valid date", field="start_date")

    end = None
    if end_date is not None and not (isinstance(end_date, str) and not end_date.strip()):
        end = to_calendar_date(end_date)
        if end is None:
            raise ValidationError("End date must be a valid date", field="end_date")
        if end <= start:
            raise ValidationError("End date must be after start date", field="end_date")

    return AmendmentFields(number, start, end)


def suggest_next_start_date(amendments: Iterable[Any], today: date) -> date:
    """
    Advisory start date for a new amendment: the day after the latest end date.

    Falls back to ``today`` when no existing amendment has an end date. The
    ledger does not enforce non-overlap; this only helps avoid it.
    """
    end_dates = [
        parsed
        for parsed in (to_calendar_date(field_value(a, "end_date")) for a in amendments)
        if parsed is not None
    ]
    if not end_dates:
        return today
    return max(end_dates) + timedelta(days=1)


def eligible_amendments(amendments: Iterable[Any], today: date) -> list:
    """Amendments whose window contains ``today``, latest start first."""
    eligible = [
        a for a in amendments
        if is_active_on(today, field_value(a, "start_date"), field_value(a, "end_date"))
    ]
    eligible.sort(key=_recency_key, reverse=True)
    return eligible


def select_active_amendment(amendments: Iterable[Any], today: date) -> Optional[Any]:
    """
    The amendment that should be active on ``today``, or None.

    Overlapping windows are a data-entry anomaly rather than an error: the
    most recent start date wins, and equal starts fall back to the highest id.
    """
    eligible = eligible_amendments(amendments, today)
    return eligible[0] if eligible else None


def _recency_key(amendment: Any) -> tuple:
    start = to_calendar_date(field_value(amendment, "start_date")) or date.min
    identifier = field_value(amendment, "id")
    return (start, identifier if isinstance(identifier, int) else -1)
