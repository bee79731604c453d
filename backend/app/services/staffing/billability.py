"""
Billable/Bench projection for assignments.

Recomputed on every read and never stored, so it cannot drift from the PO
ledger or the assignment dates it is derived from.
"""

from datetime import date
from typing import Any, Iterable, NamedTuple

from app.services.staffing.dates import is_active_on
from app.services.staffing.records import field_value

BILLABLE = "Billable"
BENCH = "Bench"


class BillabilityStatus(NamedTuple):
    status: str
    is_active: bool


def derive_status(assignment: Any, today: date) -> BillabilityStatus:
    """
    Billability of one assignment.

    An active amendment on the project's ledger wins outright. Without one,
    the assignment's own legacy PO number and dates decide. No PO at all
    means Bench.
    """
    amendments = field_value(assignment, "po_amendments", "poAmendments") or []
    if any(field_value(a, "is_active", default=False) for a in amendments):
        return BillabilityStatus(BILLABLE, True)

    po_number = (field_value(assignment, "po_number", "poNumber") or "").strip()
    start_date = field_value(assignment, "start_date", "startDate")
    if po_number and start_date:
        active = is_active_on(today, start_date, field_value(assignment, "end_date", "endDate"))
        return BillabilityStatus(BILLABLE if active else BENCH, active)

    return BillabilityStatus(BENCH, False)


def employee_billability(assignments: Iterable[Any], today: date) -> str:
    """Billable when at least one assignment is, otherwise Bench."""
    if any(derive_status(a, today).is_active for a in assignments):
        return BILLABLE
    return BENCH
