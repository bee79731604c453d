"""
Staffing rules: date windows, PO amendment ledger, allocation accounting and
billability. Everything here is synchronous and side-effect free; callers
supply the records they read and the current date.
"""

from app.services.staffing.allocation import (
    remaining_allocation,
    round_percentage,
    total_allocation,
    validate_edited_assignment,
    validate_new_assignment,
)
from app.services.staffing.billability import (
    BENCH,
    BILLABLE,
    BillabilityStatus,
    derive_status,
    employee_billability,
)
from app.services.staffing.dates import is_active_on, to_calendar_date
from app.services.staffing.last_active import latest_end_date, resolve_last_active_date
from app.services.staffing.po_ledger import (
    AmendmentFields,
    eligible_amendments,
    select_active_amendment,
    suggest_next_start_date,
    validate_amendment,
)

__all__ = [
    "AmendmentFields",
    "BENCH",
    "BILLABLE",
    "BillabilityStatus",
    "derive_status",
    "eligible_amendments",
    "employee_billability",
    "is_active_on",
    "latest_end_date",
    "remaining_allocation",
    "resolve_last_active_date",
    "round_percentage",
    "select_active_amendment",
    "suggest_next_start_date",
    "to_calendar_date",
    "total_allocation",
    "validate_amendment",
    "validate_edited_assignment",
    "validate_new_assignment",
]
