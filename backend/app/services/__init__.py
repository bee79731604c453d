# Services Package
# Re-exports of the staffing rule engine and the persistence services built on it

# Staffing rules (pure, synchronous)
from app.services.staffing import (
    derive_status,
    employee_billability,
    is_active_on,
    remaining_allocation,
    resolve_last_active_date,
    select_active_amendment,
    total_allocation,
    validate_amendment,
    validate_edited_assignment,
    validate_new_assignment,
)

# Persistence services
from app.services.data import (
    AssignmentService,
    EmployeeService,
    POAmendmentService,
    project_service,
)

__all__ = [
    "AssignmentService",
    "EmployeeService",
    "POAmendmentService",
    "derive_status",
    "employee_billability",
    "is_active_on",
    "project_service",
    "remaining_allocation",
    "resolve_last_active_date",
    "select_active_amendment",
    "total_allocation",
    "validate_amendment",
    "validate_edited_assignment",
    "validate_new_assignment",
]
