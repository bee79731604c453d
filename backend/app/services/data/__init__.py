# Data Services Package
# Persistence for employees, projects, assignments and PO amendments

from app.services.data.assignment_service import AssignmentService, serialize_assignment, summarize_allocation
from app.services.data.employee_service import EmployeeService
from app.services.data.po_amendment_service import POAmendmentService
from app.services.data import project_service

__all__ = [
    "AssignmentService",
    "EmployeeService",
    "POAmendmentService",
    "project_service",
    "serialize_assignment",
    "summarize_allocation",
]
