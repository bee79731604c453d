"""
Assignment Service

Staffs employees on projects. Allocation checks always re-read the
employee's current assignments from the database before validating, so a
sequence of edits in one session never works from a stale total. The
employee's last-active date is refreshed after every change.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.models.assignment import EmployeeProject
from app.models.employee import Employee
from app.models.project import Project
from app.schemas.assignment import AssignmentCreate, AssignmentUpdate
from app.services.staffing import (
    derive_status,
    remaining_allocation,
    resolve_last_active_date,
    round_percentage,
    total_allocation,
    validate_edited_assignment,
    validate_new_assignment,
)
from app.services.utils.db_helpers import commit_or_conflict, get_or_raise

logger = logging.getLogger("staffing.assignments")


def serialize_assignment(assignment: EmployeeProject, today: date) -> dict:
    """Map an assignment row to the response shape, including derived billability."""
    billability = derive_status(assignment, today)
    return {
        "id": assignment.id,
        "employee_id": assignment.employee_id,
        "project_id": assignment.project_id,
        "project_name": assignment.project_name,
        "client": assignment.client,
        "allocation_percentage": assignment.allocation_percentage,
        "start_date": assignment.start_date,
        "end_date": assignment.end_date,
        "role_in_project": assignment.role_in_project,
        "po_number": assignment.po_number,
        "billing": assignment.billing,
        "rate": assignment.rate,
        "created_at": assignment.created_at,
        "po_amendments": assignment.po_amendments,
        "billability_status": billability.status,
        "is_billable_active": billability.is_active,
    }


def summarize_allocation(employee_id: int, assignments: List[EmployeeProject]) -> dict:
    total = total_allocation(assignments)
    return {
        "employee_id": employee_id,
        "total_allocation": total,
        "remaining_allocation": remaining_allocation(assignments),
        "over_allocated": total > Decimal(settings.MAX_TOTAL_ALLOCATION),
    }


class AssignmentService:
    """Employee-to-project links with allocation enforcement."""

    def __init__(self, db: AsyncSession, today: date):
        self.db = db
        self.today = today

    async def list_for_employee(self, employee_id: int) -> List[EmployeeProject]:
        await get_or_raise(self.db, Employee, employee_id, "Employee")
        return await self._assignments_for_employee(employee_id)

    async def list_for_project(self, project_id: int) -> List[EmployeeProject]:
        await get_or_raise(self.db, Project, project_id, "Project")
        result = await self.db.execute(
            select(EmployeeProject)
            .where(EmployeeProject.project_id == project_id)
            .order_by(EmployeeProject.created_at.desc())
        )
        return list(result.scalars().all())

    async def allocation_summary(self, employee_id: int) -> dict:
        assignments = await self.list_for_employee(employee_id)
        return summarize_allocation(employee_id, assignments)

    async def add(self, project_id: int, payload: AssignmentCreate) -> EmployeeProject:
        employee = await get_or_raise(self.db, Employee, payload.employee_id, "Employee")
        project = await get_or_raise(self.db, Project, project_id, "Project")

        if payload.end_date is not None and payload.end_date < payload.start_date:
            raise ValidationError("End date cannot be before start date", field="end_date")

        existing = await self._assignments_for_employee(employee.id)
        if any(a.project_id == project_id for a in existing):
            raise ConflictError("Employee is already assigned to this project")

        percentage = round_percentage(payload.allocation_percentage)
        new_total = validate_new_assignment(percentage, existing)

        assignment = EmployeeProject(
            employee_id=employee.id,
            project_id=project.id,
            allocation_percentage=percentage,
            start_date=payload.start_date,
            end_date=payload.end_date,
            role_in_project=payload.role_in_project,
            po_number=(payload.po_number or "").strip() or project.po_number,
            billing=payload.billing.value,
            rate=payload.rate,
        )
        self.db.add(assignment)
        await self.db.flush()

        await self._refresh_last_active(employee)
        await commit_or_conflict(self.db, "Assignment violates constraints")

        logger.info(
            f"Assigned employee {employee.id} to project {project.id} at {percentage}% "
            f"(total now {new_total}%)"
        )
        return await self._reload(assignment.id)

    async def update(self, employee_id: int, project_id: int, payload: AssignmentUpdate) -> EmployeeProject:
        assignment = await self._get_link(employee_id, project_id)
        data = payload.model_dump(exclude_unset=True)

        if data.get("allocation_percentage") is not None:
            percentage = round_percentage(data["allocation_percentage"])
            all_assignments = await self._assignments_for_employee(employee_id)
            validate_edited_assignment(assignment.id, percentage, all_assignments)
            data["allocation_percentage"] = percentage
        else:
            data.pop("allocation_percentage", None)

        if "start_date" in data and data["start_date"] is None:
            raise ValidationError("Start date is required", field="start_date")
        start = data.get("start_date", assignment.start_date)
        end = data.get("end_date", assignment.end_date)
        if end is not None and end < start:
            raise ValidationError("End date cannot be before start date", field="end_date")

        if data.get("billing") is not None:
            data["billing"] = data["billing"].value
        else:
            data.pop("billing", None)
        if "rate" in data and data["rate"] is None:
            data.pop("rate")

        for key, value in data.items():
            setattr(assignment, key, value)
        self.db.add(assignment)
        await self.db.flush()

        employee = await get_or_raise(self.db, Employee, employee_id, "Employee")
        await self._refresh_last_active(employee)
        await commit_or_conflict(self.db, "Assignment update violates constraints")

        logger.info(f"Updated assignment of employee {employee_id} on project {project_id}: {sorted(data)}")
        return await self._reload(assignment.id)

    async def remove(self, employee_id: int, project_id: int) -> None:
        assignment = await self._get_link(employee_id, project_id)
        await self.db.delete(assignment)
        await self.db.flush()

        employee = await get_or_raise(self.db, Employee, employee_id, "Employee")
        # With no end dates left the stored date is kept as is, even when it
        # was derived from the link just removed.
        await self._refresh_last_active(employee)
        await self.db.commit()
        logger.info(f"Removed employee {employee_id} from project {project_id}")

    async def _get_link(self, employee_id: int, project_id: int) -> EmployeeProject:
        result = await self.db.execute(
            select(EmployeeProject).where(
                EmployeeProject.employee_id == employee_id,
                EmployeeProject.project_id == project_id,
            )
        )
        assignment = result.scalar_one_or_none()
        if assignment is None:
            raise NotFoundError("Employee is not assigned to this project")
        return assignment

    async def _assignments_for_employee(self, employee_id: int) -> List[EmployeeProject]:
        result = await self.db.execute(
            select(EmployeeProject)
            .where(EmployeeProject.employee_id == employee_id)
            .order_by(EmployeeProject.start_date.asc(), EmployeeProject.id.asc())
        )
        return list(result.scalars().all())

    async def _reload(self, assignment_id: int) -> EmployeeProject:
        result = await self.db.execute(select(EmployeeProject).where(EmployeeProject.id == assignment_id))
        return result.scalar_one()

    async def _refresh_last_active(self, employee: Employee) -> Optional[date]:
        assignments = await self._assignments_for_employee(employee.id)
        employee.last_active_date = resolve_last_active_date(assignments, employee.last_active_date)
        self.db.add(employee)
        return employee.last_active_date
