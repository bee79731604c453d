"""
Employee Service

Employee records plus the read-side projections that hang off them:
derived billability per assignment and allocation headroom. The stored
``last_active_date`` is re-derived on every save from assignment and PO end
dates; a manually entered value only survives when no end date exists.
"""

import logging
from datetime import date
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.assignment import EmployeeProject
from app.models.employee import Employee
from app.schemas.employee import EmployeeCreate, EmployeeUpdate
from app.services.data.assignment_service import serialize_assignment, summarize_allocation
from app.services.staffing import employee_billability, resolve_last_active_date
from app.services.utils.db_helpers import commit_or_conflict, get_or_raise

logger = logging.getLogger("staffing.employees")


class EmployeeService:
    def __init__(self, db: AsyncSession, today: date):
        self.db = db
        self.today = today

    async def list_all(self, skip: int = 0, limit: int = 100) -> List[Employee]:
        result = await self.db.execute(
            select(Employee).order_by(Employee.id.asc()).offset(skip).limit(limit)
        )
        return list(result.scalars().all())

    async def get(self, employee_id: int) -> Employee:
        return await get_or_raise(self.db, Employee, employee_id, "Employee")

    async def create(self, payload: EmployeeCreate) -> Employee:
        employee = Employee(**payload.model_dump())
        self.db.add(employee)
        await commit_or_conflict(self.db, "Employee already exists or violates constraints")
        await self.db.refresh(employee)
        logger.info(f"Created employee {employee.id} ({employee.employee_code})")
        return employee

    async def update(self, employee_id: int, payload: EmployeeUpdate) -> Employee:
        employee = await self.get(employee_id)
        data = payload.model_dump(exclude_unset=True)
        for key, value in data.items():
            setattr(employee, key, value)

        await self._apply_last_active(employee)
        self.db.add(employee)
        await commit_or_conflict(self.db, "Employee update violates constraints")
        await self.db.refresh(employee)
        logger.info(f"Updated employee {employee_id}: {sorted(data)}")
        return employee

    async def delete(self, employee_id: int) -> None:
        employee = await self.get(employee_id)
        await self.db.delete(employee)
        await self.db.commit()
        logger.info(f"Deleted employee {employee_id}")

    async def get_detail(self, employee_id: int) -> dict:
        """Employee fields plus assignments with derived billability and allocation summary."""
        employee = await self.get(employee_id)
        assignments = await self._assignments(employee_id)
        return {
            "id": employee.id,
            "employee_code": employee.employee_code,
            "name": employee.name,
            "email": employee.email,
            "department": employee.department,
            "designation": employee.designation,
            "location": employee.location,
            "billability_status": employee.billability_status,
            "last_active_date": employee.last_active_date,
            "created_at": employee.created_at,
            "updated_at": employee.updated_at,
            "derived_billability": employee_billability(assignments, self.today),
            "assignments": [serialize_assignment(a, self.today) for a in assignments],
            "allocation": summarize_allocation(employee_id, assignments),
        }

    async def _assignments(self, employee_id: int) -> List[EmployeeProject]:
        result = await self.db.execute(
            select(EmployeeProject)
            .where(EmployeeProject.employee_id == employee_id)
            .order_by(EmployeeProject.start_date.asc(), EmployeeProject.id.asc())
        )
        return list(result.scalars().all())

    async def _apply_last_active(self, employee: Employee) -> None:
        assignments = await self._assignments(employee.id)
        employee.last_active_date = resolve_last_active_date(assignments, employee.last_active_date)
