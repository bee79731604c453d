from datetime import date
from typing import Any, List

from fastapi import APIRouter, Depends, status

from app.api.deps import get_assignment_service, get_employee_service, get_today
from app.schemas.assignment import AllocationSummary, AssignmentResponse
from app.schemas.common import OkResponse
from app.schemas.employee import EmployeeCreate, EmployeeDetailResponse, EmployeeResponse, EmployeeUpdate
from app.services.data import AssignmentService, EmployeeService, serialize_assignment

router = APIRouter()


@router.get("/", response_model=List[EmployeeResponse])
async def read_employees(
    skip: int = 0,
    limit: int = 100,
    service: EmployeeService = Depends(get_employee_service),
) -> Any:
    """
    Retrieve employees.
    """
    return await service.list_all(skip=skip, limit=limit)


@router.post("/", response_model=EmployeeResponse, status_code=status.HTTP_201_CREATED)
async def create_employee(
    payload: EmployeeCreate,
    service: EmployeeService = Depends(get_employee_service),
) -> Any:
    return await service.create(payload)


@router.get("/{employee_id}", response_model=EmployeeDetailResponse)
async def read_employee(
    employee_id: int,
    service: EmployeeService = Depends(get_employee_service),
) -> Any:
    """
    Get employee by ID, with assignments, derived billability and allocation headroom.
    """
    return await service.get_detail(employee_id)


@router.patch("/{employee_id}", response_model=EmployeeResponse)
async def update_employee(
    employee_id: int,
    payload: EmployeeUpdate,
    service: EmployeeService = Depends(get_employee_service),
) -> Any:
    return await service.update(employee_id, payload)


@router.delete("/{employee_id}", response_model=OkResponse)
async def delete_employee(
    employee_id: int,
    service: EmployeeService = Depends(get_employee_service),
) -> Any:
    await service.delete(employee_id)
    return OkResponse()


@router.get("/{employee_id}/assignments", response_model=List[AssignmentResponse])
async def read_employee_assignments(
    employee_id: int,
    service: AssignmentService = Depends(get_assignment_service),
    today: date = Depends(get_today),
) -> Any:
    assignments = await service.list_for_employee(employee_id)
    return [serialize_assignment(a, today) for a in assignments]


@router.get("/{employee_id}/allocation", response_model=AllocationSummary)
async def read_employee_allocation(
    employee_id: int,
    service: AssignmentService = Depends(get_assignment_service),
) -> Any:
    """Total and remaining allocation across the employee's assignments."""
    return await service.allocation_summary(employee_id)
