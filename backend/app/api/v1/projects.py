from datetime import date
from typing import Any, List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_assignment_service, get_db, get_today
from app.schemas.assignment import AssignmentCreate, AssignmentResponse, AssignmentUpdate
from app.schemas.common import OkResponse
from app.schemas.project import ProjectCreate, ProjectResponse, ProjectStatus, ProjectUpdate
from app.services.data import AssignmentService, project_service, serialize_assignment

router = APIRouter()


@router.get("/projects", response_model=List[ProjectResponse])
async def list_projects(
    client: Optional[str] = None,
    project_status: Optional[ProjectStatus] = Query(None, alias="status"),
    db: AsyncSession = Depends(get_db),
) -> Any:
    """List projects, optionally filtered by client and status."""
    return await project_service.list_projects(
        db, client=client, status=project_status.value if project_status else None
    )


@router.get("/projects/clients", response_model=List[str])
async def list_clients(
    db: AsyncSession = Depends(get_db),
) -> Any:
    """Distinct client names, for filtering the project list."""
    return await project_service.list_clients(db)


@router.post("/projects", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
async def create_project(
    payload: ProjectCreate,
    db: AsyncSession = Depends(get_db),
) -> Any:
    return await project_service.create_project(db, payload)


@router.get("/projects/{project_id}", response_model=ProjectResponse)
async def get_project(
    project_id: int,
    db: AsyncSession = Depends(get_db),
) -> Any:
    """Fetch a single project by id."""
    return await project_service.get_project(db, project_id)


@router.patch("/projects/{project_id}", response_model=ProjectResponse)
async def update_project(
    project_id: int,
    payload: ProjectUpdate,
    db: AsyncSession = Depends(get_db),
) -> Any:
    return await project_service.update_project(db, project_id, payload)


@router.delete("/projects/{project_id}", response_model=OkResponse)
async def delete_project(
    project_id: int,
    db: AsyncSession = Depends(get_db),
) -> Any:
    await project_service.delete_project(db, project_id)
    return OkResponse()


@router.get("/projects/{project_id}/employees", response_model=List[AssignmentResponse])
async def list_project_employees(
    project_id: int,
    service: AssignmentService = Depends(get_assignment_service),
    today: date = Depends(get_today),
) -> Any:
    """Project roster with each member's allocation and derived billability."""
    assignments = await service.list_for_project(project_id)
    return [serialize_assignment(a, today) for a in assignments]


@router.post(
    "/projects/{project_id}/employees",
    response_model=AssignmentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_project_employee(
    project_id: int,
    payload: AssignmentCreate,
    service: AssignmentService = Depends(get_assignment_service),
    today: date = Depends(get_today),
) -> Any:
    """Staff an employee on the project; rejected if their total allocation would pass the cap."""
    assignment = await service.add(project_id, payload)
    return serialize_assignment(assignment, today)


@router.put("/projects/{project_id}/employees/{employee_id}", response_model=AssignmentResponse)
async def update_project_employee(
    project_id: int,
    employee_id: int,
    payload: AssignmentUpdate,
    service: AssignmentService = Depends(get_assignment_service),
    today: date = Depends(get_today),
) -> Any:
    assignment = await service.update(employee_id, project_id, payload)
    return serialize_assignment(assignment, today)


@router.delete("/projects/{project_id}/employees/{employee_id}", response_model=OkResponse)
async def remove_project_employee(
    project_id: int,
    employee_id: int,
    service: AssignmentService = Depends(get_assignment_service),
) -> Any:
    await service.remove(employee_id, project_id)
    return OkResponse()
