import logging
from typing import List, Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ConflictError, ValidationError
from app.models.project import Project
from app.schemas.project import ProjectCreate, ProjectUpdate
from app.services.utils.db_helpers import commit_or_conflict, get_or_raise

logger = logging.getLogger("staffing.projects")


def _check_dates(project: Project) -> None:
    if project.end_date is not None and project.end_date < project.start_date:
        raise ValidationError("Project end date cannot be before start date", field="end_date")


async def list_projects(db: AsyncSession, client: Optional[str] = None, status: Optional[str] = None) -> List[Project]:
    query = select(Project)
    if client:
        query = query.where(Project.client == client)
    if status:
        query = query.where(Project.status == status)
    result = await db.execute(query.order_by(Project.client.asc(), Project.name.asc()))
    return list(result.scalars().all())


async def list_clients(db: AsyncSession) -> List[str]:
    """Distinct client names across all projects, alphabetical."""
    result = await db.execute(select(Project.client).distinct().order_by(Project.client.asc()))
    return list(result.scalars().all())


async def get_project(db: AsyncSession, project_id: int) -> Project:
    return await get_or_raise(db, Project, project_id, "Project")


async def create_project(db: AsyncSession, payload: ProjectCreate) -> Project:
    if await find_project_by_name(db, payload.client, payload.name) is not None:
        raise ConflictError(f"Project {payload.name!r} already exists for client {payload.client!r}")

    data = payload.model_dump()
    data["status"] = payload.status.value
    project = Project(**data)
    _check_dates(project)

    db.add(project)
    await commit_or_conflict(db, "Project already exists or violates constraints")
    await db.refresh(project)
    logger.info(f"Created project {project.id} ({project.client} / {project.name})")
    return project


async def update_project(db: AsyncSession, project_id: int, payload: ProjectUpdate) -> Project:
    project = await get_project(db, project_id)
    data = payload.model_dump(exclude_unset=True)
    if data.get("status") is not None:
        data["status"] = data["status"].value
    for key in ("name", "client", "start_date", "status"):
        if key in data and data[key] is None:
            raise ValidationError(f"{key} cannot be cleared", field=key)

    for key, value in data.items():
        setattr(project, key, value)
    _check_dates(project)

    db.add(project)
    await commit_or_conflict(db, "Project update violates constraints")
    await db.refresh(project)
    logger.info(f"Updated project {project_id}: {sorted(data)}")
    return project


async def delete_project(db: AsyncSession, project_id: int) -> None:
    project = await get_project(db, project_id)
    await db.delete(project)
    await db.commit()
    logger.info(f"Deleted project {project_id}")


async def find_project_by_name(db: AsyncSession, client: str, name: str) -> Optional[Project]:
    return await db.scalar(select(Project).where(Project.client == client, Project.name == name))
