from contextlib import asynccontextmanager
from datetime import date
from typing import AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.clock import Clock, system_clock
from app.db.session import AsyncSessionLocal
from app.services.data import AssignmentService, EmployeeService, POAmendmentService


async def get_db() -> AsyncGenerator:
    async with AsyncSessionLocal() as session:
        yield session


@asynccontextmanager
async def get_db_session():
    """
    Context manager version of get_db for scripts and batch jobs.

    Usage:
        async with get_db_session() as db:
            # use db session
    """
    async with AsyncSessionLocal() as session:
        yield session


def get_clock() -> Clock:
    """Clock used for date-driven rules; overridden in tests to pin "today"."""
    return system_clock


def get_today(clock: Clock = Depends(get_clock)) -> date:
    return clock.today()


def get_po_amendment_service(
    db: AsyncSession = Depends(get_db),
    today: date = Depends(get_today),
) -> POAmendmentService:
    return POAmendmentService(db, today)


def get_assignment_service(
    db: AsyncSession = Depends(get_db),
    today: date = Depends(get_today),
) -> AssignmentService:
    return AssignmentService(db, today)


def get_employee_service(
    db: AsyncSession = Depends(get_db),
    today: date = Depends(get_today),
) -> EmployeeService:
    return EmployeeService(db, today)
