from fastapi import APIRouter

from app.api.v1 import (
    employees,
    po_amendments,
    projects,
)

api_router = APIRouter()
api_router.include_router(employees.router, prefix="/employees", tags=["employees"])
api_router.include_router(projects.router, tags=["projects"])
api_router.include_router(po_amendments.router, tags=["po-amendments"])
