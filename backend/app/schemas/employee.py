from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from app.schemas.assignment import AllocationSummary, AssignmentResponse


class EmployeeCreate(BaseModel):
    employee_code: str = Field(..., min_length=1, description="Business identifier, e.g. EMP-0042")
    name: str = Field(..., min_length=1)
    email: Optional[str] = None
    department: Optional[str] = None
    designation: Optional[str] = None
    location: Optional[str] = None
    billability_status: str = "Bench"
    last_active_date: Optional[date] = Field(
        None, description="Manual value; replaced by the latest assignment/PO end date when one exists"
    )


class EmployeeUpdate(BaseModel):
    employee_code: Optional[str] = Field(None, min_length=1)
    name: Optional[str] = Field(None, min_length=1)
    email: Optional[str] = None
    department: Optional[str] = None
    designation: Optional[str] = None
    location: Optional[str] = None
    billability_status: Optional[str] = None
    last_active_date: Optional[date] = None


class EmployeeResponse(BaseModel):
    id: int
    employee_code: str
    name: str
    email: Optional[str] = None
    department: Optional[str] = None
    designation: Optional[str] = None
    location: Optional[str] = None
    billability_status: str
    last_active_date: Optional[date] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class EmployeeDetailResponse(EmployeeResponse):
    """Employee with assignments, derived billability and allocation headroom"""
    derived_billability: str = "Bench"
    assignments: List[AssignmentResponse] = Field(default_factory=list)
    allocation: Optional[AllocationSummary] = None
