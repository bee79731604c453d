from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from app.schemas.po_amendment import POAmendmentResponse


class BillingType(str, Enum):
    MONTHLY = "Monthly"
    FIXED = "Fixed"
    DAILY = "Daily"
    HOURLY = "Hourly"


class AssignmentCreate(BaseModel):
    """Request model for staffing an employee on a project"""
    employee_id: int
    allocation_percentage: Decimal = Field(Decimal(100), description="Share of the employee's capacity (0-100]")
    start_date: date
    end_date: Optional[date] = Field(None, description="Omit for an ongoing assignment")
    role_in_project: Optional[str] = None
    po_number: Optional[str] = Field(None, description="Legacy single PO; defaults to the project's PO")
    billing: BillingType = BillingType.MONTHLY
    rate: Decimal = Field(Decimal(0), ge=0)


class AssignmentUpdate(BaseModel):
    allocation_percentage: Optional[Decimal] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    role_in_project: Optional[str] = None
    po_number: Optional[str] = None
    billing: Optional[BillingType] = None
    rate: Optional[Decimal] = Field(None, ge=0)


class AssignmentResponse(BaseModel):
    id: int
    employee_id: int
    project_id: int
    project_name: Optional[str] = None
    client: Optional[str] = None
    allocation_percentage: Decimal
    start_date: date
    end_date: Optional[date] = None
    role_in_project: Optional[str] = None
    po_number: Optional[str] = None
    billing: BillingType
    rate: Decimal
    created_at: Optional[datetime] = None
    po_amendments: List[POAmendmentResponse] = Field(default_factory=list)
    billability_status: str = Field("Bench", description="Derived on read: Billable or Bench")
    is_billable_active: bool = False

    class Config:
        from_attributes = True


class AllocationSummary(BaseModel):
    employee_id: int
    total_allocation: Decimal
    remaining_allocation: Decimal
    over_allocated: bool
