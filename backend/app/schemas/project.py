from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class ProjectStatus(str, Enum):
    ACTIVE = "Active"
    COMPLETED = "Completed"
    ON_HOLD = "On Hold"
    CANCELLED = "Cancelled"


class ProjectCreate(BaseModel):
    name: str = Field(..., min_length=1)
    client: str = Field(..., min_length=1)
    description: Optional[str] = None
    department: Optional[str] = None
    start_date: date
    end_date: Optional[date] = None
    status: ProjectStatus = ProjectStatus.ACTIVE
    po_number: Optional[str] = None
    budget: Optional[Decimal] = Field(None, ge=0)
    currency: Optional[str] = None
    billing_type: Optional[str] = None


class ProjectUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    client: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    department: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: Optional[ProjectStatus] = None
    po_number: Optional[str] = None
    budget: Optional[Decimal] = Field(None, ge=0)
    currency: Optional[str] = None
    billing_type: Optional[str] = None


class ProjectResponse(BaseModel):
    id: int
    name: str
    client: str
    description: Optional[str] = None
    department: Optional[str] = None
    start_date: date
    end_date: Optional[date] = None
    status: ProjectStatus
    po_number: Optional[str] = None
    budget: Optional[Decimal] = None
    currency: Optional[str] = None
    billing_type: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
