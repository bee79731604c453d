from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field


class POAmendmentCreate(BaseModel):
    """Payload of the "amend PO" action"""
    po_number: str = Field(..., description="Purchase order number")
    start_date: date = Field(..., description="First day the PO is valid")
    end_date: Optional[date] = Field(None, description="Last valid day; omit for an open-ended PO")


class POAmendmentUpdate(POAmendmentCreate):
    pass


class POAmendmentResponse(BaseModel):
    id: int
    project_id: int
    po_number: str
    start_date: date
    end_date: Optional[date] = None
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class NextStartDateResponse(BaseModel):
    """Advisory start date for the next amendment (day after the latest end date)"""
    project_id: int
    suggested_start_date: date


class RecalculationSummary(BaseModel):
    processed: int
    failed: int
    activated: int
