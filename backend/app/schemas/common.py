from typing import Optional

from pydantic import BaseModel


class OkResponse(BaseModel):
    ok: bool = True


class ErrorResponse(BaseModel):
    """Standardized error response format."""
    error: str
    detail: Optional[str] = None
    field: Optional[str] = None
    timestamp: str
    path: Optional[str] = None


class HealthResponse(BaseModel):
    """Health check response format."""
    status: str
    service: str
    version: str
    environment: str
    checks: dict[str, bool]
