"""
Domain errors raised by the staffing rules and persistence services.

Each error carries the HTTP status the API layer answers with, so handlers in
app.main stay a one-line translation. Malformed dates are deliberately absent:
the date helpers treat them as missing and fail closed instead of raising.
"""

from fastapi import status


class StaffingError(Exception):
    """Base class for user-facing staffing errors."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, *, field: str | None = None):
        super().__init__(message)
        self.message = message
        self.field = field


class ValidationError(StaffingError):
    """Raised when input breaks an allocation, PO or date rule."""

    status_code = 422


class NotFoundError(StaffingError):
    """Raised when a referenced employee, project, assignment or amendment is missing."""

    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(StaffingError):
    """Raised when a write collides with existing data (duplicate assignment, unique keys)."""

    status_code = status.HTTP_409_CONFLICT
