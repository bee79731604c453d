# Shared Utilities Package
# Common helper functions used across the staffing services

from app.services.utils.db_helpers import (
    commit_or_conflict,
    get_or_raise,
)

__all__ = [
    "commit_or_conflict",
    "get_or_raise",
]
