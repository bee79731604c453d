"""
Database Helpers

Lookup and commit patterns shared by the staffing persistence services.
"""

import logging
from typing import Any, Type, TypeVar

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ConflictError, NotFoundError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")


async def get_or_raise(db: AsyncSession, model: Type[ModelT], record_id: Any, label: str) -> ModelT:
    """
    Fetch a row by primary key.

    Raises:
        NotFoundError: if no row has that id
    """
    instance = await db.get(model, record_id)
    if instance is None:
        raise NotFoundError(f"{label} {record_id} not found")
    return instance


async def commit_or_conflict(db: AsyncSession, conflict_message: str) -> None:
    """
    Commit the unit of work, rolling back and raising ConflictError on constraint violations.
    """
    try:
        await db.commit()
    except IntegrityError as exc:
        await db.rollback()
        logger.warning(f"{conflict_message}: {exc.orig}")
        raise ConflictError(conflict_message) from exc
