"""
PO Amendment Ledger Service

Persists a project's PO amendments and keeps the cached ``is_active`` flag in
line with the dates. Every create/update triggers an inline recomputation in
the same transaction; validation runs before anything is written, so a
rejected request leaves the ledger untouched.

Manual activation is a separate path: ``set_active`` does not clear sibling
flags. Callers that want a single active PO call
``deactivate_all_for_project`` first, then ``set_active``.
"""

import logging
from datetime import date
from typing import Any, List, Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.po_amendment import POAmendment
from app.models.project import Project
from app.services.staffing import select_active_amendment, suggest_next_start_date, validate_amendment
from app.services.utils.db_helpers import commit_or_conflict, get_or_raise

logger = logging.getLogger("staffing.po_amendments")


class POAmendmentService:
    """Create, edit, toggle and recompute PO amendments for projects."""

    def __init__(self, db: AsyncSession, today: date):
        self.db = db
        self.today = today

    async def list_for_project(self, project_id: int) -> List[POAmendment]:
        """All amendments of a project, latest start first."""
        await get_or_raise(self.db, Project, project_id, "Project")
        return await self._amendments_for(project_id)

    async def get_active(self, project_id: int) -> Optional[POAmendment]:
        await get_or_raise(self.db, Project, project_id, "Project")
        result = await self.db.execute(
            select(POAmendment)
            .where(POAmendment.project_id == project_id, POAmendment.is_active.is_(True))
            .order_by(POAmendment.start_date.desc(), POAmendment.id.desc())
        )
        return result.scalars().first()

    async def next_start_date(self, project_id: int) -> date:
        amendments = await self.list_for_project(project_id)
        return suggest_next_start_date(amendments, self.today)

    async def create(
        self,
        project_id: int,
        po_number: Optional[str],
        start_date: Any,
        end_date: Any = None,
    ) -> POAmendment:
        fields = validate_amendment(po_number, start_date, end_date)
        await get_or_raise(self.db, Project, project_id, "Project")

        amendment = POAmendment(
            project_id=project_id,
            po_number=fields.po_number,
            start_date=fields.start_date,
            end_date=fields.end_date,
            is_active=False,
        )
        self.db.add(amendment)
        await self.db.flush()

        await self._recompute(project_id)
        await commit_or_conflict(self.db, "PO amendment violates constraints")
        await self.db.refresh(amendment)

        logger.info(
            f"Created PO amendment {amendment.id} ({fields.po_number}) for project {project_id}, "
            f"active={amendment.is_active}",
            extra={"project_id": project_id},
        )
        return amendment

    async def update(
        self,
        amendment_id: int,
        po_number: Optional[str],
        start_date: Any,
        end_date: Any = None,
    ) -> POAmendment:
        fields = validate_amendment(po_number, start_date, end_date)
        amendment = await get_or_raise(self.db, POAmendment, amendment_id, "PO amendment")

        amendment.po_number = fields.po_number
        amendment.start_date = fields.start_date
        amendment.end_date = fields.end_date
        self.db.add(amendment)
        await self.db.flush()

        await self._recompute(amendment.project_id)
        await commit_or_conflict(self.db, "PO amendment update violates constraints")
        await self.db.refresh(amendment)

        logger.info(f"Updated PO amendment {amendment_id}, active={amendment.is_active}")
        return amendment

    async def delete(self, amendment_id: int) -> None:
        amendment = await get_or_raise(self.db, POAmendment, amendment_id, "PO amendment")
        await self.db.delete(amendment)
        await self.db.commit()
        logger.info(f"Deleted PO amendment {amendment_id} from project {amendment.project_id}")

    async def set_active(self, amendment_id: int) -> POAmendment:
        """Manually flag one amendment active. Siblings keep their flags."""
        return await self._set_flag(amendment_id, True)

    async def set_inactive(self, amendment_id: int) -> POAmendment:
        return await self._set_flag(amendment_id, False)

    async def deactivate_all_for_project(self, project_id: int) -> None:
        await get_or_raise(self.db, Project, project_id, "Project")
        await self.db.execute(
            update(POAmendment)
            .where(POAmendment.project_id == project_id)
            .values(is_active=False)
        )
        await self.db.commit()
        logger.info(f"Deactivated all PO amendments for project {project_id}", extra={"project_id": project_id})

    async def recompute_active(self, project_id: int) -> Optional[POAmendment]:
        """Re-derive the active amendment of a project from its dates and persist it."""
        await get_or_raise(self.db, Project, project_id, "Project")
        active = await self._recompute(project_id)
        await self.db.commit()
        if active is not None:
            await self.db.refresh(active)
        return active

    async def recalculate_all_active_projects(self) -> dict:
        """
        Recompute every project whose status is Active.

        Each project commits on its own; one failing project is logged and
        counted without stopping the rest.
        """
        result = await self.db.execute(select(Project.id).where(Project.status == "Active"))
        project_ids = list(result.scalars().all())

        processed = failed = activated = 0
        for project_id in project_ids:
            try:
                active = await self._recompute(project_id)
                await self.db.commit()
            except Exception:
                await self.db.rollback()
                failed += 1
                logger.exception(
                    f"Failed to recompute PO amendments for project {project_id}",
                    extra={"project_id": project_id},
                )
                continue
            processed += 1
            if active is not None:
                activated += 1

        logger.info(
            f"PO recalculation completed: {processed} projects processed, {failed} errors, "
            f"{activated} with an active PO"
        )
        return {"processed": processed, "failed": failed, "activated": activated}

    async def _set_flag(self, amendment_id: int, value: bool) -> POAmendment:
        amendment = await get_or_raise(self.db, POAmendment, amendment_id, "PO amendment")
        amendment.is_active = value
        self.db.add(amendment)
        await self.db.commit()
        await self.db.refresh(amendment)
        logger.info(f"PO amendment {amendment_id} manually set is_active={value}")
        return amendment

    async def _amendments_for(self, project_id: int) -> List[POAmendment]:
        result = await self.db.execute(
            select(POAmendment)
            .where(POAmendment.project_id == project_id)
            .order_by(POAmendment.start_date.desc(), POAmendment.id.desc())
        )
        return list(result.scalars().all())

    async def _recompute(self, project_id: int) -> Optional[POAmendment]:
        amendments = await self._amendments_for(project_id)
        for amendment in amendments:
            amendment.is_active = False

        active = select_active_amendment(amendments, self.today)
        if active is not None:
            active.is_active = True
        await self.db.flush()

        logger.debug(
            f"Recomputed project {project_id} on {self.today}: "
            f"active={active.id if active is not None else None}",
            extra={"project_id": project_id},
        )
        return active
