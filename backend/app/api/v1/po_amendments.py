from typing import Any, List, Optional

from fastapi import APIRouter, Depends, status

from app.api.deps import get_po_amendment_service
from app.schemas.common import OkResponse
from app.schemas.po_amendment import (
    NextStartDateResponse,
    POAmendmentCreate,
    POAmendmentResponse,
    POAmendmentUpdate,
    RecalculationSummary,
)
from app.services.data import POAmendmentService

router = APIRouter()


@router.get("/projects/{project_id}/po-amendments", response_model=List[POAmendmentResponse])
async def list_po_amendments(
    project_id: int,
    service: POAmendmentService = Depends(get_po_amendment_service),
) -> Any:
    return await service.list_for_project(project_id)


@router.post(
    "/projects/{project_id}/po-amendments",
    response_model=POAmendmentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_po_amendment(
    project_id: int,
    payload: POAmendmentCreate,
    service: POAmendmentService = Depends(get_po_amendment_service),
) -> Any:
    """
    Amend the project's PO. The new amendment becomes active only if its dates cover today.
    """
    return await service.create(project_id, payload.po_number, payload.start_date, payload.end_date)


@router.get("/projects/{project_id}/po-amendments/active", response_model=Optional[POAmendmentResponse])
async def get_active_po_amendment(
    project_id: int,
    service: POAmendmentService = Depends(get_po_amendment_service),
) -> Any:
    return await service.get_active(project_id)


@router.get("/projects/{project_id}/po-amendments/next-start-date", response_model=NextStartDateResponse)
async def get_next_start_date(
    project_id: int,
    service: POAmendmentService = Depends(get_po_amendment_service),
) -> Any:
    """Suggested start for the next amendment: the day after the latest end date."""
    suggested = await service.next_start_date(project_id)
    return NextStartDateResponse(project_id=project_id, suggested_start_date=suggested)


@router.post("/projects/{project_id}/po-amendments/recompute", response_model=Optional[POAmendmentResponse])
async def recompute_po_amendments(
    project_id: int,
    service: POAmendmentService = Depends(get_po_amendment_service),
) -> Any:
    return await service.recompute_active(project_id)


@router.post("/projects/{project_id}/po-amendments/deactivate-all", response_model=OkResponse)
async def deactivate_all_po_amendments(
    project_id: int,
    service: POAmendmentService = Depends(get_po_amendment_service),
) -> Any:
    await service.deactivate_all_for_project(project_id)
    return OkResponse()


@router.post("/po-amendments/recalculate", response_model=RecalculationSummary)
async def recalculate_all_po_amendments(
    service: POAmendmentService = Depends(get_po_amendment_service),
) -> Any:
    """Recompute the active PO of every Active project."""
    return await service.recalculate_all_active_projects()


@router.put("/po-amendments/{amendment_id}", response_model=POAmendmentResponse)
async def update_po_amendment(
    amendment_id: int,
    payload: POAmendmentUpdate,
    service: POAmendmentService = Depends(get_po_amendment_service),
) -> Any:
    return await service.update(amendment_id, payload.po_number, payload.start_date, payload.end_date)


@router.delete("/po-amendments/{amendment_id}", response_model=OkResponse)
async def delete_po_amendment(
    amendment_id: int,
    service: POAmendmentService = Depends(get_po_amendment_service),
) -> Any:
    await service.delete(amendment_id)
    return OkResponse()


@router.post("/po-amendments/{amendment_id}/activate", response_model=POAmendmentResponse)
async def activate_po_amendment(
    amendment_id: int,
    service: POAmendmentService = Depends(get_po_amendment_service),
) -> Any:
    """
    Manually activate one amendment. Other active amendments are left as they are;
    call deactivate-all on the project first for a clean swap.
    """
    return await service.set_active(amendment_id)


@router.post("/po-amendments/{amendment_id}/deactivate", response_model=POAmendmentResponse)
async def deactivate_po_amendment(
    amendment_id: int,
    service: POAmendmentService = Depends(get_po_amendment_service),
) -> Any:
    return await service.set_inactive(amendment_id)
