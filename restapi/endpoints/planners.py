"""Planner endpoints for the API."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path, Query, WebSocket

from components.core.dates import MONTH_PATTERN
from components.dashboard.schemas import DashboardCard
from components.dashboard.service import DashboardService
from components.planner import schemas
from components.planner.service import PlannerService, UnknownTemplatesError
from restapi.endpoints.dependencies import provide
from restapi.endpoints.streaming import stream_updates

router = APIRouter(
    prefix="/planners",
    tags=["planners"],
    responses={404: {"description": "Not found"}},
)

MonthPath = Path(..., pattern=MONTH_PATTERN, description="Planner month as YYYY-MM")


@router.get("/", response_model=List[DashboardCard])
async def read_planners(service: DashboardService = Depends(provide(DashboardService))):
    """
    Get every month that has a planner, most recent first.

    Each card carries the month, its display label and its net balance.
    """
    return await service.get_cards()


@router.websocket("/ws")
async def watch_planners(
    websocket: WebSocket,
    service: DashboardService = Depends(provide(DashboardService)),
):
    """Push the dashboard cards now and after every change."""
    await websocket.accept()
    await stream_updates(websocket, service.observe_cards())


@router.get("/{month}", response_model=schemas.PlannerState)
async def read_planner(
    month: str = MonthPath,
    editing: bool = Query(False, description="Show every template for editing a saved month"),
    service: PlannerService = Depends(provide(PlannerService)),
):
    """
    Get the planner of a month.

    - create mode (nothing saved yet): every template with zero amounts
    - edit mode (saved, editing=true): every template, pre-filled
    - view mode (saved): only the saved entries

    is_loading is true while no templates exist.
    """
    return await service.get_state(month, editing=editing)


@router.websocket("/{month}/ws")
async def watch_planner(
    websocket: WebSocket,
    month: str = MonthPath,
    editing: bool = Query(False),
    service: PlannerService = Depends(provide(PlannerService)),
):
    """Push the planner of a month now and after every change."""
    await websocket.accept()
    await stream_updates(websocket, service.observe_state(month, editing=editing))


@router.put("/{month}", response_model=List[schemas.Entry])
async def save_planner(
    planner: schemas.PlannerSave,
    month: str = MonthPath,
    service: PlannerService = Depends(provide(PlannerService)),
):
    """
    Save a new or edited planner.

    Rows with a zero amount are not stored. The saved rows replace the
    month's previous entries.
    """
    try:
        return await service.save_planner(month, planner.items)
    except UnknownTemplatesError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.patch("/{month}/entries/{template_id}", response_model=schemas.Entry)
async def update_entry(
    template_id: int,
    update: schemas.EntryUpdate,
    month: str = MonthPath,
    service: PlannerService = Depends(provide(PlannerService)),
):
    """Set the amount and/or completion of one item in a month."""
    entry = await service.update_entry(
        month, template_id, amount=update.amount, is_done=update.is_done
    )
    if entry is None:
        raise HTTPException(status_code=404, detail="Template not found")
    return entry


@router.post("/{month}/entries/{template_id}/toggle", response_model=schemas.Entry)
async def toggle_entry(
    template_id: int,
    month: str = MonthPath,
    service: PlannerService = Depends(provide(PlannerService)),
):
    """Flip the completion flag of a saved entry."""
    entry = await service.toggle_done(month, template_id)
    if entry is None:
        raise HTTPException(status_code=404, detail="Entry not found")
    return entry


@router.delete("/{month}", response_model=schemas.PlannerDeleted)
async def delete_planner(
    month: str = MonthPath,
    service: PlannerService = Depends(provide(PlannerService)),
):
    """Delete every entry of a month."""
    deleted = await service.delete_planner(month)
    return schemas.PlannerDeleted(month=month, deleted=deleted)
