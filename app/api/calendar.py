"""Calendar grid endpoints: visible days, navigation and drag previews"""
from datetime import date
from typing import Any, List

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from app.api.deps import get_grid
from app.services.calendar.timeline import TimeGrid, begin_drag, drag_preview, update_drag, validate_slot
from app.services.calendar.views import CalendarView, days_for_view, shift_anchor
from app.services.errors import ValidationError

router = APIRouter(prefix="/api/calendar", tags=["calendar"])


class GridResponse(BaseModel):
    slots_per_day: int
    slot_minutes: int
    labels: List[str]


class DaysResponse(BaseModel):
    view: CalendarView
    days: List[date]


class ShiftResponse(BaseModel):
    view: CalendarView
    date: date


class PreviewRequest(BaseModel):
    date: date
    anchor_slot: Any
    current_slot: Any


class PreviewResponse(BaseModel):
    top_percent: float
    height_percent: float
    caption: str
    start: str
    end: str
    slots: int


@router.get("/grid", response_model=GridResponse)
async def get_grid_layout(grid: TimeGrid = Depends(get_grid)):
    """Slot layout of the day timeline"""
    return {
        "slots_per_day": grid.slots_per_day,
        "slot_minutes": grid.slot_minutes,
        "labels": grid.labels,
    }


@router.get("/days", response_model=DaysResponse)
async def get_days(view: CalendarView, date: date):
    """Days shown by a view anchored on `date`"""
    try:
        days = days_for_view(view, date)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return {"view": view, "days": days}


@router.get("/shift", response_model=ShiftResponse)
async def shift_view(view: CalendarView, date: date, step: int = 1):
    """Anchor date after paging the view by `step` (negative goes back)"""
    try:
        anchor = shift_anchor(view, date, step)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return {"view": view, "date": anchor}


@router.post("/preview", response_model=PreviewResponse)
async def preview_drag(request: PreviewRequest, grid: TimeGrid = Depends(get_grid)):
    """Geometry and labels of the provisional block for a drag"""
    try:
        anchor = validate_slot(grid, request.anchor_slot)
        current = validate_slot(grid, request.current_slot)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))

    selection = update_drag(grid, begin_drag(grid, anchor, request.date), current)
    preview = drag_preview(grid, selection)
    return {
        "top_percent": preview.geometry.top_percent,
        "height_percent": preview.geometry.height_percent,
        "caption": preview.caption,
        "start": preview.start,
        "end": preview.end,
        "slots": preview.slots,
    }
