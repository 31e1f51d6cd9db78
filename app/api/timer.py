"""Focus timer endpoints

The server keeps no timer state: each client session posts its TimerState
and receives the next one, so sessions never share anything.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from app.api.deps import get_grid
from app.infra.supabase import get_repositories
from app.infra.supabase.repositories import RepositoryFactory
from app.middleware.auth import get_current_user_id
from app.services.calendar.timeline import TimeGrid
from app.services.errors import FormatError, StateError, ValidationError
from app.services.planner import TodoService
from app.services.timer import (
    BreakWindow,
    TimerSignal,
    TimerState,
    advance,
    compute_plan,
    duration_string_to_minutes,
    format_clock,
    new_timer,
    next_break,
    pause_timer,
    remaining_percent,
    reset_timer,
    resume_timer,
    start_timer,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/timer", tags=["timer"])


class PlanRequest(BaseModel):
    total_minutes: float
    break_count: int = 0
    break_duration_minutes: float = 5


class PlanResponse(BaseModel):
    breaks: List[BreakWindow]


class StartRequest(BaseModel):
    total_minutes: Optional[float] = None
    break_count: int = 0
    break_duration_minutes: float = 5
    todo_id: Optional[str] = None


class StateRequest(BaseModel):
    state: TimerState


class AdvanceRequest(BaseModel):
    state: TimerState
    delta_seconds: float = Field(1, ge=0)


class TimerView(BaseModel):
    state: TimerState
    signals: List[TimerSignal] = []
    remaining_seconds: float
    remaining_percent: float
    clock: str
    next_break: Optional[BreakWindow] = None
    task_completed: bool = False


class DurationRequest(BaseModel):
    text: str


class DurationResponse(BaseModel):
    minutes: int


def _view(state: TimerState, signals: Optional[List[TimerSignal]] = None, task_completed: bool = False) -> TimerView:
    return TimerView(
        state=state,
        signals=signals or [],
        remaining_seconds=state.remaining_seconds,
        remaining_percent=remaining_percent(state),
        clock=format_clock(state.remaining_seconds),
        next_break=next_break(state),
        task_completed=task_completed,
    )


def _raise_for(error: Exception) -> None:
    if isinstance(error, StateError):
        raise HTTPException(status_code=409, detail=str(error))
    raise HTTPException(status_code=422, detail=str(error))


@router.post("/plan", response_model=PlanResponse)
async def plan_breaks(request: PlanRequest):
    """Break schedule for a session"""
    try:
        breaks = compute_plan(request.total_minutes, request.break_count, request.break_duration_minutes)
    except ValidationError as e:
        _raise_for(e)

    return {"breaks": breaks}


@router.post("/duration", response_model=DurationResponse)
async def parse_duration(request: DurationRequest):
    """Minutes represented by a free-form duration such as "1h 20min" """
    try:
        return {"minutes": duration_string_to_minutes(request.text)}
    except FormatError as e:
        _raise_for(e)


@router.post("/start", response_model=TimerView)
async def start_session(
    request: StartRequest,
    user_id: str = Depends(get_current_user_id),
    repos: RepositoryFactory = Depends(get_repositories),
    grid: TimeGrid = Depends(get_grid),
):
    """
    Start a focus session.

    With a todo_id the session length comes from the todo's duration text,
    and the todo is completed when the session ends.
    """
    total_minutes = request.total_minutes
    task_id = None

    try:
        if request.todo_id:
            todo = await TodoService(repos, grid).get_todo(request.todo_id, user_id)
            if not todo:
                raise HTTPException(status_code=404, detail="Todo not found")
            if todo.completed:
                raise StateError("Todo is already completed")
            total_minutes = duration_string_to_minutes(todo.time)
            task_id = todo.id

        if total_minutes is None:
            raise ValidationError("total_minutes or todo_id is required")

        state = new_timer(total_minutes, request.break_count, request.break_duration_minutes, task_id)
        state = start_timer(state)
    except (ValidationError, FormatError, StateError) as e:
        _raise_for(e)

    logger.info(f"Focus session started for {user_id}: {state.total_seconds}s, {len(state.plan)} breaks")
    return _view(state)


@router.post("/advance", response_model=TimerView)
async def advance_session(
    request: AdvanceRequest,
    user_id: str = Depends(get_current_user_id),
    repos: RepositoryFactory = Depends(get_repositories),
    grid: TimeGrid = Depends(get_grid),
):
    """
    Apply elapsed time to a running session.

    Returns the new state and the signals fired on the way (break started,
    break ended, completed). On completion the linked todo is marked done.
    """
    try:
        result = advance(request.state, request.delta_seconds)
    except (ValidationError, StateError) as e:
        _raise_for(e)

    task_completed = False
    if TimerSignal.COMPLETED in result.signals and result.state.task_id:
        todo = await TodoService(repos, grid).complete_todo(result.state.task_id, user_id)
        task_completed = todo is not None
        if not task_completed:
            logger.warning(f"Finished session refers to missing todo {result.state.task_id}")

    return _view(result.state, result.signals, task_completed)


@router.post("/pause", response_model=TimerView)
async def pause_session(request: StateRequest):
    try:
        return _view(pause_timer(request.state))
    except StateError as e:
        _raise_for(e)


@router.post("/resume", response_model=TimerView)
async def resume_session(request: StateRequest):
    try:
        return _view(resume_timer(request.state))
    except StateError as e:
        _raise_for(e)


@router.post("/reset", response_model=TimerView)
async def reset_session(request: StateRequest):
    """Back to not started, elapsed time cleared"""
    return _view(reset_timer(request.state))
