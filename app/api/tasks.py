import logging
from datetime import date
from typing import Any, List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from app.api.deps import get_grid
from app.infra.supabase import get_repositories
from app.infra.supabase.repositories import RepositoryFactory
from app.middleware.auth import get_current_user_id
from app.models.task import Task, TaskCreate, TaskUpdate, DEFAULT_TASK_TITLE, DEFAULT_TASK_COLOR
from app.services.calendar.task_service import CalendarTaskService
from app.services.calendar.timeline import TimeGrid, generate_task_id
from app.services.errors import ValidationError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/tasks", tags=["tasks"])


# Request/Response models
class CreateTaskRequest(BaseModel):
    id: Optional[str] = None
    title: str = DEFAULT_TASK_TITLE
    start_slot: int
    end_slot: int
    date: date
    color: str = DEFAULT_TASK_COLOR


class DragCommitRequest(BaseModel):
    # Checked by validate_slot, not by pydantic
    date: date
    anchor_slot: Any
    current_slot: Any
    title: Optional[str] = None
    color: Optional[str] = None


class TaskResponse(BaseModel):
    task: Task


class TaskListResponse(BaseModel):
    tasks: List[Task]
    count: int


class DeleteResponse(BaseModel):
    success: bool
    message: str


def _service(repos: RepositoryFactory, grid: TimeGrid) -> CalendarTaskService:
    return CalendarTaskService(repos, grid)


# CRUD Endpoints
@router.get("", response_model=TaskListResponse)
async def list_tasks(
    date: Optional[date] = None,
    user_id: str = Depends(get_current_user_id),
    repos: RepositoryFactory = Depends(get_repositories),
    grid: TimeGrid = Depends(get_grid),
):
    """List the user's calendar tasks, optionally only those on one day"""
    tasks = await _service(repos, grid).list_tasks(user_id, date)

    return {
        "tasks": tasks,
        "count": len(tasks)
    }


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(
    task_id: str,
    user_id: str = Depends(get_current_user_id),
    repos: RepositoryFactory = Depends(get_repositories),
    grid: TimeGrid = Depends(get_grid),
):
    """Get a single task by ID"""
    task = await _service(repos, grid).get_task(task_id, user_id)

    if not task:
        raise HTTPException(status_code=404, detail="Task not found")

    return {"task": task}


@router.post("", response_model=TaskResponse, status_code=201)
async def create_task(
    request: CreateTaskRequest,
    user_id: str = Depends(get_current_user_id),
    repos: RepositoryFactory = Depends(get_repositories),
    grid: TimeGrid = Depends(get_grid),
):
    """Create a task from an explicit slot range"""
    try:
        candidate = TaskCreate(
            id=request.id or generate_task_id(),
            title=request.title,
            start_slot=request.start_slot,
            end_slot=request.end_slot,
            start=grid.slot_label(request.start_slot),
            end=grid.slot_label(request.end_slot),
            date=request.date.isoformat(),
            color=request.color,
        )
        task = await _service(repos, grid).create_task(user_id, candidate)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return {"task": task}


@router.post("/drag", response_model=TaskResponse, status_code=201)
async def commit_drag_selection(
    request: DragCommitRequest,
    user_id: str = Depends(get_current_user_id),
    repos: RepositoryFactory = Depends(get_repositories),
    grid: TimeGrid = Depends(get_grid),
):
    """Create a task from a finished drag: anchor and current slot, in either order"""
    try:
        task = await _service(repos, grid).create_from_drag(
            user_id,
            request.date,
            request.anchor_slot,
            request.current_slot,
            title=request.title,
            color=request.color,
        )
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return {"task": task}


@router.put("/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: str,
    request: TaskUpdate,
    user_id: str = Depends(get_current_user_id),
    repos: RepositoryFactory = Depends(get_repositories),
    grid: TimeGrid = Depends(get_grid),
):
    """Update an existing task"""
    try:
        task = await _service(repos, grid).update_task(task_id, user_id, request)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))

    if not task:
        raise HTTPException(status_code=404, detail="Task not found")

    return {"task": task}


@router.delete("/{task_id}", response_model=DeleteResponse)
async def delete_task(
    task_id: str,
    user_id: str = Depends(get_current_user_id),
    repos: RepositoryFactory = Depends(get_repositories),
    grid: TimeGrid = Depends(get_grid),
):
    """Delete a task"""
    success = await _service(repos, grid).delete_task(task_id, user_id)

    if not success:
        raise HTTPException(status_code=404, detail="Task not found or unauthorized")

    return {"success": True, "message": "Task deleted successfully"}
