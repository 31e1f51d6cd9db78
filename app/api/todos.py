"""Todo list endpoints"""
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from app.api.deps import get_grid
from app.infra.supabase import get_repositories
from app.infra.supabase.repositories import RepositoryFactory
from app.middleware.auth import get_current_user_id
from app.models.todo import Todo, TodoCreate, TodoUpdate
from app.services.calendar.timeline import TimeGrid
from app.services.errors import ValidationError
from app.services.planner import TodoService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/todos", tags=["todos"])


class TodoResponse(BaseModel):
    todo: Todo


class TodoListResponse(BaseModel):
    todos: List[Todo]
    count: int


class DeleteResponse(BaseModel):
    success: bool
    message: str


@router.get("", response_model=TodoListResponse)
async def list_todos(
    user_id: str = Depends(get_current_user_id),
    repos: RepositoryFactory = Depends(get_repositories),
    grid: TimeGrid = Depends(get_grid),
):
    """List all todos of the user"""
    todos = await TodoService(repos, grid).list_todos(user_id)
    return {"todos": todos, "count": len(todos)}


@router.post("", response_model=TodoResponse, status_code=201)
async def create_todo(
    request: TodoCreate,
    user_id: str = Depends(get_current_user_id),
    repos: RepositoryFactory = Depends(get_repositories),
    grid: TimeGrid = Depends(get_grid),
):
    """Create a todo; a todo with start and end also lands on today's calendar"""
    try:
        todo = await TodoService(repos, grid).create_todo(user_id, request)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return {"todo": todo}


@router.put("/{todo_id}", response_model=TodoResponse)
async def update_todo(
    todo_id: str,
    request: TodoUpdate,
    user_id: str = Depends(get_current_user_id),
    repos: RepositoryFactory = Depends(get_repositories),
    grid: TimeGrid = Depends(get_grid),
):
    """Update a todo"""
    todo = await TodoService(repos, grid).update_todo(todo_id, user_id, request)

    if not todo:
        raise HTTPException(status_code=404, detail="Todo not found or unauthorized")

    return {"todo": todo}


@router.delete("/{todo_id}", response_model=DeleteResponse)
async def delete_todo(
    todo_id: str,
    user_id: str = Depends(get_current_user_id),
    repos: RepositoryFactory = Depends(get_repositories),
    grid: TimeGrid = Depends(get_grid),
):
    """Delete a todo and its mirrored calendar task"""
    success = await TodoService(repos, grid).delete_todo(todo_id, user_id)

    if not success:
        raise HTTPException(status_code=404, detail="Todo not found or unauthorized")

    return {"success": True, "message": "Todo deleted successfully"}
