"""
Todo Service

Handles business logic for todos including:
- CRUD operations scoped to the owner
- Mirroring a timed todo onto today's calendar
- Completing the todo tied to a finished focus session
"""
import logging
from datetime import date
from typing import List, Optional

from app.infra.supabase.repositories import RepositoryFactory
from app.models.todo import Todo, TodoCreate, TodoUpdate
from app.services.calendar.task_service import task_from_clock_range
from app.services.calendar.timeline import TimeGrid
from app.utils.datetime_helper import format_todo_date, today_utc

logger = logging.getLogger(__name__)


class TodoService:
    """Service for managing todos"""

    def __init__(self, repos: RepositoryFactory, grid: TimeGrid):
        self.repos = repos
        self.grid = grid

    async def list_todos(self, user_id: str) -> List[Todo]:
        return await self.repos.todos.find_by_owner(user_id)

    async def get_todo(self, todo_id: str, user_id: str) -> Optional[Todo]:
        return await self.repos.todos.find_owned(todo_id, user_id)

    async def create_todo(self, user_id: str, data: TodoCreate, today: Optional[date] = None) -> Todo:
        """
        Create a todo.

        When the todo has both a start and an end time, a matching calendar
        task is created for today as well.

        Args:
            user_id: Owner
            data: Todo fields; a missing date defaults to today ("07 Oct 2025")
            today: Override of the current UTC date (for tests)
        """
        today = today or today_utc()
        if not data.date:
            data = data.model_copy(update={"date": format_todo_date(today)})

        todo = await self.repos.todos.create(user_id, data)
        logger.info(f"Created todo {todo.id} for user {user_id}")

        if data.start and data.end:
            candidate = task_from_clock_range(
                self.grid, data.text, data.start, data.end, today.isoformat()
            )
            task = await self.repos.tasks.create(user_id, candidate)
            logger.info(f"Mirrored todo {todo.id} onto calendar task {task.id}")

        return todo

    async def update_todo(self, todo_id: str, user_id: str, data: TodoUpdate) -> Optional[Todo]:
        return await self.repos.todos.update_owned(todo_id, user_id, data)

    async def complete_todo(self, todo_id: str, user_id: str) -> Optional[Todo]:
        todo = await self.repos.todos.mark_completed(todo_id, user_id)
        if todo:
            logger.info(f"Todo {todo_id} marked completed")
        return todo

    async def delete_todo(self, todo_id: str, user_id: str) -> bool:
        """Delete a todo and the calendar task mirroring it, if any"""
        todo = await self.repos.todos.find_owned(todo_id, user_id)
        if not todo:
            return False

        deleted = await self.repos.todos.delete_owned(todo_id, user_id)
        if deleted and todo.start and todo.end:
            removed = await self.repos.tasks.delete_matching(user_id, todo.text, todo.start, todo.end)
            logger.info(f"Removed {removed} calendar task(s) mirroring todo {todo_id}")
        return deleted
