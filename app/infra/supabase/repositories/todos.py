"""Todo repository"""
from typing import Optional

from supabase import Client  # type: ignore

from app.models.todo import Todo, TodoCreate, TodoUpdate

from .base import OwnedRepository


class TodoRepository(OwnedRepository[Todo, TodoCreate, TodoUpdate]):
    """Repository for todo operations"""

    def __init__(self, client: Client):
        super().__init__(client, "todos", Todo)

    async def mark_completed(self, todo_id: str, user_id: str) -> Optional[Todo]:
        """Mark a todo as completed"""
        return await self.update_owned(todo_id, user_id, TodoUpdate(completed=True))
