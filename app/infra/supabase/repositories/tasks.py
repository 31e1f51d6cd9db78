"""Calendar task repository"""
from typing import List

from supabase import Client  # type: ignore

from app.models.task import Task, TaskCreate, TaskUpdate

from .base import OwnedRepository, OWNER_COLUMN


class TaskRepository(OwnedRepository[Task, TaskCreate, TaskUpdate]):
    """Repository for calendar task operations"""

    def __init__(self, client: Client):
        super().__init__(client, "tasks", Task)

    async def find_for_date(self, user_id: str, date: str) -> List[Task]:
        """Find a user's tasks stored under an exact YYYY-MM-DD date string"""
        return await self.find_by_filters(user_id, {"date": date})

    async def delete_matching(self, user_id: str, title: str, start: str, end: str) -> int:
        """Delete the calendar task mirroring a todo (same title and time range)"""
        response = (
            self._table()
            .delete()
            .eq(OWNER_COLUMN, user_id)
            .eq("title", title)
            .eq("start", start)
            .eq("end", end)
            .execute()
        )
        return len(response.data) if response.data else 0
