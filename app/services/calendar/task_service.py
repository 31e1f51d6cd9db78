"""
Calendar Task Service

Business logic for the blocks shown on the day timeline:
- CRUD scoped to the owner
- Committing drag selections made on the grid
- Building tasks from free clock ranges (todos, rolled-over events)
"""
import logging
from datetime import date
from typing import List, Optional

from app.infra.supabase.repositories import RepositoryFactory
from app.models.task import Task, TaskCreate, TaskUpdate
from app.services.errors import ValidationError
from .timeline import (
    TimeGrid,
    begin_drag,
    commit_drag,
    events_for_date,
    generate_task_id,
    update_drag,
    validate_slot,
)

logger = logging.getLogger(__name__)


def task_from_clock_range(
    grid: TimeGrid,
    title: str,
    start: str,
    end: str,
    day: str,
    color: Optional[str] = None,
) -> TaskCreate:
    """
    Candidate task covering the slots touched by [start, end).

    The stored labels keep the given clock times; the slot range is widened
    to whole slots and is always at least one slot long.
    """
    start_slot = min(grid.slot_at(start), grid.slots_per_day - 1)
    end_slot = max(start_slot + 1, grid.slot_at(end, round_up=True))
    values = dict(
        id=generate_task_id(),
        title=title,
        start_slot=start_slot,
        end_slot=end_slot,
        start=start,
        end=end,
        date=day,
    )
    if color:
        values["color"] = color
    return TaskCreate(**values)


class CalendarTaskService:
    """Service for calendar tasks"""

    def __init__(self, repos: RepositoryFactory, grid: TimeGrid):
        self.repos = repos
        self.grid = grid

    def _check_range(self, start_slot: int, end_slot: int) -> None:
        if not (0 <= start_slot < end_slot <= self.grid.slots_per_day):
            raise ValidationError(
                f"Slot range [{start_slot}, {end_slot}) is outside [0, {self.grid.slots_per_day}]"
            )

    async def list_tasks(self, user_id: str, day: Optional[date] = None) -> List[Task]:
        """All of a user's tasks, or only those stored under `day`"""
        tasks = await self.repos.tasks.find_by_owner(user_id)
        if day is None:
            return tasks
        return events_for_date(tasks, day)

    async def get_task(self, task_id: str, user_id: str) -> Optional[Task]:
        return await self.repos.tasks.find_owned(task_id, user_id)

    async def create_task(self, user_id: str, data: TaskCreate) -> Task:
        self._check_range(data.start_slot, data.end_slot)
        task = await self.repos.tasks.create(user_id, data)
        logger.info(f"Created task {task.id} on {task.date} [{task.start_slot}, {task.end_slot})")
        return task

    async def create_from_drag(
        self,
        user_id: str,
        day: date,
        anchor_slot: int,
        current_slot: int,
        title: Optional[str] = None,
        color: Optional[str] = None,
    ) -> Task:
        """
        Commit a complete drag gesture sent in one request.

        Unlike pointer handling in the browser, malformed slots are rejected.

        Raises:
            ValidationError: If either slot is not an index of the grid
        """
        validate_slot(self.grid, anchor_slot)
        validate_slot(self.grid, current_slot)
        selection = begin_drag(self.grid, anchor_slot, day)
        selection = update_drag(self.grid, selection, current_slot)
        candidate = commit_drag(self.grid, selection, title=title, color=color)
        return await self.create_task(user_id, candidate)

    async def update_task(self, task_id: str, user_id: str, data: TaskUpdate) -> Optional[Task]:
        """Update a task; the resulting slot range must stay valid"""
        if data.start_slot is not None or data.end_slot is not None:
            current = await self.repos.tasks.find_owned(task_id, user_id)
            if not current:
                return None
            start_slot = data.start_slot if data.start_slot is not None else current.start_slot
            end_slot = data.end_slot if data.end_slot is not None else current.end_slot
            self._check_range(start_slot, end_slot)
            if "start" not in data.model_fields_set:
                data.start = self.grid.slot_label(start_slot)
            if "end" not in data.model_fields_set:
                data.end = self.grid.slot_label(end_slot)
        return await self.repos.tasks.update_owned(task_id, user_id, data)

    async def delete_task(self, task_id: str, user_id: str) -> bool:
        return await self.repos.tasks.delete_owned(task_id, user_id)
