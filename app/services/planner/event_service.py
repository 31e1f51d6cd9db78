"""
Event Service

Upcoming events live in their own table until their day comes; on that day
they are moved onto the calendar as tasks.
"""
import logging
from datetime import date
from typing import List, Optional

from app.infra.supabase.repositories import RepositoryFactory
from app.models.event import Event, EventCreate, EventUpdate, ROLLOVER_EVENT_COLOR
from app.services.calendar.task_service import task_from_clock_range
from app.services.calendar.timeline import TimeGrid, events_for_date
from app.services.errors import ValidationError
from app.utils.datetime_helper import today_utc

logger = logging.getLogger(__name__)

DEFAULT_EVENT_START = "09:00"
DEFAULT_EVENT_END = "10:00"


class EventService:
    """Service for managing upcoming events"""

    def __init__(self, repos: RepositoryFactory, grid: TimeGrid):
        self.repos = repos
        self.grid = grid

    async def roll_over_today(self, user_id: str, today: Optional[date] = None) -> int:
        """
        Move today's events onto the calendar.

        Returns:
            Number of events moved
        """
        today = today or today_utc()
        events = await self.repos.events.find_by_owner(user_id)
        moved = 0
        for event in events_for_date(events, today):
            try:
                candidate = task_from_clock_range(
                    self.grid,
                    event.title,
                    event.start or DEFAULT_EVENT_START,
                    event.end or DEFAULT_EVENT_END,
                    event.date,
                    event.color or ROLLOVER_EVENT_COLOR,
                )
            except ValidationError as e:
                logger.warning(f"Leaving event {event.id} in place: {e}")
                continue
            await self.repos.tasks.create(user_id, candidate)
            await self.repos.events.delete_owned(event.id, user_id)
            moved += 1

        if moved:
            logger.info(f"Moved {moved} event(s) for {today.isoformat()} onto the calendar of {user_id}")
        return moved

    async def list_upcoming(self, user_id: str, today: Optional[date] = None) -> List[Event]:
        """Roll today's events over, then return the remaining ones"""
        await self.roll_over_today(user_id, today)
        return await self.repos.events.find_by_owner(user_id)

    async def create_event(self, user_id: str, data: EventCreate) -> Event:
        return await self.repos.events.create(user_id, data)

    async def update_event(self, event_id: str, user_id: str, data: EventUpdate) -> Optional[Event]:
        return await self.repos.events.update_owned(event_id, user_id, data)

    async def delete_event(self, event_id: str, user_id: str) -> bool:
        return await self.repos.events.delete_owned(event_id, user_id)
