"""Upcoming event repository"""
from typing import List

from supabase import Client  # type: ignore

from app.models.event import Event, EventCreate, EventUpdate

from .base import OwnedRepository


class EventRepository(OwnedRepository[Event, EventCreate, EventUpdate]):
    """Repository for event operations"""

    def __init__(self, client: Client):
        super().__init__(client, "events", Event)

    async def find_for_date(self, user_id: str, date: str) -> List[Event]:
        return await self.find_by_filters(user_id, {"date": date})
