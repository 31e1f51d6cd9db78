"""Upcoming event endpoints"""
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from app.api.deps import get_grid
from app.infra.supabase import get_repositories
from app.infra.supabase.repositories import RepositoryFactory
from app.middleware.auth import get_current_user_id
from app.models.event import Event, EventCreate, EventUpdate
from app.services.calendar.timeline import TimeGrid
from app.services.planner import EventService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/events", tags=["events"])


class EventResponse(BaseModel):
    event: Event


class EventListResponse(BaseModel):
    events: List[Event]
    count: int


class DeleteResponse(BaseModel):
    success: bool
    message: str


@router.get("", response_model=EventListResponse)
async def list_events(
    user_id: str = Depends(get_current_user_id),
    repos: RepositoryFactory = Depends(get_repositories),
    grid: TimeGrid = Depends(get_grid),
):
    """
    List upcoming events.

    Events dated today are first moved onto the calendar as tasks, so only
    events still ahead are returned.
    """
    try:
        events = await EventService(repos, grid).list_upcoming(user_id)
    except Exception as e:
        logger.error(f"Failed to list events for {user_id}: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to list events: {str(e)}")

    return {"events": events, "count": len(events)}


@router.post("", response_model=EventResponse, status_code=201)
async def create_event(
    request: EventCreate,
    user_id: str = Depends(get_current_user_id),
    repos: RepositoryFactory = Depends(get_repositories),
    grid: TimeGrid = Depends(get_grid),
):
    """Create an upcoming event"""
    event = await EventService(repos, grid).create_event(user_id, request)
    return {"event": event}


@router.put("/{event_id}", response_model=EventResponse)
async def update_event(
    event_id: str,
    request: EventUpdate,
    user_id: str = Depends(get_current_user_id),
    repos: RepositoryFactory = Depends(get_repositories),
    grid: TimeGrid = Depends(get_grid),
):
    """Update an upcoming event"""
    event = await EventService(repos, grid).update_event(event_id, user_id, request)

    if not event:
        raise HTTPException(status_code=404, detail="Event not found or unauthorized")

    return {"event": event}


@router.delete("/{event_id}", response_model=DeleteResponse)
async def delete_event(
    event_id: str,
    user_id: str = Depends(get_current_user_id),
    repos: RepositoryFactory = Depends(get_repositories),
    grid: TimeGrid = Depends(get_grid),
):
    """Delete an upcoming event"""
    success = await EventService(repos, grid).delete_event(event_id, user_id)

    if not success:
        raise HTTPException(status_code=404, detail="Event not found or unauthorized")

    return {"success": True, "message": "Event deleted"}
