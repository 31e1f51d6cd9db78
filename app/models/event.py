"""Upcoming event domain model"""
from typing import Optional
from pydantic import BaseModel

from .task import DEFAULT_TASK_COLOR

ROLLOVER_EVENT_COLOR = "bg-green-100 border-l-4 border-green-500"


class EventBase(BaseModel):
    """Base event fields"""
    title: str
    date: str  # YYYY-MM-DD
    start: Optional[str] = None
    end: Optional[str] = None
    color: str = DEFAULT_TASK_COLOR
    description: str = ""


class EventCreate(EventBase):
    """Event creation model"""
    id: Optional[str] = None


class EventUpdate(BaseModel):
    """Event update model - all fields optional"""
    title: Optional[str] = None
    date: Optional[str] = None
    start: Optional[str] = None
    end: Optional[str] = None
    color: Optional[str] = None
    description: Optional[str] = None


class Event(EventBase):
    """Complete event model from database"""
    id: str
    user_id: str

    class Config:
        from_attributes = True
