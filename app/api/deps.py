"""Shared FastAPI dependencies"""
from app import config
from app.services.calendar.timeline import TimeGrid


def get_grid() -> TimeGrid:
    """Day timeline used by every calendar endpoint"""
    return TimeGrid(slots_per_day=config.SLOTS_PER_DAY, slot_minutes=config.SLOT_MINUTES)
