# API module exports
from app.api import account, auth, calendar, events, health, tasks, timer, todos
from app.api.base import api_router

__all__ = ["account", "auth", "calendar", "events", "health", "tasks", "timer", "todos", "api_router"]
