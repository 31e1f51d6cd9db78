"""Todo and event services"""
from .todo_service import TodoService
from .event_service import EventService

__all__ = ["TodoService", "EventService"]
