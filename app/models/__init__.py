"""Domain models for the application"""
from .task import Task, TaskCreate, TaskUpdate, DEFAULT_TASK_TITLE, DEFAULT_TASK_COLOR
from .todo import Todo, TodoCreate, TodoUpdate
from .event import Event, EventCreate, EventUpdate, ROLLOVER_EVENT_COLOR
from .user import User, UserCreate, UserPublic

__all__ = [
    'Task', 'TaskCreate', 'TaskUpdate', 'DEFAULT_TASK_TITLE', 'DEFAULT_TASK_COLOR',
    'Todo', 'TodoCreate', 'TodoUpdate',
    'Event', 'EventCreate', 'EventUpdate', 'ROLLOVER_EVENT_COLOR',
    'User', 'UserCreate', 'UserPublic',
]
