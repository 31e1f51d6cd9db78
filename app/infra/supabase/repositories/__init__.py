"""Repository factory and exports"""
from supabase import Client  # type: ignore
from .base import OwnedRepository, normalize_record
from .tasks import TaskRepository
from .todos import TodoRepository
from .events import EventRepository
from .users import UserRepository


class RepositoryFactory:
    """Factory for creating repository instances"""

    def __init__(self, client: Client):
        self._client = client
        self._tasks: TaskRepository = None
        self._todos: TodoRepository = None
        self._events: EventRepository = None
        self._users: UserRepository = None

    @property
    def tasks(self) -> TaskRepository:
        """Get task repository"""
        if self._tasks is None:
            self._tasks = TaskRepository(self._client)
        return self._tasks

    @property
    def todos(self) -> TodoRepository:
        """Get todo repository"""
        if self._todos is None:
            self._todos = TodoRepository(self._client)
        return self._todos

    @property
    def events(self) -> EventRepository:
        """Get event repository"""
        if self._events is None:
            self._events = EventRepository(self._client)
        return self._events

    @property
    def users(self) -> UserRepository:
        """Get user repository"""
        if self._users is None:
            self._users = UserRepository(self._client)
        return self._users


__all__ = [
    'RepositoryFactory',
    'OwnedRepository',
    'normalize_record',
    'TaskRepository',
    'TodoRepository',
    'EventRepository',
    'UserRepository',
]
