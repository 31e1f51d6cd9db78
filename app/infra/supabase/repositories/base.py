"""Base repository with common CRUD operations scoped by owner"""
from datetime import datetime, timezone
from uuid import uuid4
from typing import Generic, TypeVar, Type, Optional, List, Dict, Any
from pydantic import BaseModel
from supabase import Client  # type: ignore

T = TypeVar('T', bound=BaseModel)
CreateT = TypeVar('CreateT', bound=BaseModel)
UpdateT = TypeVar('UpdateT', bound=BaseModel)

OWNER_COLUMN = "user_id"


def normalize_record(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Collapse the record identifier into a single string `id`.

    Older documents carry `_id` (sometimes alongside a client `id`); the
    database id wins so updates and deletes address the stored row.
    """
    record = dict(data)
    raw_id = record.pop("_id", None)
    if raw_id is not None:
        record["id"] = raw_id
    if record.get("id") is not None:
        record["id"] = str(record["id"])
    return record


class OwnedRepository(Generic[T, CreateT, UpdateT]):
    """
    Base repository providing common database operations.
    Hides Supabase implementation details from the rest of the application.
    Every query is filtered by the owner's user id.
    """

    def __init__(self, client: Client, table_name: str, model_class: Type[T]):
        self._client = client
        self._table_name = table_name
        self._model_class = model_class

    def _table(self):
        return self._client.table(self._table_name)

    def _to_model(self, data: Dict[str, Any]) -> T:
        """Convert database dict to domain model"""
        return self._model_class(**normalize_record(data))

    def _to_models(self, data: List[Dict[str, Any]]) -> List[T]:
        """Convert list of database dicts to domain models"""
        return [self._to_model(item) for item in data]

    @staticmethod
    def _now() -> str:
        return datetime.now(timezone.utc).isoformat()

    async def find_by_owner(self, user_id: str, limit: Optional[int] = None) -> List[T]:
        """Find all records of a user"""
        query = self._table().select("*").eq(OWNER_COLUMN, user_id)

        if limit:
            query = query.limit(limit)

        response = query.execute()
        return self._to_models(response.data)

    async def find_by_filters(self, user_id: str, filters: Dict[str, Any]) -> List[T]:
        """Find a user's records matching all filters"""
        query = self._table().select("*").eq(OWNER_COLUMN, user_id)

        for key, value in filters.items():
            query = query.eq(key, value)

        response = query.execute()
        return self._to_models(response.data)

    async def find_owned(self, id: str, user_id: str) -> Optional[T]:
        """Find a single record by ID, only if it belongs to the user"""
        response = (
            self._table().select("*").eq("id", id).eq(OWNER_COLUMN, user_id).execute()
        )

        if not response.data:
            return None

        return self._to_model(response.data[0])

    async def create(self, user_id: str, data: CreateT) -> T:
        """Create a new record owned by the user"""
        data_dict = data.model_dump(exclude_none=True, mode='json')
        now = self._now()
        data_dict.setdefault("id", uuid4().hex)
        data_dict.update({OWNER_COLUMN: user_id, "created_at": now, "updated_at": now})
        response = self._table().insert(data_dict).execute()

        if not response.data:
            raise ValueError("Failed to create record")

        return self._to_model(response.data[0])

    async def update_owned(self, id: str, user_id: str, data: UpdateT) -> Optional[T]:
        """Update a user's record by ID"""
        data_dict = data.model_dump(exclude_unset=True, mode='json')

        if not data_dict:
            # No fields to update
            return await self.find_owned(id, user_id)

        data_dict["updated_at"] = self._now()
        response = (
            self._table().update(data_dict).eq("id", id).eq(OWNER_COLUMN, user_id).execute()
        )

        if not response.data:
            return None

        return self._to_model(response.data[0])

    async def delete_owned(self, id: str, user_id: str) -> bool:
        """Delete a user's record by ID"""
        response = self._table().delete().eq("id", id).eq(OWNER_COLUMN, user_id).execute()
        return len(response.data) > 0

    async def delete_by_owner(self, user_id: str) -> int:
        """Delete every record of a user, returns the number deleted"""
        response = self._table().delete().eq(OWNER_COLUMN, user_id).execute()
        return len(response.data) if response.data else 0
