"""User account repository"""
from datetime import datetime, timezone
from typing import Optional, Dict, Any

from supabase import Client  # type: ignore

from app.models.user import User, UserCreate


class UserRepository:
    """Repository for user accounts (keyed by the opaque user id)"""

    def __init__(self, client: Client):
        self._client = client
        self._table_name = "users"

    def _to_model(self, data: Dict[str, Any]) -> User:
        return User(**data)

    async def find_by_id(self, user_id: str) -> Optional[User]:
        response = self._client.table(self._table_name).select("*").eq("id", user_id).execute()

        if not response.data:
            return None

        return self._to_model(response.data[0])

    async def find_by_email(self, email: str) -> Optional[User]:
        response = self._client.table(self._table_name).select("*").eq("email", email).execute()

        if not response.data:
            return None

        return self._to_model(response.data[0])

    async def create(self, data: UserCreate) -> User:
        data_dict = data.model_dump(mode='json')
        now = datetime.now(timezone.utc).isoformat()
        data_dict.update({"created_at": now, "updated_at": now})
        response = self._client.table(self._table_name).insert(data_dict).execute()

        if not response.data:
            raise ValueError("Failed to create user")

        return self._to_model(response.data[0])

    async def delete(self, user_id: str) -> bool:
        response = self._client.table(self._table_name).delete().eq("id", user_id).execute()
        return len(response.data) > 0
