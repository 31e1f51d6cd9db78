"""
Test configuration - in-memory Supabase stand-in and authenticated clients.

Repositories talk to FakeSupabaseClient, which supports the subset of the
query builder they use: table().select/insert/update/delete().eq().limit().execute().
"""
import copy
from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from app import config
from app.infra.supabase import get_repositories
from app.infra.supabase.repositories import RepositoryFactory
from app.main import app
from app.middleware.auth import issue_session_token

TEST_PASSWORD = "correct horse battery"


class FakeResponse:
    def __init__(self, data: List[Dict[str, Any]]):
        self.data = data
        self.count = len(data)


class FakeQuery:
    def __init__(self, rows: List[Dict[str, Any]]):
        self._rows = rows
        self._op = "select"
        self._payload: Optional[Dict[str, Any]] = None
        self._filters: List[tuple] = []
        self._limit: Optional[int] = None

    def select(self, *columns):
        self._op = "select"
        return self

    def insert(self, payload: Dict[str, Any]):
        self._op = "insert"
        self._payload = payload
        return self

    def update(self, payload: Dict[str, Any]):
        self._op = "update"
        self._payload = payload
        return self

    def delete(self):
        self._op = "delete"
        return self

    def eq(self, column: str, value: Any):
        self._filters.append((column, value))
        return self

    def limit(self, count: int):
        self._limit = count
        return self

    def _matches(self, row: Dict[str, Any]) -> bool:
        return all(row.get(column) == value for column, value in self._filters)

    def execute(self) -> FakeResponse:
        if self._op == "insert":
            row = copy.deepcopy(self._payload)
            self._rows.append(row)
            return FakeResponse([copy.deepcopy(row)])

        matched = [row for row in self._rows if self._matches(row)]

        if self._op == "update":
            for row in matched:
                row.update(copy.deepcopy(self._payload))
        elif self._op == "delete":
            self._rows[:] = [row for row in self._rows if not self._matches(row)]
        elif self._limit is not None:
            matched = matched[:self._limit]

        return FakeResponse(copy.deepcopy(matched))


class FakeSupabaseClient:
    def __init__(self):
        self.tables: Dict[str, List[Dict[str, Any]]] = {}

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self.tables.setdefault(name, []))

    def rows(self, name: str) -> List[Dict[str, Any]]:
        return self.tables.get(name, [])


@pytest.fixture(autouse=True)
def session_secret(monkeypatch):
    """Sign sessions with a fixed test secret"""
    monkeypatch.setattr(config, "SESSION_SECRET", "test-session-secret")


@pytest.fixture
def fake_db():
    return FakeSupabaseClient()


@pytest.fixture
def repos(fake_db):
    return RepositoryFactory(fake_db)


@pytest.fixture
def client(repos):
    """TestClient whose endpoints use the in-memory database"""
    app.dependency_overrides[get_repositories] = lambda: repos
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def signup(client, name: str, email: str, password: str = TEST_PASSWORD) -> Dict[str, Any]:
    response = client.post("/api/signup", json={"name": name, "email": email, "password": password})
    assert response.status_code == 201, response.text
    return response.json()


def bearer(user: Dict[str, Any], name: str = "Test User") -> Dict[str, str]:
    token = issue_session_token(user["user_id"], user["email"], name)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user(client):
    return signup(client, "Test User", "test@example.com")


@pytest.fixture
def auth_headers(user):
    return bearer(user)


@pytest.fixture
def other_headers(client):
    other = signup(client, "Other User", "other@example.com")
    return bearer(other, "Other User")
