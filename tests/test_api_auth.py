"""
Auth API tests

Sign-up, login, session cookie handling and account deletion.
"""
import asyncio
import time

from jose import jwt
from starlette.requests import Request

from app import config
from app.middleware.auth import get_current_user_id_optional, issue_session_token
from app.services.account_service import generate_user_id, hash_password, verify_password

CREDENTIALS = {"name": "Test User", "email": "test@example.com", "password": "correct horse battery"}


class TestPasswords:
    def test_hash_and_verify(self):
        stored = hash_password("s3cret", iterations=1000)
        assert stored.startswith("pbkdf2_sha256$1000$")
        assert verify_password("s3cret", stored)
        assert not verify_password("wrong", stored)

    def test_same_password_different_salt(self):
        assert hash_password("s3cret", iterations=1000) != hash_password("s3cret", iterations=1000)

    def test_malformed_hash(self):
        assert not verify_password("s3cret", "plaintext")
        assert not verify_password("s3cret", "md5$1$salt$abc")

    def test_user_id_format(self):
        assert generate_user_id().startswith("user_")


class TestSignup:
    def test_signup_creates_user(self, client, fake_db):
        response = client.post("/api/signup", json=CREDENTIALS)
        assert response.status_code == 201

        data = response.json()
        assert data["email"] == "test@example.com"
        assert data["user_id"].startswith("user_")

        stored = fake_db.rows("users")[0]
        assert stored["password_hash"] != CREDENTIALS["password"]

    def test_duplicate_email(self, client):
        client.post("/api/signup", json=CREDENTIALS)
        response = client.post("/api/signup", json=CREDENTIALS)
        assert response.status_code == 409

    def test_missing_fields(self, client):
        response = client.post("/api/signup", json={"email": "test@example.com"})
        assert response.status_code == 400


class TestLogin:
    def test_login_sets_session_cookie(self, client, user):
        response = client.post("/api/login", json={
            "email": CREDENTIALS["email"],
            "password": CREDENTIALS["password"],
        })
        assert response.status_code == 200
        assert response.json()["user"] == {
            "user_id": user["user_id"],
            "name": "Test User",
            "email": "test@example.com",
        }
        assert config.SESSION_COOKIE_NAME in response.cookies
        assert "httponly" in response.headers["set-cookie"].lower()

    def test_session_from_cookie(self, client, user):
        client.post("/api/login", json={
            "email": CREDENTIALS["email"],
            "password": CREDENTIALS["password"],
        })
        response = client.get("/api/session")
        assert response.json()["user_id"] == user["user_id"]

    def test_unknown_email(self, client):
        response = client.post("/api/login", json={"email": "nobody@example.com", "password": "x"})
        assert response.status_code == 404

    def test_wrong_password(self, client, user):
        response = client.post("/api/login", json={"email": CREDENTIALS["email"], "password": "nope"})
        assert response.status_code == 401

    def test_logout(self, client):
        response = client.post("/api/logout")
        assert response.status_code == 200
        assert response.json() == {"message": "Logged out"}


class TestSession:
    def test_no_session(self, client):
        assert client.get("/api/session").json() == {"data": None}

    def test_session_from_bearer_token(self, client, user, auth_headers):
        data = client.get("/api/session", headers=auth_headers).json()
        assert data == {"user_id": user["user_id"], "email": "test@example.com", "name": "Test User"}

    def test_protected_endpoint_requires_session(self, client):
        assert client.get("/api/tasks").status_code == 401

    def test_invalid_token(self, client):
        response = client.get("/api/tasks", headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == 401

    def test_wrong_scheme(self, client):
        response = client.get("/api/tasks", headers={"Authorization": "Basic abc"})
        assert response.status_code == 401

    def test_expired_token(self, client, user):
        now = int(time.time())
        token = jwt.encode(
            {"sub": user["user_id"], "iat": now - 100, "exp": now - 10},
            "test-session-secret",
            algorithm="HS256",
        )
        response = client.get("/api/tasks", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401
        assert response.json()["detail"] == "Session has expired"

    def test_token_signed_with_other_secret(self, client, user):
        token = jwt.encode({"sub": user["user_id"]}, "other-secret", algorithm="HS256")
        response = client.get("/api/tasks", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401


class TestAccountDeletion:
    def test_delete_account_removes_owned_data(self, client, fake_db, user, auth_headers, other_headers):
        client.post("/api/todos", json={"text": "mine"}, headers=auth_headers)
        client.post("/api/events", json={"title": "mine", "date": "2999-01-01"}, headers=auth_headers)
        client.post("/api/tasks/drag", json={"date": "2025-10-07", "anchor_slot": 9, "current_slot": 9},
                    headers=auth_headers)
        client.post("/api/todos", json={"text": "theirs"}, headers=other_headers)

        response = client.delete("/api/account", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["success"] is True

        assert [u["email"] for u in fake_db.rows("users")] == ["other@example.com"]
        assert [t["text"] for t in fake_db.rows("todos")] == ["theirs"]
        assert fake_db.rows("events") == []
        assert fake_db.rows("tasks") == []

    def test_delete_missing_account(self, client, user, auth_headers):
        client.delete("/api/account", headers=auth_headers)
        response = client.delete("/api/account", headers=auth_headers)
        assert response.status_code == 404


class TestOptionalSession:
    def _request(self):
        return Request({"type": "http", "headers": []})

    def test_anonymous(self):
        assert asyncio.run(get_current_user_id_optional(self._request(), None)) is None

    def test_bearer(self):
        token = issue_session_token("user_1", "a@example.com", "A")
        user_id = asyncio.run(get_current_user_id_optional(self._request(), f"Bearer {token}"))
        assert user_id == "user_1"

    def test_garbage_token(self):
        assert asyncio.run(get_current_user_id_optional(self._request(), "Bearer junk")) is None
