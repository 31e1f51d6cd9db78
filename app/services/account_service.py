"""
Account Service

Handles sign-up, credential checks and account deletion. Passwords are
stored as salted PBKDF2-SHA256 hashes: "pbkdf2_sha256$<iterations>$<salt>$<hash>".
"""
import hashlib
import hmac
import logging
import secrets
from uuid import uuid4

from app.infra.supabase.repositories import RepositoryFactory
from app.models.user import User, UserCreate

logger = logging.getLogger(__name__)

PBKDF2_ITERATIONS = 260_000


class AccountExistsError(ValueError):
    pass


class InvalidCredentialsError(ValueError):
    pass


def hash_password(password: str, iterations: int = PBKDF2_ITERATIONS) -> str:
    salt = secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode(), salt.encode(), iterations)
    return f"pbkdf2_sha256${iterations}${salt}${digest.hex()}"


def verify_password(password: str, stored: str) -> bool:
    try:
        algorithm, iterations, salt, expected = stored.split("$")
    except ValueError:
        return False
    if algorithm != "pbkdf2_sha256":
        return False
    digest = hashlib.pbkdf2_hmac("sha256", password.encode(), salt.encode(), int(iterations))
    return hmac.compare_digest(digest.hex(), expected)


def generate_user_id() -> str:
    return f"user_{uuid4()}"


class AccountService:
    """Service for user accounts"""

    def __init__(self, repos: RepositoryFactory):
        self.repos = repos

    async def sign_up(self, name: str, email: str, password: str) -> User:
        """
        Register a new user.

        Raises:
            AccountExistsError: If the email is already registered
        """
        existing = await self.repos.users.find_by_email(email)
        if existing:
            raise AccountExistsError("User already exists")

        user = await self.repos.users.create(UserCreate(
            id=generate_user_id(),
            name=name,
            email=email,
            password_hash=hash_password(password),
        ))
        logger.info(f"Created user {user.id}")
        return user

    async def authenticate(self, email: str, password: str) -> User:
        """
        Check credentials.

        Raises:
            LookupError: If no account exists for the email
            InvalidCredentialsError: If the password does not match
        """
        user = await self.repos.users.find_by_email(email)
        if not user:
            raise LookupError("No account found. Please sign up.")
        if not verify_password(password, user.password_hash):
            logger.warning(f"Failed login for user {user.id}")
            raise InvalidCredentialsError("Invalid credentials.")
        return user

    async def delete_account(self, user_id: str) -> bool:
        """Delete the user and everything they own; False if the user does not exist"""
        user = await self.repos.users.find_by_id(user_id)
        if not user:
            return False

        todos = await self.repos.todos.delete_by_owner(user_id)
        events = await self.repos.events.delete_by_owner(user_id)
        tasks = await self.repos.tasks.delete_by_owner(user_id)
        await self.repos.users.delete(user_id)
        logger.info(
            f"Deleted account {user_id} ({todos} todos, {events} events, {tasks} tasks)"
        )
        return True
