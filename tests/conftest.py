"""Test fixtures — in-memory users, a fixed signing secret, and an HTTP client.

Learn: AuthService only needs something with find_unique_by_email(), so
tests hand it an in-memory store instead of Postgres. The HTTP client
overrides get_auth_config and get_user_store, which means get_db is
never resolved and no database connection is opened.
"""

from typing import Optional

import bcrypt
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from staffgate.auth.config import AuthConfig
from staffgate.auth.dependencies import get_auth_config, get_user_store
from staffgate.auth.service import AuthService
from staffgate.db.models import User
from staffgate.main import app
from staffgate.schemas.auth import Role

TEST_SECRET = "test-signing-secret-0123456789abcdef"
ANN_PASSWORD = "correct-horse-battery"
HANNAH_PASSWORD = "people-ops-2024"


def _fast_hash(password: str) -> str:
    # Low work factor keeps the suite quick; verification is identical.
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=4)).decode()


class InMemoryUserStore:
    """Dict-backed stand-in for UserService."""

    def __init__(self, users: list[User]):
        self.users = {u.email: u for u in users}
        self.lookups: list[str] = []

    async def find_unique_by_email(self, email: str) -> Optional[User]:
        self.lookups.append(email)
        return self.users.get(email)


@pytest.fixture(scope="session")
def ann() -> User:
    return User(
        id="u1",
        email="a@b.com",
        name="Ann",
        password=_fast_hash(ANN_PASSWORD),
        role=Role.MANAGER,
    )


@pytest.fixture(scope="session")
def hannah() -> User:
    return User(
        id="u2",
        email="hannah@example.com",
        name="Hannah",
        password=_fast_hash(HANNAH_PASSWORD),
        role=Role.HR,
    )


@pytest.fixture()
def auth_config() -> AuthConfig:
    return AuthConfig(secret=TEST_SECRET)


@pytest.fixture()
def user_store(ann, hannah) -> InMemoryUserStore:
    return InMemoryUserStore([ann, hannah])


@pytest.fixture()
def auth_service(auth_config, user_store) -> AuthService:
    return AuthService(auth_config, user_store)


@pytest_asyncio.fixture()
async def client(auth_config, user_store):
    """HTTP client with config and user store overridden for testing."""
    app.dependency_overrides[get_auth_config] = lambda: auth_config
    app.dependency_overrides[get_user_store] = lambda: user_store

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture(scope="session")
def passwords() -> dict[str, str]:
    """Plaintext passwords of the seeded users, by email."""
    return {"a@b.com": ANN_PASSWORD, "hannah@example.com": HANNAH_PASSWORD}
