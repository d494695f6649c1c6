"""UserService tests against a mocked AsyncSession.

Learn: The service only issues SELECT-by-email and INSERT, so a mocked
session is enough to check the query shape and the duplicate guard.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from staffgate.db.models import User
from staffgate.schemas.auth import Role
from staffgate.services.user_service import UserService


def _session_returning(user):
    result = MagicMock()
    result.scalars.return_value.first.return_value = user
    db = MagicMock()
    db.execute = AsyncMock(return_value=result)
    db.commit = AsyncMock()
    db.refresh = AsyncMock()
    return db


@pytest.mark.asyncio
async def test_find_unique_by_email(ann):
    db = _session_returning(ann)
    user = await UserService(db).find_unique_by_email("a@b.com")

    assert user is ann
    statement = db.execute.await_args.args[0]
    compiled = statement.compile(compile_kwargs={"literal_binds": True})
    assert "users.email = 'a@b.com'" in str(compiled)


@pytest.mark.asyncio
async def test_find_unique_by_email_missing():
    db = _session_returning(None)
    assert await UserService(db).find_unique_by_email("x@y.com") is None


@pytest.mark.asyncio
async def test_create_user():
    db = _session_returning(None)
    user = await UserService(db).create_user(
        email="new@example.com", name="New", password_hash="$2b$hash", role=Role.HR
    )

    assert isinstance(user, User)
    assert user.email == "new@example.com"
    assert user.role is Role.HR
    db.add.assert_called_once_with(user)
    db.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_create_user_duplicate_email(ann):
    db = _session_returning(ann)
    with pytest.raises(ValueError, match="already registered"):
        await UserService(db).create_user(
            email="a@b.com", name="Ann", password_hash="$2b$hash", role=Role.MANAGER
        )
    db.add.assert_not_called()
