"""User service — the lookups sign-in needs, plus account seeding.

Learn: AuthService only depends on the UserStore protocol below
(one method: find a user uniquely by email). UserService is the
SQLAlchemy implementation; tests plug in an in-memory store instead.
"""

from typing import Optional, Protocol

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from staffgate.db.models import User
from staffgate.schemas.auth import Role


class UserStore(Protocol):
    async def find_unique_by_email(self, email: str) -> Optional[User]:
        ...


class UserService:
    """Database access for users."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_unique_by_email(self, email: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalars().first()

    async def create_user(
        self, email: str, name: str, password_hash: str, role: Role
    ) -> User:
        """Insert a user. Raises ValueError if the email is taken."""
        if await self.find_unique_by_email(email):
            raise ValueError(f"Email already registered: {email}")

        user = User(email=email, name=name, password=password_hash, role=role)
        self.db.add(user)
        await self.db.commit()
        await self.db.refresh(user)
        return user
