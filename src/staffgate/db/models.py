"""SQLAlchemy ORM models.

Learn: Declarative ORM mapping with SQLAlchemy 2.0 style (Mapped[] + mapped_column).
The users table is owned by the HR portal; this service only reads it
during sign-in (the CLI is the one writer, for seeding accounts).
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, Enum as SAEnum, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from staffgate.schemas.auth import Role


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


def new_id() -> str:
    return str(uuid.uuid4())


class User(Base):
    """An HR staff member or manager who can sign in to the portal."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    password: Mapped[str] = mapped_column(String(255), nullable=False)  # bcrypt
    role: Mapped[Role] = mapped_column(
        SAEnum(
            Role,
            name="user_role",
            values_callable=lambda enum: [member.value for member in enum],
        ),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
