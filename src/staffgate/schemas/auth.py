"""Pydantic schemas for credentials, token claims and sessions.

Learn: Role is a closed enum. Anything other than "hr" or "manager"
fails validation wherever a Role is parsed — DB rows, token payloads,
request bodies and CLI input all go through these models.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel


class Role(str, Enum):
    HR = "hr"
    MANAGER = "manager"


# ─── Sign-in ──────────────────────────────────────────────


class Credentials(BaseModel):
    """Email/password pair. Missing or null fields are allowed through so
    the authorizer (not request validation) decides they are invalid."""

    email: Optional[str] = None
    password: Optional[str] = None


class AuthorizedUser(BaseModel):
    """Identity projection returned by a successful authorize()."""

    id: str
    email: str
    name: str
    role: Role

    model_config = {"from_attributes": True}


# ─── Token ────────────────────────────────────────────────


class TokenClaims(BaseModel):
    id: str
    email: str
    name: str
    role: Role
    sub: Optional[str] = None
    iat: Optional[int] = None
    exp: Optional[int] = None


# ─── Session ──────────────────────────────────────────────


class SessionUser(BaseModel):
    id: Optional[str] = None
    email: Optional[str] = None
    name: Optional[str] = None
    role: Optional[Role] = None
    image: Optional[str] = None


class Session(BaseModel):
    user: Optional[SessionUser] = None
    expires: Optional[str] = None


# ─── Responses ────────────────────────────────────────────


class SignInError(BaseModel):
    error: str = "CredentialsSignin"
    url: str


class SignOutResponse(BaseModel):
    url: str
