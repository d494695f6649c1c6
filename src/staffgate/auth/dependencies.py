"""FastAPI auth dependencies.

Learn: These are used as Depends() in route handlers. The chain is

    get_auth_config ─┐
                     ├─> get_auth_service ─> get_optional_session ─> get_current_session
    get_user_store ──┘

Tests override get_auth_config (to inject a secret) and get_user_store
(to swap the database for an in-memory store).
"""

from functools import lru_cache
from typing import Optional

import structlog
from fastapi import Depends, Header, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from staffgate.auth.config import AuthConfig
from staffgate.auth.jwt import TokenError
from staffgate.auth.service import AuthService
from staffgate.config import settings
from staffgate.db.engine import get_db
from staffgate.schemas.auth import Session
from staffgate.services.user_service import UserService, UserStore

logger = structlog.get_logger()


@lru_cache
def get_auth_config() -> AuthConfig:
    return AuthConfig.from_settings(settings)


async def get_user_store(db: AsyncSession = Depends(get_db)) -> UserStore:
    return UserService(db)


def get_auth_service(
    config: AuthConfig = Depends(get_auth_config),
    users: UserStore = Depends(get_user_store),
) -> AuthService:
    return AuthService(config, users)


def extract_tokens(
    request: Request, authorization: Optional[str], config: AuthConfig
) -> list[str]:
    """Candidate tokens: the session cookie first, then a Bearer header."""
    tokens = []
    cookie = request.cookies.get(config.cookie_name)
    if cookie:
        tokens.append(cookie)
    if authorization and authorization.startswith("Bearer "):
        tokens.append(authorization[7:])
    return tokens


def decode_first_valid(auth: AuthService, tokens: list[str]) -> Optional[dict]:
    """Claims of the first token that verifies, or None.

    A stale cookie does not shadow a valid Bearer header sent alongside it.
    """
    for token in tokens:
        try:
            return auth.tokens.decode(token)
        except TokenError as e:
            logger.info("auth.token_rejected", error=str(e))
    return None


async def get_optional_session(
    request: Request,
    authorization: Optional[str] = Header(None),
    auth: AuthService = Depends(get_auth_service),
) -> Optional[Session]:
    """Current session, or None when there is no valid token.

    Learn: This is the "soft" dependency. An expired or tampered token
    is treated the same as no token at all.
    """
    claims = decode_first_valid(
        auth, extract_tokens(request, authorization, auth.config)
    )
    if claims is None:
        return None
    return await auth.build_session(claims)


async def get_current_session(
    session: Optional[Session] = Depends(get_optional_session),
) -> Session:
    """Current session (required — 401 if missing)."""
    if not session:
        raise HTTPException(
            status_code=401,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return session
