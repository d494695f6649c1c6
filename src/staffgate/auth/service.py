"""Credentials sign-in and claim propagation.

Learn: This is the whole sign-in pipeline in one place:

    authorize()        credentials → user lookup → bcrypt compare
    jwt_callback()     user → token claims (first sign-in only)
    session_callback() token claims → session.user (every read)
    on_sign_in/out()   log lifecycle events

sign_in(), build_session() and refresh_token() compose those steps with
the TokenCodec so the HTTP layer stays a thin wrapper.
"""

import asyncio
from typing import Optional

import structlog

from staffgate.auth.config import AuthConfig
from staffgate.auth.errors import (
    AuthorizationError,
    InvalidInput,
    InvalidPassword,
    UserNotFound,
)
from staffgate.auth.jwt import TokenCodec
from staffgate.auth.password import verify_password
from staffgate.schemas.auth import (
    AuthorizedUser,
    Credentials,
    Role,
    Session,
    SessionUser,
)
from staffgate.services.user_service import UserStore

logger = structlog.get_logger()

IDENTITY_CLAIMS = ("id", "email", "name", "role")


class AuthService:
    """Auth hooks bound to one config and one user store."""

    def __init__(self, config: AuthConfig, users: UserStore):
        self.config = config
        self.users = users
        self.tokens = TokenCodec(config)

    # ─── Credentials provider ───────────────────────────

    async def authorize(self, credentials: Optional[Credentials]) -> AuthorizedUser:
        """Check email/password against the user store.

        Raises InvalidInput, UserNotFound or InvalidPassword. The stored
        hash never leaves this method.
        """
        if not credentials or not credentials.email or not credentials.password:
            raise InvalidInput()

        user = await self.users.find_unique_by_email(credentials.email)
        if not user:
            raise UserNotFound()

        # bcrypt is deliberately slow; keep it off the event loop
        is_valid = await asyncio.to_thread(
            verify_password, credentials.password, user.password
        )
        if not is_valid:
            raise InvalidPassword()

        return AuthorizedUser(
            id=str(user.id),
            email=user.email,
            name=user.name,
            role=Role(user.role),
        )

    # ─── Callbacks ──────────────────────────────────────

    async def jwt_callback(
        self, token: dict, user: Optional[AuthorizedUser] = None
    ) -> dict:
        """Copy identity onto the token on first sign-in only.

        On refresh there is no user, and the token comes back unchanged.
        """
        if user:
            token["id"] = user.id
            token["email"] = user.email
            token["name"] = user.name
            token["role"] = user.role.value
        return token

    async def session_callback(self, session: Session, token: dict) -> Session:
        """Project token claims onto session.user."""
        if session.user:
            session.user = session.user.model_copy(
                update={
                    "id": token["id"],
                    "email": token["email"],
                    "name": token["name"],
                    "role": Role(token["role"]),
                }
            )
        return session

    # ─── Events ─────────────────────────────────────────

    async def on_sign_in(self, user: AuthorizedUser, is_new_user: bool = False) -> None:
        logger.info("auth.sign_in", email=user.email, is_new_user=is_new_user)

    async def on_sign_out(self, token: Optional[dict] = None) -> None:
        # The token is already invalidated at this point; log no identity.
        logger.info("auth.sign_out")

    # ─── Composed flows ─────────────────────────────────

    async def sign_in(self, credentials: Optional[Credentials]) -> tuple[str, Session]:
        """authorize → jwt_callback → sign → on_sign_in.

        Returns the encoded token and the session it materializes to.
        AuthorizationError subclasses propagate after being logged.
        """
        try:
            user = await self.authorize(credentials)
        except AuthorizationError as e:
            logger.warning(
                "auth.authorize_failed",
                kind=e.kind,
                email=credentials.email if credentials else None,
            )
            raise

        claims = await self.jwt_callback({}, user=user)
        token = self.tokens.encode(claims)
        await self.on_sign_in(user)
        session = await self.build_session(self.tokens.decode(token))
        return token, session

    async def build_session(self, claims: dict) -> Session:
        """Default session shape from the claims, then the session callback."""
        session = Session(
            user=SessionUser(
                name=claims.get("name"),
                email=claims.get("email"),
                image=claims.get("picture"),
            ),
            expires=self.tokens.expires_at(claims).isoformat(),
        )
        return await self.session_callback(session, claims)

    async def refresh_token(self, claims: dict) -> str:
        """Re-issue a token for an existing session (no user present)."""
        claims = await self.jwt_callback(
            {k: claims[k] for k in IDENTITY_CLAIMS}
        )
        return self.tokens.encode(claims)
