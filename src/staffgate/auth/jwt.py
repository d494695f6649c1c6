"""Session token creation and verification.

Learn: JWT (JSON Web Token) keeps sessions stateless — the identity
claims live in the signed token, not in a server-side store.
- The token lives for jwt_max_age (30 days) from its issue time.
- Once it is older than session_update_age (24h) it gets re-issued
  with a fresh iat/exp, so active users never hit the 30-day wall.
"""

from datetime import datetime, timezone
from typing import Optional

import jwt
from pydantic import ValidationError

from staffgate.auth.config import AuthConfig
from staffgate.schemas.auth import TokenClaims


class TokenError(Exception):
    """Raised when token creation/verification fails."""


class TokenCodec:
    """Signs and verifies session tokens for one AuthConfig."""

    def __init__(self, config: AuthConfig):
        self.config = config

    def encode(self, claims: dict, issued_at: Optional[datetime] = None) -> str:
        """Sign ``claims`` into a compact JWT.

        Registered claims (sub/iat/exp) are always recomputed; the
        identity claims are copied through untouched.
        """
        if "id" not in claims:
            raise TokenError("Cannot issue a token without an id claim")
        issued_at = issued_at or datetime.now(timezone.utc)
        payload = {
            **claims,
            "sub": str(claims["id"]),
            "iat": issued_at,
            "exp": issued_at + self.config.jwt_max_age,
        }
        return jwt.encode(
            payload, self.config.secret, algorithm=self.config.algorithm
        )

    def decode(self, token: str) -> dict:
        """Verify and decode a session token.

        Returns the payload dict on success.
        Raises TokenError on failure, including payloads whose identity
        claims are missing or carry an unknown role.
        """
        try:
            payload = jwt.decode(
                token,
                self.config.secret,
                algorithms=[self.config.algorithm],
                options={"require": ["exp", "iat", "sub"]},
            )
        except jwt.ExpiredSignatureError:
            raise TokenError("Token has expired")
        except jwt.InvalidTokenError as e:
            raise TokenError(f"Invalid token: {e}")

        try:
            TokenClaims.model_validate(payload)
        except ValidationError as e:
            raise TokenError(f"Invalid token claims: {e.error_count()} error(s)")
        return payload

    def needs_update(self, claims: dict, now: Optional[datetime] = None) -> bool:
        """True once the token is older than session_update_age."""
        now = now or datetime.now(timezone.utc)
        issued_at = datetime.fromtimestamp(claims["iat"], tz=timezone.utc)
        return now - issued_at >= self.config.session_update_age

    def expires_at(self, claims: dict) -> datetime:
        """When the session backed by these claims lapses."""
        issued_at = datetime.fromtimestamp(claims["iat"], tz=timezone.utc)
        return issued_at + self.config.session_max_age
