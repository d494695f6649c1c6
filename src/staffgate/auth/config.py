"""Explicit auth configuration.

Learn: AuthService never reads settings or the environment itself.
It gets an AuthConfig, usually built once from Settings, but tests
and scripts can construct one directly with their own secret.
"""

from dataclasses import dataclass
from datetime import timedelta

from staffgate.config import Settings


@dataclass(frozen=True)
class AuthConfig:
    secret: str
    algorithm: str = "HS256"
    session_max_age: timedelta = timedelta(days=30)
    session_update_age: timedelta = timedelta(hours=24)
    jwt_max_age: timedelta = timedelta(days=30)
    sign_in_page: str = "/auth/login"
    error_page: str = "/auth/login"
    cookie_name: str = "staffgate.session-token"
    cookie_secure: bool = False
    strategy: str = "jwt"  # stateless tokens, no server-side session store

    def __post_init__(self):
        if not self.secret:
            raise ValueError("AuthConfig.secret must not be empty")

    @classmethod
    def from_settings(cls, settings: Settings) -> "AuthConfig":
        max_age = timedelta(seconds=settings.session_max_age)
        return cls(
            secret=settings.secret,
            algorithm=settings.jwt_algorithm,
            session_max_age=max_age,
            session_update_age=timedelta(seconds=settings.session_update_age),
            jwt_max_age=max_age,
            sign_in_page=settings.sign_in_page,
            error_page=settings.error_page,
            cookie_name=settings.session_cookie_name,
            cookie_secure=settings.environment != "development",
        )
