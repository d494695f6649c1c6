"""Authorization failures.

Each failure cause is its own type with a stable ``kind`` tag, so
callers can log the precise reason while still showing users one
generic "invalid credentials" message.
"""

from typing import Optional


class AuthorizationError(Exception):
    """Base class for credential authorization failures."""

    kind = "authorization_error"
    message = "Authorization failed"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)


class InvalidInput(AuthorizationError):
    """Email or password missing from the credentials."""

    kind = "invalid_input"
    message = "Invalid credentials"


class UserNotFound(AuthorizationError):
    kind = "user_not_found"
    message = "User not found"


class InvalidPassword(AuthorizationError):
    kind = "invalid_password"
    message = "Invalid password"
