"""staffgate — credentials sign-in and JWT sessions for the HR portal.

HR staff and managers sign in with email/password. The service verifies
them against the users table, hands back a signed session token, and
turns that token into a session object on every request.
"""

__version__ = "0.1.0"
