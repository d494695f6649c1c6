"""staffgate CLI — seed and manage sign-in accounts.

Usage:
    staffgate init-db                                        # Create the users table
    staffgate create-user --email a@b.com --name Ann --role manager
    staffgate hash-password                                  # Print a bcrypt hash

There is no registration page, so accounts are created here. Passwords
are always prompted (hidden, confirmed), never passed as arguments.
"""

from __future__ import annotations

import asyncio
import concurrent.futures
import sys

import click

from staffgate import __version__
from staffgate.auth.password import hash_password
from staffgate.schemas.auth import Role

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _run(coro):
    """Run an async coroutine from a synchronous Click handler.

    Handles nested event loops (e.g. when invoked via Click CliRunner
    inside an existing async context like tests) by offloading to a thread.
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)
    else:
        with concurrent.futures.ThreadPoolExecutor(max_workers=1) as pool:
            return pool.submit(asyncio.run, coro).result()


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(version=__version__, prog_name="staffgate")
def main():
    """staffgate — sign-in accounts for the HR portal."""


# ---------------------------------------------------------------------------
# staffgate init-db
# ---------------------------------------------------------------------------


@main.command("init-db")
def init_db():
    """Create the users table if it does not exist."""
    _run(_init_db_impl())
    click.secho("users table ready", fg="green")


async def _init_db_impl():
    from staffgate.db.engine import engine
    from staffgate.db.models import Base

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    await engine.dispose()


# ---------------------------------------------------------------------------
# staffgate create-user
# ---------------------------------------------------------------------------


@main.command("create-user")
@click.option("--email", "-e", required=True, help="Sign-in email (unique)")
@click.option("--name", "-n", required=True, help="Display name")
@click.option(
    "--role",
    "-r",
    required=True,
    type=click.Choice([r.value for r in Role]),
    help="Access tier",
)
@click.password_option(help="Prompted when omitted")
def create_user(email: str, name: str, role: str, password: str):
    """Create a user who can sign in with EMAIL and a password."""
    try:
        user_id = _run(_create_user_impl(email, name, Role(role), password))
    except ValueError as e:
        click.secho(f"Error: {e}", fg="red", err=True)
        sys.exit(1)
    click.secho(f"Created {role} {email} ({user_id})", fg="green")


async def _create_user_impl(email: str, name: str, role: Role, password: str) -> str:
    from staffgate.db.engine import async_session_factory, engine
    from staffgate.services.user_service import UserService

    try:
        async with async_session_factory() as db:
            user = await UserService(db).create_user(
                email=email,
                name=name,
                password_hash=hash_password(password),
                role=role,
            )
            return user.id
    finally:
        await engine.dispose()


# ---------------------------------------------------------------------------
# staffgate hash-password
# ---------------------------------------------------------------------------


@main.command("hash-password")
@click.password_option()
def hash_password_cmd(password: str):
    """Print the bcrypt hash of a password (for manual inserts)."""
    click.echo(hash_password(password))


if __name__ == "__main__":
    main()
