"""CLI tests — click's CliRunner, database calls patched out."""

from unittest.mock import AsyncMock, patch

import bcrypt
from click.testing import CliRunner

from staffgate.cli.main import main
from staffgate.schemas.auth import Role


def test_hash_password():
    runner = CliRunner()
    result = runner.invoke(main, ["hash-password"], input="s3cret-pass\ns3cret-pass\n")
    assert result.exit_code == 0
    hashed = result.output.strip().splitlines()[-1]
    assert bcrypt.checkpw(b"s3cret-pass", hashed.encode())


def test_create_user():
    runner = CliRunner()
    with patch(
        "staffgate.cli.main._create_user_impl",
        new_callable=AsyncMock,
        return_value="u42",
    ) as impl:
        result = runner.invoke(
            main,
            ["create-user", "-e", "ann@example.com", "-n", "Ann", "-r", "manager"],
            input="pw-123456\npw-123456\n",
        )

    assert result.exit_code == 0, result.output
    assert "Created manager ann@example.com (u42)" in result.output
    impl.assert_awaited_once_with("ann@example.com", "Ann", Role.MANAGER, "pw-123456")


def test_create_user_rejects_unknown_role():
    runner = CliRunner()
    result = runner.invoke(
        main,
        ["create-user", "-e", "a@b.com", "-n", "A", "-r", "admin", "--password", "x"],
    )
    assert result.exit_code == 2
    assert "admin" in result.output


def test_create_user_duplicate():
    runner = CliRunner()
    with patch(
        "staffgate.cli.main._create_user_impl",
        new_callable=AsyncMock,
        side_effect=ValueError("Email already registered: a@b.com"),
    ):
        result = runner.invoke(
            main,
            ["create-user", "-e", "a@b.com", "-n", "A", "-r", "hr", "--password", "x"],
        )
    assert result.exit_code == 1
    assert "already registered" in result.output
