"""
Name: Set Password Script

Responsibilities:
  - Set a user's password by username (idempotent)
  - Hash passwords with Argon2
  - Clear any pending reset token for that user
  - Print a hash without touching the database (--hash-only)
"""

from __future__ import annotations

import argparse
import getpass
import os
import sys

ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from catait.identity.passwords import hash_password  # noqa: E402


def _require_database_url() -> str:
    db_url = os.getenv("DATABASE_URL")
    if not db_url:
        raise SystemExit("DATABASE_URL is required to update a user.")
    return db_url


def _prompt_password() -> str:
    password = getpass.getpass("New password: ")
    if not password:
        raise SystemExit("Password is required.")
    confirm = getpass.getpass("Confirm password: ")
    if password != confirm:
        raise SystemExit("Passwords do not match.")
    return password


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    argv = sys.argv[1:] if argv is None else argv
    if argv and argv[0] == "--":
        argv = argv[1:]
    parser = argparse.ArgumentParser(
        description="Set a user's password and clear pending reset tokens."
    )
    parser.add_argument("--username", help="Account username")
    parser.add_argument(
        "--password",
        help="New password (omit to be prompted securely)",
    )
    parser.add_argument(
        "--hash-only",
        action="store_true",
        help="Print the Argon2 hash and exit without touching the database",
    )
    return parser.parse_args(argv)


def _set_password(db_url: str, username: str, password: str) -> bool:
    from psycopg_pool import ConnectionPool

    from catait.infrastructure.repositories import PostgresUserRepository

    with ConnectionPool(conninfo=db_url, min_size=1, max_size=1) as pool:
        repo = PostgresUserRepository(pool=pool)
        return repo.set_password_by_username(
            username, password_hash=hash_password(password)
        )


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    password = args.password or _prompt_password()

    if args.hash_only:
        print(hash_password(password))
        return

    if not args.username:
        raise SystemExit("--username is required unless --hash-only is given.")

    username = args.username.strip()
    if not _set_password(_require_database_url(), username, password):
        raise SystemExit(f"User not found: {username}")
    print(f"Password updated: username={username}")


if __name__ == "__main__":
    main()
