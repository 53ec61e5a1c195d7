"""
Name: Account Bootstrap Script

Responsibilities:
  - Seed the built-in roles (idempotent)
  - Create an account with any built-in role (super_admin by default)
  - Store it in PostgreSQL through the regular repositories
"""

from __future__ import annotations

import argparse
import getpass
import os
import sys

from divelog.application.usecases import ensure_user, seed_builtin_roles
from divelog.crosscutting.config import get_settings
from divelog.identity.roles import Role
from divelog.infrastructure.db.pool import close_pool, init_pool
from divelog.infrastructure.repositories import (
    PostgresRoleRepository,
    PostgresUserRepository,
)


def _require_database_url() -> str:
    db_url = os.getenv("DATABASE_URL")
    if not db_url:
        raise SystemExit("DATABASE_URL is required to create a user.")
    return db_url


def _prompt_email() -> str:
    email = input("Email: ").strip().lower()
    if not email:
        raise SystemExit("Email is required.")
    return email


def _prompt_password() -> str:
    password = getpass.getpass("Password: ")
    if not password:
        raise SystemExit("Password is required.")
    confirm = getpass.getpass("Confirm password: ")
    if password != confirm:
        raise SystemExit("Passwords do not match.")
    return password


def _parse_args(argv: list[str]) -> argparse.Namespace:
    if argv and argv[0] == "--":
        argv = argv[1:]
    parser = argparse.ArgumentParser(
        description="Create a dive log account with a built-in role (idempotent)."
    )
    parser.add_argument("--email", help="User email (will be normalized)")
    parser.add_argument(
        "--password",
        help="User password (omit to be prompted securely)",
    )
    parser.add_argument("--full-name", default="Super Admin", help="Display name")
    parser.add_argument(
        "--role",
        default=Role.SUPER_ADMIN.value,
        choices=[role.value for role in Role],
        help="User role (default: super_admin)",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    db_url = _require_database_url()
    email = args.email.strip().lower() if args.email else _prompt_email()
    password = args.password or _prompt_password()

    settings = get_settings()
    if len(password) < settings.password_min_length:
        raise SystemExit(
            f"Please enter a password with {settings.password_min_length} "
            "or more characters"
        )

    init_pool(db_url, min_size=1, max_size=2)
    try:
        users = PostgresUserRepository()
        roles = PostgresRoleRepository()
        seed_builtin_roles(roles)
        result = ensure_user(
            users,
            roles,
            email=email,
            password=password,
            full_name=args.full_name,
            role=Role(args.role),
        )
    finally:
        close_pool()

    user = result.user
    if result.created:
        print(f"Created user: id={user.id} email={user.email} role={args.role}")
    else:
        role_name = user.role.name if user.role else None
        print(
            "User already exists: "
            f"id={user.id} email={user.email} role={role_name} enabled={user.enabled}"
        )


if __name__ == "__main__":
    main()
