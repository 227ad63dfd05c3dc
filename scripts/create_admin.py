"""
Name: Admin Bootstrap Script

Responsibilities:
  - Create an admin user, or promote an existing one (idempotent)
  - Hash passwords with Argon2 (same cost parameters as the API)
  - Store the user through the PostgreSQL Credential Store

Usage:
  DATABASE_URL=postgresql://... python scripts/create_admin.py --email a@b.c
"""

from __future__ import annotations

import argparse
import getpass
import sys

from catalog_api.application.dev_seed_admin import ensure_admin_user
from catalog_api.crosscutting.config import get_settings
from catalog_api.identity.auth_service import MIN_PASSWORD_LENGTH, normalize_email
from catalog_api.identity.passwords import PasswordHasher
from catalog_api.infrastructure.db.pool import close_pool, init_pool
from catalog_api.infrastructure.repositories.postgres import PostgresUserRepository


def _prompt_email() -> str:
    email = normalize_email(input("Email: "))
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


def _parse_args() -> argparse.Namespace:
    argv = sys.argv[1:]
    if argv and argv[0] == "--":
        argv = argv[1:]
    parser = argparse.ArgumentParser(
        description="Create or promote an admin user (idempotent)."
    )
    parser.add_argument("--email", help="User email (will be normalized)")
    parser.add_argument(
        "--password",
        help="User password (omit to be prompted securely)",
    )
    parser.add_argument("--name", default="Admin", help="Display name for new users")
    parser.add_argument(
        "--reset-password",
        action="store_true",
        help="Overwrite the password when the user already exists",
    )
    return parser.parse_args(argv)


def main() -> None:
    args = _parse_args()
    settings = get_settings()
    if not settings.database_url:
        raise SystemExit("DATABASE_URL is required to create a user.")

    email = normalize_email(args.email) if args.email else _prompt_email()
    if not email:
        raise SystemExit("Email is required.")
    password = args.password or _prompt_password()
    if len(password) < MIN_PASSWORD_LENGTH:
        raise SystemExit(f"Password must be at least {MIN_PASSWORD_LENGTH} characters.")

    pool = init_pool(settings.database_url, min_size=1, max_size=1)
    try:
        user = ensure_admin_user(
            user_repo=PostgresUserRepository(pool),
            password_hasher=PasswordHasher(
                time_cost=settings.password_hash_time_cost,
                memory_cost=settings.password_hash_memory_cost,
                parallelism=settings.password_hash_parallelism,
            ),
            email=email,
            password=password,
            name=args.name,
            force_reset=args.reset_password,
        )
    finally:
        close_pool()

    print(f"Admin ready: id={user.id} email={user.email} is_admin={user.is_admin}")


if __name__ == "__main__":
    main()
