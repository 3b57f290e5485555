"""Create the admin account, or reset its password and admin flag."""

from __future__ import annotations

import argparse
import getpass
import logging
import os
import sys

from portfolio.db import schemas
from portfolio.db.repositories import build_repository
from portfolio.utils.config import get_settings
from portfolio.utils.passwords import hash_password

logger = logging.getLogger("portfolio.scripts.create_admin")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Create or reset the portfolio admin account")
    parser.add_argument(
        "--username",
        default=settings.admin_username,
        help=f"Admin username (default: {settings.admin_username})",
    )
    parser.add_argument(
        "--password",
        default=None,
        help="New password; prompted for when omitted and ADMIN_PASSWORD is unset",
    )
    parser.add_argument(
        "--prompt",
        action="store_true",
        help="Always prompt for the password instead of using ADMIN_PASSWORD",
    )
    return parser.parse_args(argv)


def create_or_reset_admin(repo, username: str, password: str) -> str:
    """Return ``"created"`` or ``"updated"``."""
    password_hash = hash_password(password)
    existing = repo.get_user_by_username(username)
    if existing is None:
        repo.create_user(schemas.UserCreate(username=username, password=password_hash, is_admin=True))
        logger.info("admin_created: username=%s", username)
        return "created"
    repo.update_user_password(existing.id, password_hash, is_admin=True)
    logger.info("admin_password_reset: username=%s", username)
    return "updated"


def _resolve_password(args: argparse.Namespace) -> str:
    if args.password:
        return args.password
    # The configured default password is never used here
    env_password = os.getenv("ADMIN_PASSWORD")
    if not args.prompt and env_password:
        return env_password
    return getpass.getpass(f"Password for {args.username}: ")


def main(argv: list[str] | None = None, repo=None) -> int:
    if not logging.getLogger().handlers:
        logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    args = parse_args(argv)
    password = _resolve_password(args)
    if not password:
        print("A non-empty password is required.", file=sys.stderr)
        return 1

    owns_repo = repo is None
    repo = repo or build_repository()
    try:
        repo.prepare_storage()
        outcome = create_or_reset_admin(repo, args.username, password)
    finally:
        if owns_repo:
            repo.close()
    print(f"Admin user '{args.username}' {outcome}.")
    return 0


if __name__ == "__main__":  # pragma: no cover - manual execution path
    sys.exit(main())
