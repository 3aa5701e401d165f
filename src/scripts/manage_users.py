"""Operator commands for the user store.

Claims and roles are not exposed over HTTP; grant them here.

Usage:
    PYTHONPATH=src python src/scripts/manage_users.py init-db
    PYTHONPATH=src python src/scripts/manage_users.py grant-claim alice@example.com DeleteProvider
    PYTHONPATH=src python src/scripts/manage_users.py revoke-claim alice@example.com DeleteProvider
    PYTHONPATH=src python src/scripts/manage_users.py add-role alice@example.com admin
"""

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables before importing modules that read them
load_dotenv()

sys.path.insert(0, str(Path(__file__).parent.parent))

from adapter.sql.connection import get_engine
from adapter.sql.tables import create_all_tables
from adapter.sql.user_repository import SqlUserRepository
from port.user_repository import UserRepository
from utils.logging import setup_structured_logging

logger = logging.getLogger(__name__)


def grant_claim(repo: UserRepository, email: str, claim: str, value: str) -> bool:
    user = repo.get_by_email(email)
    if not user:
        logger.error("User not found", extra={"email": email})
        return False
    ok = repo.set_claim(user.id, claim, value)
    if ok:
        logger.info("Claim granted", extra={"userId": user.id, "claim": claim})
    return ok


def revoke_claim(repo: UserRepository, email: str, claim: str) -> bool:
    user = repo.get_by_email(email)
    if not user:
        logger.error("User not found", extra={"email": email})
        return False
    ok = repo.remove_claim(user.id, claim)
    if ok:
        logger.info("Claim revoked", extra={"userId": user.id, "claim": claim})
    else:
        logger.warning("User does not hold claim", extra={"userId": user.id, "claim": claim})
    return ok


def add_role(repo: UserRepository, email: str, role: str) -> bool:
    user = repo.get_by_email(email)
    if not user:
        logger.error("User not found", extra={"email": email})
        return False
    ok = repo.add_role(user.id, role)
    if ok:
        logger.info("Role added", extra={"userId": user.id, "role": role})
    return ok


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Manage users, claims and roles")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("init-db", help="Create missing tables")

    grant = sub.add_parser("grant-claim", help="Add or replace a user claim")
    grant.add_argument("email")
    grant.add_argument("claim")
    grant.add_argument("--value", default="true")

    revoke = sub.add_parser("revoke-claim", help="Remove a user claim")
    revoke.add_argument("email")
    revoke.add_argument("claim")

    role = sub.add_parser("add-role", help="Attach a role to a user")
    role.add_argument("email")
    role.add_argument("role")

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_structured_logging()

    engine = get_engine()
    if engine is None:
        logger.error("Database unavailable, check DATABASE_URL")
        return 1

    if args.command == "init-db":
        create_all_tables(engine)
        logger.info("Tables created")
        return 0

    repo = SqlUserRepository(engine)
    if args.command == "grant-claim":
        ok = grant_claim(repo, args.email, args.claim, args.value)
    elif args.command == "revoke-claim":
        ok = revoke_claim(repo, args.email, args.claim)
    else:
        ok = add_role(repo, args.email, args.role)
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
