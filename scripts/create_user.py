"""Create a user with an explicit role.

Usage:
    python scripts/create_user.py --email admin@chainflow.com --name "Aarav Sharma" \
        --company "ChainFlow Industries" --role admin

Public registration always yields a viewer; this is the way to bootstrap
admins and managers. The password is read from --password or prompted for.
"""

from __future__ import annotations

import argparse
import getpass
import sys

from chainflow.database import SessionLocal, create_tables
from chainflow.models.user import USER_ROLES, User
from chainflow.repositories.user_repository import UserRepository
from chainflow.utils.security import get_password_hash


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create a ChainFlow user")
    parser.add_argument("--email", required=True)
    parser.add_argument("--name", required=True)
    parser.add_argument("--company", required=True)
    parser.add_argument("--role", choices=USER_ROLES, default="admin")
    parser.add_argument("--department", default="")
    parser.add_argument("--phone", default="")
    parser.add_argument("--password", help="omit to be prompted")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    password = args.password or getpass.getpass("Password: ")
    if len(password) < 6:
        print("Password must be at least 6 characters.")
        return 1

    create_tables()
    db = SessionLocal()
    try:
        repo = UserRepository(db)
        if repo.get_by_email(args.email):
            print(f"User {args.email} already exists.")
            return 0
        user = repo.create(User(
            name=args.name,
            email=args.email.strip().lower(),
            hashed_password=get_password_hash(password),
            company=args.company,
            role=args.role,
            department=args.department,
            phone=args.phone,
        ))
        print(f"Created {user.role} user {user.email} (id={user.id}).")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
