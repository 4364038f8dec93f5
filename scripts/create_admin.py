#!/usr/bin/env python3
"""Create an admin user, or promote an existing user to admin.

Registration through the API always creates plain users, so admins are
provisioned with this script.

Usage:
    # From project root:
    JWT_SECRET=... python scripts/create_admin.py admin@example.com 's3cret-pass'

    # Promote an existing account without touching its password:
    python scripts/create_admin.py admin@example.com
"""

import argparse
import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from contactbook.config import get_settings
from contactbook.database import SessionLocal, init_db
from contactbook.models.enums import Role
from contactbook.services.passwords import PasswordHasher
from contactbook.services.users import UserStore


def create_admin(email: str, password: str | None) -> int:
    """Create or promote the admin account. Returns a process exit code."""
    settings = get_settings()
    init_db()
    session = SessionLocal()

    try:
        users = UserStore(session)
        existing = users.get_by_email(email)

        if existing is not None:
            if existing.role == Role.ADMIN:
                print(f"{email} is already an admin.")
                return 0
            users.set_role(existing.id, Role.ADMIN)
            print(f"Promoted {email} to admin.")
            return 0

        if not password:
            print(f"No user {email} exists; a password is required to create one.")
            return 1

        hasher = PasswordHasher(rounds=settings.bcrypt_rounds)
        user = users.create(email, hasher.hash(password), Role.ADMIN)
        print(f"Created admin {user.email} (id={user.id}).")
        return 0
    finally:
        session.close()


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("email")
    parser.add_argument("password", nargs="?")
    args = parser.parse_args()
    return create_admin(args.email, args.password)


if __name__ == "__main__":
    sys.exit(main())
