#!/usr/bin/env python3
"""
Create an admin account for the /admin panel.

Usage: python create_admin.py <username> [password]
The password is prompted for when it isn't given on the command line.
"""

import getpass
import sys

from portfolioflow.auth.auth import register_user
from portfolioflow.db.db import SessionLocal, init_db

MIN_PASSWORD_LENGTH = 8


def create_admin(username: str, password: str) -> bool:
    if len(password) < MIN_PASSWORD_LENGTH:
        print(f"❌ Password must be at least {MIN_PASSWORD_LENGTH} characters.")
        return False

    init_db()
    db = SessionLocal()
    try:
        user = register_user(db, username, password)
    finally:
        db.close()

    if user is None:
        print(f"⚠️ Admin '{username}' already exists.")
        return False
    print(f"✅ Admin '{username}' created.")
    return True


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print(__doc__)
        sys.exit(1)

    username = sys.argv[1]
    password = sys.argv[2] if len(sys.argv) > 2 else getpass.getpass("Password: ")
    sys.exit(0 if create_admin(username, password) else 1)
