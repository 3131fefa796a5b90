#!/usr/bin/env python3
"""Create the first super admin account and the default system settings."""

import argparse
import sys
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(BASE_DIR))

from sqlmodel import Session, select

from housing.core.security import get_password_hash
from housing.db import engine, init_db
from housing.models import User, UserRole, UserStatus
from housing.services.system_settings import ensure_default_settings


def seed(username: str, password: str, email: str | None) -> None:
    init_db()
    with Session(engine) as session:
        existing = session.exec(select(User).where(User.username == username)).first()
        if existing:
            print(f"User {username} already exists, skipping")
        else:
            session.add(
                User(
                    username=username,
                    email=email.lower() if email else None,
                    hashed_password=get_password_hash(password),
                    role=UserRole.SUPER_ADMIN.value,
                    status=UserStatus.ACTIVE.value,
                )
            )
            session.commit()
            print(f"Created super admin {username}")

        ensure_default_settings(session)
        print("Default system settings are in place")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--username", default="admin")
    parser.add_argument("--password", required=True)
    parser.add_argument("--email", default=None)
    args = parser.parse_args()
    seed(args.username, args.password, args.email)
