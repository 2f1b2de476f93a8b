"""
Seed Admin User

Creates the first admin account. Every other account is created by an
admin (or self-registered by students), so run this once per database.

Usage:
    ADMIN_EMAIL=admin@example.com ADMIN_PASSWORD=... python scripts/seed_admin.py
"""

import asyncio
import os
import sys
from pathlib import Path

# Add the src directory to the path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import admissions.models  # noqa: F401,E402 - registers every mapper
from admissions.core.database import async_session_maker, close_db  # noqa: E402
from admissions.core.security import hash_password  # noqa: E402
from admissions.modules.users.models import UserRole  # noqa: E402
from admissions.modules.users.repository import UserRepository  # noqa: E402


async def seed_admin() -> None:
    """Create the admin user if it doesn't exist."""
    email = os.environ.get("ADMIN_EMAIL", "").strip().lower()
    password = os.environ.get("ADMIN_PASSWORD", "")
    name = os.environ.get("ADMIN_NAME", "Administrator")

    if not email or not password:
        print("ADMIN_EMAIL and ADMIN_PASSWORD must be set")
        sys.exit(1)

    async with async_session_maker() as db:
        existing_user = await UserRepository.get_by_email(db, email)
        if existing_user:
            print(f"User already exists: {email}")
            print(f"  ID: {existing_user.id}")
            print(f"  Role: {existing_user.role.value}")
            return

        admin_user = await UserRepository.create(
            db,
            email=email,
            password_hash=hash_password(password),
            name=name,
            role=UserRole.ADMIN,
        )
        await db.commit()

        print("Admin created successfully!")
        print(f"  Email: {email}")
        print(f"  Name: {name}")
        print(f"  ID: {admin_user.id}")

    await close_db()


if __name__ == "__main__":
    asyncio.run(seed_admin())
