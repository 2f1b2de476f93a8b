"""
User Repository

Database operations for user management. Methods flush but never
commit; the calling service owns the transaction.
"""

import logging
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from admissions.modules.courses.models import Course
from admissions.modules.users.models import User, UserRole, user_courses

logger = logging.getLogger(__name__)


class UserRepository:
    """Repository for user database operations."""

    @staticmethod
    async def create(
        db: AsyncSession,
        *,
        email: str,
        password_hash: str,
        name: str,
        role: UserRole,
        courses: list[Course] | None = None,
    ) -> User:
        """
        Create a new user record.

        Args:
            db: Database session
            email: User's email address (unique)
            password_hash: Hashed password
            name: Display name
            role: User's role
            courses: Courses to attach (verification officers, staff)

        Returns:
            Created User instance
        """
        user = User(
            email=email,
            password_hash=password_hash,
            name=name,
            role=role,
            courses=list(courses or []),
            payments=[],
        )

        db.add(user)
        await db.flush()
        await db.refresh(user)

        logger.info(f"Created user: {user.id} - {user.email} ({user.role.value})")
        return user

    @staticmethod
    async def get_by_id(db: AsyncSession, user_id: str) -> User | None:
        """
        Get a user by ID.

        Args:
            db: Database session
            user_id: User UUID string

        Returns:
            User instance or None if not found
        """
        result = await db.execute(select(User).where(User.id == str(user_id)))
        return result.scalar_one_or_none()

    @staticmethod
    async def get_by_email(db: AsyncSession, email: str) -> User | None:
        """
        Get a user by email address (case-insensitive).

        Args:
            db: Database session
            email: Email address

        Returns:
            User instance or None if not found
        """
        result = await db.execute(select(User).where(func.lower(User.email) == email.lower()))
        return result.scalar_one_or_none()

    @staticmethod
    async def get_by_email_and_role(db: AsyncSession, email: str, role: UserRole) -> User | None:
        result = await db.execute(
            select(User).where(func.lower(User.email) == email.lower(), User.role == role)
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def email_exists(db: AsyncSession, email: str) -> bool:
        """
        Check if an email address is already registered.

        Args:
            db: Database session
            email: Email address to check

        Returns:
            True if email exists, False otherwise
        """
        user = await UserRepository.get_by_email(db, email)
        return user is not None

    @staticmethod
    async def list_all(db: AsyncSession) -> list[User]:
        result = await db.execute(select(User).order_by(User.created_at))
        return list(result.scalars().all())

    @staticmethod
    async def list_by_role(db: AsyncSession, role: UserRole, order_by_name: bool = False) -> list[User]:
        order = User.name if order_by_name else User.created_at
        result = await db.execute(select(User).where(User.role == role).order_by(order))
        return list(result.scalars().all())

    @staticmethod
    async def list_by_course(
        db: AsyncSession,
        course_id: str,
        role: UserRole | None = None,
    ) -> list[User]:
        """
        List users attached to a course, oldest first.

        Args:
            db: Database session
            course_id: Course UUID string
            role: Optional role filter (e.g. verification officers)
        """
        query = (
            select(User)
            .join(user_courses, user_courses.c.user_id == User.id)
            .where(user_courses.c.course_id == course_id)
            .order_by(User.created_at, User.id)
        )
        if role is not None:
            query = query.where(User.role == role)
        result = await db.execute(query)
        return list(result.scalars().all())

    @staticmethod
    async def update(db: AsyncSession, user: User, **fields: Any) -> User:
        """
        Apply field updates to a user and flush.

        Args:
            db: Database session
            user: Loaded User instance
            **fields: Column values to set

        Returns:
            The updated User
        """
        for key, value in fields.items():
            setattr(user, key, value)
        await db.flush()
        return user

    @staticmethod
    async def delete(db: AsyncSession, user: User) -> None:
        await db.delete(user)
        await db.flush()
        logger.info(f"Deleted user: {user.id} - {user.email}")
