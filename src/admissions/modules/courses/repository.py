"""
Course Repository

Database operations for the course catalog.
"""

from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import Course


async def create(db: AsyncSession, **fields: Any) -> Course:
    """Create a course and flush it so its id is available."""
    course = Course(**fields)
    db.add(course)
    await db.flush()
    await db.refresh(course)
    return course


async def get_by_id(db: AsyncSession, course_id: str) -> Course | None:
    """Get course by ID."""
    return await db.get(Course, str(course_id))


async def list_all(db: AsyncSession) -> list[Course]:
    result = await db.execute(select(Course).order_by(Course.created_at))
    return list(result.scalars().all())


async def list_by_assignee(db: AsyncSession, email: str) -> list[Course]:
    """Courses owned by a content admin."""
    result = await db.execute(
        select(Course)
        .where(func.lower(Course.assigned_to) == email.lower())
        .order_by(Course.created_at)
    )
    return list(result.scalars().all())


async def get_by_subject_code(db: AsyncSession, subject_code: str) -> Course | None:
    """Case-insensitive subject code lookup."""
    result = await db.execute(
        select(Course).where(func.lower(Course.subject_code) == subject_code.strip().lower())
    )
    return result.scalars().first()


async def update(db: AsyncSession, course: Course, **fields: Any) -> Course:
    for key, value in fields.items():
        setattr(course, key, value)
    await db.flush()
    return course


async def delete(db: AsyncSession, course: Course) -> None:
    await db.delete(course)
    await db.flush()
