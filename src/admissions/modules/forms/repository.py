"""
Form Template Repository

Database operations for per-course form templates.
"""

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import FormTemplate


async def get_by_course_id(db: AsyncSession, course_id: str) -> FormTemplate | None:
    result = await db.execute(select(FormTemplate).where(FormTemplate.course_id == course_id))
    return result.scalar_one_or_none()


async def create(db: AsyncSession, course_id: str, **fields: Any) -> FormTemplate:
    """Create a template for a course."""
    template = FormTemplate(course_id=course_id, **fields)
    db.add(template)
    await db.flush()
    await db.refresh(template)
    return template


async def update(db: AsyncSession, template: FormTemplate, **fields: Any) -> FormTemplate:
    for key, value in fields.items():
        setattr(template, key, value)
    await db.flush()
    return template
