"""
Course Catalog Service

Browsing, administration and content-admin descriptions of courses.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from admissions.core.auth import CurrentUser
from admissions.core.errors import ForbiddenError, NotFoundError
from admissions.core.policy import Capability, has_capability
from admissions.modules.courses import repository
from admissions.modules.courses.models import Course
from admissions.modules.courses.schemas import CourseCreate, CourseDescriptionRequest
from admissions.modules.forms import service as form_service
from admissions.modules.forms.models import FormTemplate

logger = logging.getLogger(__name__)


async def list_courses(db: AsyncSession, caller: CurrentUser) -> list[Course]:
    """
    List the courses visible to the caller.

    Content admins see the courses assigned to their email; admins,
    verification admins and students see the full catalog.

    Raises:
        ForbiddenError: For roles with no catalog access
    """
    if has_capability(caller.role, Capability.BROWSE_CATALOG):
        return await repository.list_all(db)
    if has_capability(caller.role, Capability.BROWSE_ASSIGNED_CATALOG):
        return await repository.list_by_assignee(db, caller.email)

    logger.warning(f"User {caller.id} ({caller.role}) denied catalog access")
    raise ForbiddenError("Access denied. Invalid role.")


async def get_course(db: AsyncSession, course_id: str) -> Course:
    """
    Raises:
        NotFoundError: If the course does not exist
    """
    course = await repository.get_by_id(db, course_id)
    if not course:
        raise NotFoundError("Course", course_id)
    return course


async def create_course(db: AsyncSession, data: CourseCreate) -> Course:
    course = await repository.create(db, **data.model_dump())
    await db.commit()
    logger.info(f"Created course {course.id} ({course.subject_code})")
    return course


async def update_course(db: AsyncSession, course_id: str, data: CourseCreate) -> Course:
    course = await get_course(db, course_id)
    await repository.update(db, course, **data.model_dump())
    await db.commit()
    logger.info(f"Updated course {course.id}")
    return course


async def delete_course(db: AsyncSession, course_id: str) -> None:
    course = await get_course(db, course_id)
    await repository.delete(db, course)
    await db.commit()
    logger.info(f"Deleted course {course_id}")


async def get_description(db: AsyncSession, caller: CurrentUser, course_id: str) -> Course:
    """
    Fetch a course for its assigned content admin.

    Raises:
        NotFoundError: If the course does not exist
        ForbiddenError: If the course is assigned to someone else
    """
    course = await get_course(db, course_id)
    form_service.ensure_assigned(course, caller)
    return course


async def add_description(
    db: AsyncSession,
    caller: CurrentUser,
    course_id: str,
    data: CourseDescriptionRequest,
) -> tuple[Course, FormTemplate]:
    """
    Store a course's description and program type.

    The program type is also written to the course's form template
    (created if missing) in the same transaction.

    Raises:
        NotFoundError: If the course does not exist
        ForbiddenError: If the course is assigned to someone else
    """
    course = await get_description(db, caller, course_id)

    fields = data.model_dump(mode="json")
    fields["program_type"] = data.program_type
    await repository.update(db, course, **fields)
    template = await form_service.set_program_type(db, course.id, data.program_type)
    await db.commit()

    logger.info(f"Content admin {caller.id} described course {course.id} ({data.program_type.value})")
    return course, template


async def verify_code(db: AsyncSession, subject_code: str) -> Course:
    """
    Raises:
        NotFoundError: If no course has the code
    """
    course = await repository.get_by_subject_code(db, subject_code)
    if not course:
        raise NotFoundError("Course code", subject_code)
    return course
