"""
Faculty Service

Faculty maintain their own profile and the dashboard snapshot each
student sees. Students read their snapshot.
"""

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from admissions.core.auth import CurrentUser
from admissions.core.errors import ForbiddenError, NotFoundError
from admissions.modules.faculty.schemas import (
    DashboardData,
    FacultyInfoRequest,
    UpdateStudentRequest,
)
from admissions.modules.users.models import User, UserRole
from admissions.modules.users.repository import UserRepository

logger = logging.getLogger(__name__)


def normalize_dashboard(raw: dict[str, Any] | None) -> DashboardData:
    """
    Fill blank dashboard entries with their display defaults.

    Lists default to empty, grades to "N/A", and the text panels to
    "No announcements" / "No activity".
    """
    defaults = DashboardData()
    values = {}
    for name, field in DashboardData.model_fields.items():
        value = (raw or {}).get(field.alias or name)
        if value is None:
            value = (raw or {}).get(name)
        if value in (None, "", [], {}):
            continue
        if isinstance(getattr(defaults, name), list) and not isinstance(value, list):
            continue
        values[name] = value
    return DashboardData(**values)


async def _get_by_role(db: AsyncSession, email: str, role: UserRole, label: str) -> User:
    user = await UserRepository.get_by_email_and_role(db, email, role)
    if not user:
        raise NotFoundError(label, message=f"{label} not found")
    return user


async def update_faculty_info(db: AsyncSession, caller: CurrentUser, data: FacultyInfoRequest) -> User:
    """
    Raises:
        ForbiddenError: If the email is not the caller's own
        NotFoundError: If no faculty account has that email
    """
    if data.email.lower() != caller.email.lower():
        logger.warning(f"Faculty {caller.id} tried to edit the profile of {data.email}")
        raise ForbiddenError("Access denied. You can only edit your own profile.")

    faculty = await _get_by_role(db, data.email, UserRole.FACULTY, "Faculty")
    changes = data.model_dump(exclude_unset=True, exclude={"email"})
    await UserRepository.update(db, faculty, **changes)
    await db.commit()
    logger.info(f"Faculty {faculty.id} updated profile fields {sorted(changes)}")
    return faculty


async def get_faculty_info(db: AsyncSession, email: str) -> User:
    return await _get_by_role(db, email, UserRole.FACULTY, "Faculty")


async def list_students(db: AsyncSession) -> list[User]:
    return await UserRepository.list_by_role(db, UserRole.STUDENT, order_by_name=True)


async def get_student(db: AsyncSession, email: str) -> User:
    return await _get_by_role(db, email, UserRole.STUDENT, "Student")


async def update_student_dashboard(
    db: AsyncSession, caller: CurrentUser, data: UpdateStudentRequest
) -> User:
    """Replace a student's dashboard snapshot."""
    student = await _get_by_role(db, data.email, UserRole.STUDENT, "Student")
    dashboard = normalize_dashboard(data.model_dump(exclude={"email"}))
    await UserRepository.update(db, student, dashboard_data=dashboard.model_dump(by_alias=True))
    await db.commit()
    logger.info(f"Faculty {caller.id} updated the dashboard of student {student.id}")
    return student


async def get_own_dashboard(db: AsyncSession, caller: CurrentUser) -> tuple[User, DashboardData]:
    student = await UserRepository.get_by_id(db, caller.id)
    if not student:
        raise NotFoundError("Student", message="Student not found")
    return student, normalize_dashboard(student.dashboard_data)
