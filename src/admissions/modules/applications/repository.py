"""
Application Repository

Database operations for course applications. Functions flush but do not
commit; services own the transaction.
"""

from typing import Any

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from admissions.core.errors import InvalidStatusTransitionError

from .models import Application, ApplicationStatus

# Valid status transitions - prevents invalid state changes
VALID_STATUS_TRANSITIONS: dict[ApplicationStatus, set[ApplicationStatus]] = {
    ApplicationStatus.DRAFT: {
        ApplicationStatus.DRAFT,  # Draft saved again
        ApplicationStatus.PENDING,  # Submitted
    },
    ApplicationStatus.PENDING: {
        ApplicationStatus.VERIFIED,
        ApplicationStatus.REJECTED,
    },
    # Officers may revise a decision
    ApplicationStatus.VERIFIED: {
        ApplicationStatus.VERIFIED,
        ApplicationStatus.REJECTED,
    },
    ApplicationStatus.REJECTED: {
        ApplicationStatus.VERIFIED,
        ApplicationStatus.REJECTED,
    },
}


def ensure_transition(current: ApplicationStatus, new: ApplicationStatus) -> None:
    """
    Validate a status change against the state machine.

    Raises:
        InvalidStatusTransitionError: If the transition is not allowed
    """
    valid = VALID_STATUS_TRANSITIONS.get(current, set())
    if new not in valid:
        raise InvalidStatusTransitionError(
            current.value, new.value, sorted(s.value for s in valid)
        )


async def create(db: AsyncSession, **fields: Any) -> Application:
    """Create a new application."""
    application = Application(payments=[], **fields)
    db.add(application)
    await db.flush()
    await db.refresh(application)
    return application


async def update_fields(db: AsyncSession, application: Application, **fields: Any) -> Application:
    """Set attributes on an application and flush."""
    for key, value in fields.items():
        setattr(application, key, value)
    await db.flush()
    return application


async def get_by_id(db: AsyncSession, application_id: str) -> Application | None:
    """Get application by ID."""
    return await db.get(Application, str(application_id))


async def get_by_student_and_course(
    db: AsyncSession, student_id: str, course_id: str
) -> Application | None:
    result = await db.execute(
        select(Application).where(
            Application.student_id == student_id,
            Application.course_id == course_id,
        )
    )
    return result.scalar_one_or_none()


async def get_for_student(
    db: AsyncSession, application_id: str, student_id: str
) -> Application | None:
    """Get an application only if it belongs to the student."""
    result = await db.execute(
        select(Application).where(
            Application.id == application_id,
            Application.student_id == student_id,
        )
    )
    return result.scalar_one_or_none()


async def get_latest_for_student(db: AsyncSession, student_id: str) -> Application | None:
    result = await db.execute(
        select(Application)
        .where(Application.student_id == student_id)
        .order_by(Application.created_at.desc())
        .limit(1)
    )
    return result.scalar_one_or_none()


async def list_all(db: AsyncSession) -> list[Application]:
    """All applications, newest first."""
    result = await db.execute(select(Application).order_by(Application.created_at.desc()))
    return list(result.scalars().all())


async def list_by_course(db: AsyncSession, course_id: str) -> list[Application]:
    """Applications for a course in stable submission order (oldest first)."""
    result = await db.execute(
        select(Application)
        .where(Application.course_id == course_id)
        .order_by(Application.created_at, Application.id)
    )
    return list(result.scalars().all())


async def list_by_student(db: AsyncSession, student_id: str) -> list[Application]:
    result = await db.execute(
        select(Application)
        .where(Application.student_id == student_id)
        .order_by(Application.created_at)
    )
    return list(result.scalars().all())


async def list_by_officer(db: AsyncSession, officer_id: str) -> list[Application]:
    """Applications assigned to an officer, newest first."""
    result = await db.execute(
        select(Application)
        .where(Application.assigned_officer_id == officer_id)
        .order_by(Application.created_at.desc())
    )
    return list(result.scalars().all())


async def exists_for_officer_and_student(
    db: AsyncSession, officer_id: str, student_id: str
) -> bool:
    result = await db.execute(
        select(Application.id)
        .where(
            Application.assigned_officer_id == officer_id,
            Application.student_id == student_id,
        )
        .limit(1)
    )
    return result.scalar_one_or_none() is not None


async def clear_officers_for_course(db: AsyncSession, course_id: str) -> tuple[int, int]:
    """
    Remove officer assignments from every application of a course.

    Returns:
        (matched, modified) counts
    """
    matched = len(await list_by_course(db, course_id))
    result = await db.execute(
        update(Application)
        .where(
            Application.course_id == course_id,
            Application.assigned_officer_id.is_not(None),
        )
        .values(assigned_officer_id=None)
        .execution_options(synchronize_session="fetch")
    )
    await db.flush()
    return matched, result.rowcount or 0


async def delete(db: AsyncSession, application: Application) -> None:
    await db.delete(application)
    await db.flush()
