"""
Verification Service

Verification admins oversee accounts and distribute a course's
applications among its officers. Officers review the applications
assigned to them and record decisions and comments.

Every decision and comment write checks that the caller is the
application's assigned officer.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from admissions.core import email
from admissions.core.auth import CurrentUser
from admissions.core.errors import (
    ForbiddenError,
    NotFoundError,
    PaymentRequiredError,
    ValidationError,
)
from admissions.modules.applications import repository as application_repository
from admissions.modules.applications.models import Application, ApplicationStatus
from admissions.modules.courses import repository as course_repository
from admissions.modules.courses.models import Course
from admissions.modules.payments import repository as payment_repository
from admissions.modules.payments.schemas import PaymentSummary
from admissions.modules.users.models import User, UserRole
from admissions.modules.users.repository import UserRepository
from admissions.modules.verification.helpers import plan_batch_assignments
from admissions.modules.verification.schemas import (
    ApplicationStats,
    AssignedApplication,
    Assignment,
    CommentsRequest,
    DecisionRequest,
)

logger = logging.getLogger(__name__)


async def _get_course(db: AsyncSession, course_id: str) -> Course:
    course = await course_repository.get_by_id(db, course_id)
    if not course:
        raise NotFoundError("Course", course_id)
    return course


async def _get_user(db: AsyncSession, user_id: str) -> User:
    user = await UserRepository.get_by_id(db, user_id)
    if not user:
        raise NotFoundError("User", user_id)
    return user


# ============================================
# Verification admin
# ============================================


async def list_users(db: AsyncSession) -> list[User]:
    return await UserRepository.list_all(db)


async def get_user(db: AsyncSession, user_id: str) -> User:
    return await _get_user(db, user_id)


async def set_user_verification(
    db: AsyncSession,
    admin: CurrentUser,
    user_id: str,
    verified: bool,
    comment: str | None,
) -> User:
    """Set a user's verification flag; clearing it also clears the verifier and comment."""
    user = await _get_user(db, user_id)
    verifier = await _get_user(db, admin.id) if verified else None
    await UserRepository.update(
        db,
        user,
        verified=verified,
        verified_by=verifier,
        verification_comment=(comment or "") if verified else "",
    )
    await db.commit()
    logger.info(f"Verification admin {admin.id} set user {user.id} verified={verified}")
    return user


async def list_officers(db: AsyncSession) -> list[User]:
    return await UserRepository.list_by_role(db, UserRole.VERIFICATION_OFFICER)


async def list_course_users(db: AsyncSession, course_id: str) -> list[User]:
    """Users attached to a course (its officers and staff)."""
    await _get_course(db, course_id)
    return await UserRepository.list_by_course(db, course_id)


async def assign_student(
    db: AsyncSession,
    admin: CurrentUser,
    student_id: str,
    officer_id: str,
    course_id: str | None = None,
) -> Application:
    """
    Assign one student's application to an officer.

    Without a course the student's most recent application is used.

    Raises:
        ValidationError: If officer_id is not a verification officer
        NotFoundError: If the student has no matching application
    """
    officer = await UserRepository.get_by_id(db, officer_id)
    if not officer or officer.role != UserRole.VERIFICATION_OFFICER:
        raise ValidationError("Invalid officer ID", fields=["officerId"])

    if course_id:
        application = await application_repository.get_by_student_and_course(db, student_id, course_id)
    else:
        application = await application_repository.get_latest_for_student(db, student_id)
    if not application:
        raise NotFoundError("Application for student", student_id)

    await application_repository.update_fields(db, application, assigned_officer=officer)
    await db.commit()
    logger.info(
        f"Verification admin {admin.id} assigned application {application.id} to officer {officer.id}"
    )
    return application


async def application_stats(db: AsyncSession, course_id: str) -> tuple[Course, ApplicationStats]:
    course = await _get_course(db, course_id)
    applications = await application_repository.list_by_course(db, course.id)

    stats = ApplicationStats(total=len(applications))
    for application in applications:
        counter = application.status.value
        setattr(stats, counter, getattr(stats, counter) + 1)
        if application.student is not None:
            stats.valid_students += 1
        else:
            stats.invalid_students += 1
    return course, stats


async def batch_assign_officers(
    db: AsyncSession,
    admin: CurrentUser,
    course_id: str,
    batch_size: int,
) -> tuple[int, list[Assignment]]:
    """
    Distribute a course's applications among the course's officers.

    Applications are taken in submission order; only those whose student
    still exists are assigned. Chunk ``i // batch_size`` goes to officer
    ``(i // batch_size) % officer_count``. All assignments are written in
    one commit.

    Returns:
        (officer count, assignments made)

    Raises:
        NotFoundError: If the course does not exist or has no valid applications
        ValidationError: If the course has no officers or batch_size is invalid
    """
    course = await _get_course(db, course_id)

    applications = [
        application
        for application in await application_repository.list_by_course(db, course.id)
        if application.student is not None
    ]
    if not applications:
        raise NotFoundError("Application", message="No valid applications found for this course")

    officers = await UserRepository.list_by_course(db, course.id, UserRole.VERIFICATION_OFFICER)
    plan = plan_batch_assignments(applications, officers, batch_size)

    assignments: list[Assignment] = []
    for application, officer in plan:
        await application_repository.update_fields(db, application, assigned_officer=officer)
        assignments.append(
            Assignment(
                application_id=application.id,
                student_id=application.student_id,
                officer_id=officer.id,
                officer_name=officer.name,
                application_status=application.status,
            )
        )
    await db.commit()

    logger.info(
        f"Verification admin {admin.id} assigned {len(assignments)} applications of course "
        f"{course.id} among {len(officers)} officers (batch size {batch_size})"
    )
    return len(officers), assignments


async def unassign_officers(db: AsyncSession, admin: CurrentUser, course_id: str) -> tuple[int, int]:
    """
    Returns:
        (applications matched, assignments cleared)
    """
    course = await _get_course(db, course_id)
    matched, modified = await application_repository.clear_officers_for_course(db, course.id)
    await db.commit()
    logger.info(f"Verification admin {admin.id} cleared {modified} officer assignments on course {course.id}")
    return matched, modified


async def list_linked_applications(db: AsyncSession) -> list[Application]:
    """Applications whose student and course both still exist, newest first."""
    applications = await application_repository.list_all(db)
    return [a for a in applications if a.student is not None and a.course is not None]


# ============================================
# Verification officer
# ============================================


def _ensure_assigned_officer(application: Application, officer: CurrentUser) -> None:
    """
    Raises:
        ForbiddenError: If the caller is not the application's assigned officer
    """
    if application.assigned_officer_id != officer.id:
        logger.warning(f"Officer {officer.id} is not assigned to application {application.id}")
        raise ForbiddenError("Access denied. You are not assigned to this application.")


async def list_assigned_students(db: AsyncSession, officer: CurrentUser) -> list[User]:
    """Distinct students across the officer's applications."""
    students: dict[str, User] = {}
    for application in await application_repository.list_by_officer(db, officer.id):
        if application.student is not None:
            students.setdefault(application.student.id, application.student)
    return list(students.values())


async def list_assigned_applications(db: AsyncSession, officer: CurrentUser) -> list[AssignedApplication]:
    """The officer's applications, newest first, each with its payment summary."""
    items: list[AssignedApplication] = []
    for application in await application_repository.list_by_officer(db, officer.id):
        item = AssignedApplication.model_validate(application)
        payment = await payment_repository.get_latest_for_application(db, application.id)
        item.payment = PaymentSummary.model_validate(payment) if payment else None
        items.append(item)
    return items


async def set_student_verification(
    db: AsyncSession, officer: CurrentUser, student_id: str, verified: bool
) -> User:
    """
    Raises:
        ForbiddenError: If none of the student's applications is assigned to the officer
        NotFoundError: If the student does not exist
    """
    if not await application_repository.exists_for_officer_and_student(db, officer.id, student_id):
        logger.warning(f"Officer {officer.id} tried to verify unassigned student {student_id}")
        raise ForbiddenError("Not authorized to verify this student")

    student = await _get_user(db, student_id)
    reviewer = await _get_user(db, officer.id) if verified else None
    await UserRepository.update(db, student, verified=verified, verified_by=reviewer)
    await db.commit()
    logger.info(f"Officer {officer.id} set student {student.id} verified={verified}")
    return student


async def get_officer(db: AsyncSession, officer: CurrentUser) -> User:
    return await _get_user(db, officer.id)


async def decide(
    db: AsyncSession, officer: CurrentUser, application_id: str, data: DecisionRequest
) -> Application:
    """
    Record a verification decision on an assigned application.

    Status, verified flag and verifier change on both the application and
    its student in a single commit.

    Raises:
        NotFoundError: If the application does not exist
        ValidationError: If the application has no student
        ForbiddenError: If the caller is not the assigned officer
        InvalidStatusTransitionError: If the application is still a draft
        PaymentRequiredError: If verifying without a completed payment
    """
    application = await application_repository.get_by_id(db, application_id)
    if not application:
        raise NotFoundError("Application", application_id)
    student = application.student
    if student is None:
        raise ValidationError("Invalid application: No student associated")
    _ensure_assigned_officer(application, officer)

    status = ApplicationStatus.VERIFIED if data.verified else ApplicationStatus.REJECTED
    application_repository.ensure_transition(application.status, status)

    if data.verified:
        payment = await payment_repository.get_completed_for_application(db, application.id)
        if not payment:
            logger.warning(f"Officer {officer.id} tried to verify unpaid application {application.id}")
            raise PaymentRequiredError()

    reviewer = application.assigned_officer if data.verified else None
    form_data = dict(application.form_data or {})
    form_data["verificationStatus"] = status.value
    form_data["verificationComments"] = data.comments or ""

    fields = {
        "form_data": form_data,
        "verified": data.verified,
        "verified_by": reviewer,
        "status": status,
    }
    if data.field_comments is not None:
        fields["field_comments"] = dict(data.field_comments)
    if data.comments or data.field_comments:
        fields["comments_read"] = False

    await application_repository.update_fields(db, application, **fields)
    await UserRepository.update(db, student, verified=data.verified, verified_by=reviewer)
    await db.commit()

    logger.info(f"Officer {officer.id} {status.value} application {application.id}")
    await email.send_application_decision(
        student.email,
        student.name,
        application.course.title if application.course else "your course",
        data.verified,
        data.comments,
    )
    return application


async def save_comments(
    db: AsyncSession, officer: CurrentUser, application_id: str, data: CommentsRequest
) -> Application:
    """
    Save review comments without changing the application's status.

    Raises:
        NotFoundError: If the application does not exist
        ForbiddenError: If the caller is not the assigned officer
    """
    application = await application_repository.get_by_id(db, application_id)
    if not application:
        raise NotFoundError("Application", application_id)
    _ensure_assigned_officer(application, officer)

    fields = {}
    if data.comments:
        form_data = dict(application.form_data or {})
        form_data["verificationComments"] = data.comments
        fields["form_data"] = form_data
    if data.field_comments is not None:
        fields["field_comments"] = dict(data.field_comments)
    if data.comments or data.field_comments:
        fields["comments_read"] = False

    if fields:
        await application_repository.update_fields(db, application, **fields)
        await db.commit()
    logger.info(f"Officer {officer.id} saved comments on application {application.id}")
    return application
