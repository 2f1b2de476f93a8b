"""
Payment Service

Records application fee payments. A completed payment is what allows an
officer to verify an application.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from admissions.core.auth import CurrentUser
from admissions.core.config import settings
from admissions.core.errors import ConflictError, NotFoundError, ValidationError
from admissions.modules.applications import repository as application_repository
from admissions.modules.payments import repository
from admissions.modules.payments.models import Payment, PaymentStatus
from admissions.modules.payments.schemas import AppliedCourse, ProcessPaymentRequest
from admissions.modules.users.models import User
from admissions.modules.users.repository import UserRepository

logger = logging.getLogger(__name__)


async def _get_user(db: AsyncSession, user_id: str) -> User:
    user = await UserRepository.get_by_id(db, user_id)
    if not user:
        raise NotFoundError("User", user_id)
    return user


async def list_applied_courses(db: AsyncSession, caller: CurrentUser) -> list[AppliedCourse]:
    """
    The caller's applications with the fee each one carries.

    Applications whose course was deleted are skipped.
    """
    user = await _get_user(db, caller.id)
    paid = {payment.application_id: payment.status for payment in user.payments}

    items: list[AppliedCourse] = []
    for application in await application_repository.list_by_student(db, user.id):
        course = application.course
        if course is None:
            logger.warning(f"Application {application.id} has no course; skipped from applied courses")
            continue
        items.append(
            AppliedCourse(
                application_id=application.id,
                course_id=course.id,
                course_name=course.title,
                amount=course.fee,
                last_date=settings.payment_last_date,
                status=application.status,
                payment_status=paid.get(application.id),
            )
        )
    return items


async def process_payment(
    db: AsyncSession, caller: CurrentUser, data: ProcessPaymentRequest
) -> Payment:
    """
    Record a completed payment for one of the caller's applications.

    The payment row and the user's payment list change in one commit.

    Raises:
        ConflictError: If this application was already paid for
        NotFoundError: If the application (owned by the caller) or user does not exist
        ValidationError: If courseId does not match the application
    """
    existing = await repository.get_by_user_and_application(db, caller.id, data.application_id)
    if existing:
        logger.warning(f"Duplicate payment attempt by {caller.id} for application {data.application_id}")
        raise ConflictError("Payment already processed for this application.")

    application = await application_repository.get_for_student(db, data.application_id, caller.id)
    if not application:
        raise NotFoundError("Application", data.application_id)
    if application.course_id != data.course_id:
        raise ValidationError("Course does not match the application", fields=["courseId"])

    user = await _get_user(db, caller.id)
    course_name = application.course.title if application.course else data.course_name
    if not course_name:
        raise ValidationError("Course name is required", fields=["courseName"])

    payment = Payment(
        name=user.name,
        email=user.email,
        application=application,
        course_id=application.course_id,
        course_name=course_name,
        amount=data.amount,
        payment_method=data.payment_method,
        last_date=data.last_date,
        status=PaymentStatus.COMPLETED,
    )
    user.payments.append(payment)
    await db.commit()
    await db.refresh(payment)

    logger.info(
        f"Payment {payment.id} of {payment.amount} recorded for application {application.id} "
        f"by user {user.id}"
    )
    return payment


async def list_history(db: AsyncSession, caller: CurrentUser) -> list[Payment]:
    return await repository.list_by_user(db, caller.id)


async def get_user_details(db: AsyncSession, caller: CurrentUser) -> User:
    return await _get_user(db, caller.id)
