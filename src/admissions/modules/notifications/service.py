"""
Student Notification Service

Notifications are not stored. They are derived from the officer comments
on a student's applications, and "read" is the application's
``comments_read`` flag.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from admissions.core.auth import CurrentUser
from admissions.core.errors import NotFoundError
from admissions.modules.applications import repository as application_repository
from admissions.modules.applications.models import Application
from admissions.modules.notifications.schemas import FieldComment, Notification, NotificationList

logger = logging.getLogger(__name__)

DOCUMENT_PREFIX = "document_"
UNKNOWN_DOCUMENT = "Unknown Document"


def _document_type(application: Application, reference: str) -> str:
    """
    Resolve ``document_<n>`` (position) or ``document_<key>`` to a document type.
    """
    documents = application.documents
    if reference.isdigit():
        index = int(reference)
        if index < len(documents) and documents[index].get("type"):
            return documents[index]["type"]
        return UNKNOWN_DOCUMENT

    for document in documents:
        if reference in (document.get("key"), document.get("type")):
            return document.get("type") or UNKNOWN_DOCUMENT
    return UNKNOWN_DOCUMENT


def build_notification(application: Application) -> Notification | None:
    """
    Derive the notification for one application.

    Returns:
        The notification, or None when the officer left no comments
    """
    field_comments: dict[str, FieldComment] = {}
    for key, comment in (application.field_comments or {}).items():
        if not comment:
            continue
        if key.startswith(DOCUMENT_PREFIX):
            document_type = _document_type(application, key[len(DOCUMENT_PREFIX):])
            field_comments[key] = FieldComment(comment=comment, document_type=document_type)
        else:
            field_comments[key] = FieldComment(comment=comment)

    general = application.verification_comments
    if not general and not field_comments:
        return None

    if application.verified_by:
        officer_name = application.verified_by.name
    elif application.assigned_officer:
        officer_name = application.assigned_officer.name
    else:
        officer_name = "Verification Officer"

    return Notification(
        application_id=application.id,
        course_title=application.course.title if application.course else "Unknown Course",
        officer_name=officer_name,
        general_comment=general,
        field_comments=field_comments,
        read=application.comments_read,
        updated_at=application.updated_at,
    )


async def list_notifications(db: AsyncSession, caller: CurrentUser) -> NotificationList:
    applications = await application_repository.list_by_student(db, caller.id)
    notifications = [n for n in map(build_notification, applications) if n is not None]
    return NotificationList(
        notifications=notifications,
        unread_count=sum(1 for n in notifications if not n.read),
    )


async def mark_comments_read(db: AsyncSession, caller: CurrentUser, application_id: str) -> None:
    """
    Mark an application's comments as read. Repeating the call is harmless.

    Raises:
        NotFoundError: If the application does not belong to the caller
    """
    application = await application_repository.get_for_student(db, application_id, caller.id)
    if not application:
        raise NotFoundError("Application", application_id)

    if not application.comments_read:
        await application_repository.update_fields(db, application, comments_read=True)
        await db.commit()
        logger.info(f"Student {caller.id} read comments on application {application_id}")
