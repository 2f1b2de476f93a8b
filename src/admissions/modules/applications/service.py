"""
Application Workflow Service

Students save drafts and submit applications with their documents.
Staff list, inspect and remove applications.

Status flow: draft -> pending -> verified / rejected. Drafts may be
overwritten freely by their owner; anything past draft is locked.
"""

import logging
from pathlib import Path

from sqlalchemy.ext.asyncio import AsyncSession

from admissions.core import email
from admissions.core.auth import CurrentUser
from admissions.core.errors import ConflictError, ForbiddenError, NotFoundError, ValidationError
from admissions.core.policy import Capability, has_capability
from admissions.core.storage import delete_stored, resolve_download_path, save_upload, validate_uploads
from admissions.modules.applications import repository
from admissions.modules.applications.helpers import (
    Submission,
    build_descriptor,
    declared_documents,
    descriptor_paths,
    pair_documents,
    validate_identity_fields,
)
from admissions.modules.applications.models import Application, ApplicationStatus
from admissions.modules.courses import repository as course_repository
from admissions.modules.courses.models import Course
from admissions.modules.forms import service as form_service
from admissions.modules.forms.requirements import check_submission
from admissions.modules.users.models import User
from admissions.modules.users.repository import UserRepository

logger = logging.getLogger(__name__)

UPLOAD_AREA = "applications"


def _resolve_student_id(caller: CurrentUser, submission: Submission) -> str:
    """
    Applications are always filed by the caller.

    Raises:
        ForbiddenError: If the request names another student
    """
    if submission.student_id and submission.student_id != caller.id:
        logger.warning(f"User {caller.id} tried to file an application for {submission.student_id}")
        raise ForbiddenError("Access denied. You can only file your own applications.")
    return caller.id


async def _load_context(
    db: AsyncSession, student_id: str, course_id: str
) -> tuple[User, Course, Application | None]:
    student = await UserRepository.get_by_id(db, student_id)
    if not student:
        raise NotFoundError("User", student_id)
    course = await course_repository.get_by_id(db, course_id)
    if not course:
        raise NotFoundError("Course", course_id)
    existing = await repository.get_by_student_and_course(db, student_id, course_id)
    return student, course, existing


def _ensure_editable(existing: Application | None) -> None:
    """
    Raises:
        ConflictError: If the application has already left draft
    """
    if existing and existing.status != ApplicationStatus.DRAFT:
        logger.warning(
            f"Rejected overwrite of application {existing.id} in status {existing.status.value}"
        )
        raise ConflictError("An application for this course has already been submitted")


async def _store_documents(pairs) -> list[dict]:
    descriptors: list[dict] = []
    try:
        for document, upload in pairs:
            stored = await save_upload(upload, UPLOAD_AREA)
            descriptors.append(build_descriptor(document, stored))
    except Exception:
        await delete_stored([d["path"] for d in descriptors])
        raise
    return descriptors


async def _upsert(
    db: AsyncSession,
    existing: Application | None,
    student: User,
    course: Course,
    submission: Submission,
    form_data: dict,
    status: ApplicationStatus,
    last_active_section: int,
    new_paths: list[str],
) -> Application:
    """Write the application in one transaction; new files are removed if it fails."""
    try:
        if existing:
            repository.ensure_transition(existing.status, status)
            application = await repository.update_fields(
                db,
                existing,
                form_data=form_data,
                education_details=submission.education_details,
                program_type=submission.program_type,
                status=status,
                last_active_section=last_active_section,
            )
        else:
            application = await repository.create(
                db,
                student_id=student.id,
                course_id=course.id,
                form_data=form_data,
                education_details=submission.education_details,
                program_type=submission.program_type,
                status=status,
                last_active_section=last_active_section,
            )
        await db.commit()
    except Exception:
        await db.rollback()
        await delete_stored(new_paths)
        raise
    return application


async def save_draft(db: AsyncSession, caller: CurrentUser, submission: Submission) -> Application:
    """
    Create or overwrite the caller's draft for a course.

    Uploaded files pair with declared documents and replace the stored
    set; a draft saved without files keeps the documents it already has.

    Raises:
        NotFoundError: If the course does not exist
        UploadError: If a file is rejected
        ValidationError: If a file has no declared document type
        ConflictError: If the application was already submitted
    """
    student_id = _resolve_student_id(caller, submission)
    student, course, existing = await _load_context(db, student_id, submission.course_id)
    _ensure_editable(existing)

    validate_uploads(submission.uploads.files)
    pairs = []
    if len(submission.uploads):
        pairs = pair_documents(declared_documents(submission.form_data) or [], submission.uploads)

    form_data = dict(submission.form_data)
    old_paths = descriptor_paths(existing.form_data) if existing else []
    if pairs:
        form_data["documents"] = await _store_documents(pairs)
    elif existing:
        form_data["documents"] = existing.documents
        old_paths = []
    else:
        form_data.pop("documents", None)
    new_paths = descriptor_paths(form_data) if pairs else []

    application = await _upsert(
        db,
        existing,
        student,
        course,
        submission,
        form_data,
        ApplicationStatus.DRAFT,
        submission.last_active_section,
        new_paths,
    )
    await delete_stored(old_paths)

    logger.info(
        f"Draft saved for application {application.id} "
        f"(student {student.id}, course {course.id}, {len(pairs)} documents)"
    )
    return application


async def submit_application(
    db: AsyncSession, caller: CurrentUser, submission: Submission
) -> Application:
    """
    Submit an application for review.

    Validation runs in full before any file is stored or row written.
    On success the application is pending with lastActiveSection reset.

    Raises:
        ValidationError: Invalid identity fields, missing documents, a file
            count that differs from the declared count, or unmet course requirements
        NotFoundError: If the course does not exist
        UploadError: If a file is rejected
        ConflictError: If an application for this course was already submitted
    """
    validate_identity_fields(submission.form_data)

    student_id = _resolve_student_id(caller, submission)
    student, course, existing = await _load_context(db, student_id, submission.course_id)

    uploads = submission.uploads
    validate_uploads(uploads.files)
    if not len(uploads):
        raise ValidationError("No files uploaded", fields=["documents"])

    declared = declared_documents(submission.form_data)
    if declared is None:
        raise ValidationError("Documents array is missing or invalid", fields=["formData.documents"])
    if len(uploads) != len(declared):
        raise ValidationError(
            f"Expected {len(declared)} files, but received {len(uploads)}",
            fields=["documents"],
        )
    pairs = pair_documents(declared, uploads)

    requirements = await form_service.get_requirements(db, course.id)
    if requirements:
        check_submission(
            requirements,
            submission.program_type,
            submission.form_data,
            submission.education_details,
            [document.type for document, _ in pairs],
        )

    _ensure_editable(existing)

    form_data = dict(submission.form_data)
    old_paths = descriptor_paths(existing.form_data) if existing else []
    form_data["documents"] = await _store_documents(pairs)

    application = await _upsert(
        db,
        existing,
        student,
        course,
        submission,
        form_data,
        ApplicationStatus.PENDING,
        0,
        descriptor_paths(form_data),
    )
    await delete_stored(old_paths)

    logger.info(f"Application {application.id} submitted by student {student.id} for course {course.id}")
    await email.send_application_received(student.email, student.name, course.title)
    return application


async def get_application_for(
    db: AsyncSession, caller: CurrentUser, student_id: str, course_id: str
) -> Application:
    """
    Fetch the application a student holds for a course.

    Raises:
        ForbiddenError: If a student asks for someone else's application
        NotFoundError: If the course or application does not exist
    """
    if student_id != caller.id and not has_capability(caller.role, Capability.VIEW_ANY_APPLICATION):
        raise ForbiddenError("Access denied. You can only view your own applications.")

    if not await course_repository.get_by_id(db, course_id):
        raise NotFoundError("Course", course_id)

    application = await repository.get_by_student_and_course(db, student_id, course_id)
    if not application:
        raise NotFoundError("Application")
    return application


async def list_applications(db: AsyncSession) -> list[Application]:
    return await repository.list_all(db)


async def get_application(db: AsyncSession, caller: CurrentUser, application_id: str) -> Application:
    """
    Raises:
        NotFoundError: If the application does not exist
        ForbiddenError: If a student asks for someone else's application
    """
    application = await repository.get_by_id(db, application_id)
    if not application:
        raise NotFoundError("Application", application_id)
    if application.student_id != caller.id and not has_capability(
        caller.role, Capability.VIEW_ANY_APPLICATION
    ):
        raise ForbiddenError("Access denied. You can only view your own applications.")
    return application


async def delete_application(db: AsyncSession, application_id: str) -> None:
    """Delete an application, its payments and its stored documents."""
    application = await repository.get_by_id(db, application_id)
    if not application:
        raise NotFoundError("Application", application_id)

    paths = descriptor_paths(application.form_data)
    await repository.delete(db, application)
    await db.commit()
    await delete_stored(paths)
    logger.info(f"Deleted application {application_id} and {len(paths)} stored documents")


def document_path(filename: str) -> Path:
    """Location of a stored application document."""
    return resolve_download_path(UPLOAD_AREA, filename)
