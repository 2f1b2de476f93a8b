"""
Form Template Service

Content admins define one template per course; students read it to
build their application.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from admissions.core.auth import CurrentUser
from admissions.core.errors import ForbiddenError, NotFoundError
from admissions.modules.courses import repository as course_repository
from admissions.modules.courses.models import Course, ProgramType
from admissions.modules.forms import repository
from admissions.modules.forms.models import FormTemplate
from admissions.modules.forms.requirements import SubmissionRequirements, resolve_requirements
from admissions.modules.forms.schemas import (
    AcademicSubfields,
    EducationFields,
    FormStructureRequest,
    FormStructureResponse,
)

logger = logging.getLogger(__name__)


def ensure_assigned(course: Course, caller: CurrentUser) -> None:
    """
    Content admins may only touch courses assigned to their email.

    Raises:
        ForbiddenError: If the course belongs to someone else
    """
    if course.assigned_to.lower() != caller.email.lower():
        logger.warning(f"Content admin {caller.id} not assigned to course {course.id}")
        raise ForbiddenError("Access denied. You are not assigned to this course.")


def to_response(template: FormTemplate) -> FormStructureResponse:
    return FormStructureResponse(
        program_type=template.program_type,
        education_fields=EducationFields.model_validate(template.education_fields or {}),
        sections=template.sections or [],
        required_academic_fields=template.required_academic_fields or [],
        required_academic_subfields=AcademicSubfields.model_validate(
            template.required_academic_subfields or {}
        ),
        required_documents=template.required_documents or [],
    )


async def save_form_structure(
    db: AsyncSession,
    caller: CurrentUser,
    data: FormStructureRequest,
) -> tuple[FormTemplate, bool]:
    """
    Create a course's template, or merge the provided sections into it.

    Args:
        db: Database session
        caller: The content admin
        data: Template sections; omitted sections keep their stored value

    Returns:
        The template and whether it was newly created

    Raises:
        NotFoundError: If the course does not exist
        ForbiddenError: If the course is not assigned to the caller
    """
    course = await course_repository.get_by_id(db, data.course_id)
    if not course:
        raise NotFoundError("Course", data.course_id)
    ensure_assigned(course, caller)

    sections = data.model_dump(exclude_unset=True, exclude={"course_id"}, mode="json")
    if data.program_type is not None:
        sections["program_type"] = data.program_type
    template = await repository.get_by_course_id(db, course.id)

    if template:
        await repository.update(db, template, **{k: v for k, v in sections.items() if v is not None})
        created = False
    else:
        defaults = FormStructureResponse().model_dump(mode="json")
        defaults.update({k: v for k, v in sections.items() if v is not None})
        template = await repository.create(db, course.id, **defaults)
        created = True

    await db.commit()
    logger.info(f"Form structure {'created' if created else 'updated'} for course {course.id}")
    return template, created


async def get_form_structure(db: AsyncSession, course_id: str) -> FormTemplate:
    """
    Raises:
        NotFoundError: If the course has no template
    """
    template = await repository.get_by_course_id(db, course_id)
    if not template:
        raise NotFoundError("Form structure")
    return template


async def set_program_type(db: AsyncSession, course_id: str, program_type: ProgramType) -> FormTemplate:
    """Upsert only the template's program type. Caller commits."""
    template = await repository.get_by_course_id(db, course_id)
    if template:
        return await repository.update(db, template, program_type=program_type)

    defaults = FormStructureResponse().model_dump(mode="json")
    defaults["program_type"] = program_type
    return await repository.create(db, course_id, **defaults)


async def get_requirements(db: AsyncSession, course_id: str) -> SubmissionRequirements | None:
    """Resolved requirements for a course, or None when it has no template."""
    template = await repository.get_by_course_id(db, course_id)
    return resolve_requirements(template) if template else None
