"""
Course Catalog Router

Endpoints (mounted at /api/courses):
- GET / - List visible courses
- GET /{course_id} - Public course detail
- POST /newCourse, PUT /{course_id}, DELETE /{course_id} - Admin catalog management
- GET /{course_id}/description, POST /{course_id}/add-description - Assigned content admin
- POST /verify-code - Resolve a subject code to a course id (content admin)
"""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from admissions.core.auth import CurrentUser, get_current_user, require
from admissions.core.database import get_db
from admissions.core.policy import Capability
from admissions.modules.courses import service
from admissions.modules.courses.schemas import (
    CourseCreate,
    CourseDescriptionRequest,
    CourseDescriptionResponse,
    CourseMutationResponse,
    CourseResponse,
    VerifyCodeRequest,
    VerifyCodeResponse,
)
from admissions.modules.forms.schemas import FormStructureResponse
from admissions.modules.forms.service import to_response as form_to_response
from admissions.modules.shared.schemas import CamelModel, MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter()


class AddDescriptionResponse(CamelModel):
    message: str
    course: CourseResponse
    form: FormStructureResponse


@router.get("", response_model=list[CourseResponse], summary="List courses")
async def list_courses(
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> list[CourseResponse]:
    courses = await service.list_courses(db, user)
    return [CourseResponse.model_validate(c) for c in courses]


@router.post(
    "/newCourse",
    response_model=CourseMutationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a course",
)
async def create_course(
    data: CourseCreate,
    db: AsyncSession = Depends(get_db),
    admin: CurrentUser = Depends(require(Capability.MANAGE_COURSES)),
) -> CourseMutationResponse:
    course = await service.create_course(db, data)
    logger.info(f"Admin {admin.id} added course {course.id}")
    return CourseMutationResponse(
        message="Course added successfully",
        course=CourseResponse.model_validate(course),
    )


@router.post("/verify-code", response_model=VerifyCodeResponse, summary="Verify a course code")
async def verify_code(
    data: VerifyCodeRequest,
    db: AsyncSession = Depends(get_db),
    _user: CurrentUser = Depends(require(Capability.DESCRIBE_COURSES)),
) -> VerifyCodeResponse:
    course = await service.verify_code(db, data.subject_code)
    return VerifyCodeResponse(course_id=course.id)


@router.get("/{course_id}", response_model=CourseResponse, summary="Get a course")
async def get_course(
    course_id: str,
    db: AsyncSession = Depends(get_db),
) -> CourseResponse:
    """Public: no authentication required."""
    course = await service.get_course(db, course_id)
    return CourseResponse.model_validate(course)


@router.put("/{course_id}", response_model=CourseMutationResponse, summary="Edit a course")
async def update_course(
    course_id: str,
    data: CourseCreate,
    db: AsyncSession = Depends(get_db),
    _admin: CurrentUser = Depends(require(Capability.MANAGE_COURSES)),
) -> CourseMutationResponse:
    course = await service.update_course(db, course_id, data)
    return CourseMutationResponse(
        message="Course updated successfully",
        course=CourseResponse.model_validate(course),
    )


@router.delete("/{course_id}", response_model=MessageResponse, summary="Delete a course")
async def delete_course(
    course_id: str,
    db: AsyncSession = Depends(get_db),
    _admin: CurrentUser = Depends(require(Capability.MANAGE_COURSES)),
) -> MessageResponse:
    await service.delete_course(db, course_id)
    return MessageResponse(message="Course deleted successfully")


@router.get(
    "/{course_id}/description",
    response_model=CourseDescriptionResponse,
    summary="Get course description",
)
async def get_description(
    course_id: str,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(require(Capability.DESCRIBE_COURSES)),
) -> CourseDescriptionResponse:
    course = await service.get_description(db, user, course_id)
    values = {
        key: value
        for key, value in CourseResponse.model_validate(course).model_dump().items()
        if value is not None and key in CourseDescriptionResponse.model_fields
    }
    return CourseDescriptionResponse(**values)


@router.post(
    "/{course_id}/add-description",
    response_model=AddDescriptionResponse,
    summary="Add course description and program type",
)
async def add_description(
    course_id: str,
    data: CourseDescriptionRequest,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(require(Capability.DESCRIBE_COURSES)),
) -> AddDescriptionResponse:
    course, template = await service.add_description(db, user, course_id, data)
    return AddDescriptionResponse(
        message="Course description and program type added successfully!",
        course=CourseResponse.model_validate(course),
        form=form_to_response(template),
    )
