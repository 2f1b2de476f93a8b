"""
Applications Router

Student endpoints (mounted at /api/applications):
- POST /save-draft - Save or overwrite a draft (multipart)
- POST /submit-application - Submit for review (multipart)
- GET /get-application/{student_id}/{course_id} - Fetch a student's application
- GET /uploads/applications/{filename} - Download a stored document

Staff endpoints:
- GET /api/applications - List all applications (admin)
- GET /api/application/{application_id} - Application detail (staff or owner)
- DELETE /api/application/{application_id} - Delete an application (admin)

Multipart fields: courseId, formData (JSON), educationDetails (JSON),
programType (UG|PG), lastActiveSection (drafts), and the files, either
all under ``documents`` (paired by position with formData.documents) or
each under ``documents[<key>]`` (paired by the declared key or type).
"""

import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import FileResponse
from sqlalchemy.ext.asyncio import AsyncSession

from admissions.core.auth import CurrentUser, get_current_user, require
from admissions.core.config import settings
from admissions.core.database import get_db
from admissions.core.policy import Capability
from admissions.modules.applications import service
from admissions.modules.applications.helpers import parse_submission, read_multipart
from admissions.modules.applications.schemas import (
    ApplicationDetail,
    ApplicationResponse,
    ApplicationSavedResponse,
)
from admissions.modules.shared.schemas import MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter()
detail_router = APIRouter()


@router.post("/save-draft", response_model=ApplicationSavedResponse, summary="Save a draft")
async def save_draft(
    request: Request,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(require(Capability.APPLY)),
) -> ApplicationSavedResponse:
    async with read_multipart(request) as form:
        submission = parse_submission(form, draft=True)
        application = await service.save_draft(db, user, submission)
    return ApplicationSavedResponse(
        message="Draft saved successfully",
        application_id=application.id,
        status=application.status,
    )


@router.post(
    "/submit-application",
    response_model=ApplicationSavedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit an application",
)
async def submit_application(
    request: Request,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(require(Capability.APPLY)),
) -> ApplicationSavedResponse:
    """
    Submit an application for verification.

    Requires a 12-digit ``aadhaarNumber`` and a valid ``email`` in formData,
    and exactly one uploaded file per declared document.
    """
    async with read_multipart(request) as form:
        submission = parse_submission(form, draft=False)
        application = await service.submit_application(db, user, submission)
    return ApplicationSavedResponse(
        message="Application submitted successfully",
        application_id=application.id,
        status=application.status,
    )


@router.get(
    "/get-application/{student_id}/{course_id}",
    response_model=ApplicationResponse,
    summary="Get a student's application for a course",
)
async def get_application_for(
    student_id: str,
    course_id: str,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> ApplicationResponse:
    application = await service.get_application_for(db, user, student_id, course_id)
    return ApplicationResponse.model_validate(application)


@router.get("", response_model=list[ApplicationDetail], summary="List all applications")
async def list_applications(
    db: AsyncSession = Depends(get_db),
    _admin: CurrentUser = Depends(require(Capability.MANAGE_APPLICATIONS)),
) -> list[ApplicationDetail]:
    applications = await service.list_applications(db)
    return [ApplicationDetail.model_validate(a) for a in applications]


@router.get("/uploads/applications/{filename}", summary="Download an application document")
async def download_document(
    filename: str,
    user: CurrentUser = Depends(get_current_user),
) -> FileResponse:
    path = service.document_path(filename)
    logger.info(f"User {user.id} downloaded {filename}")
    return FileResponse(path)


@detail_router.get("/{application_id}", response_model=ApplicationDetail, summary="Get an application")
async def get_application(
    application_id: str,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> ApplicationDetail:
    application = await service.get_application(db, user, application_id)
    return ApplicationDetail.model_validate(application)


@detail_router.delete("/{application_id}", response_model=MessageResponse, summary="Delete an application")
async def delete_application(
    application_id: str,
    db: AsyncSession = Depends(get_db),
    admin: CurrentUser = Depends(require(Capability.MANAGE_APPLICATIONS)),
) -> MessageResponse:
    await service.delete_application(db, application_id)
    logger.info(f"Admin {admin.id} deleted application {application_id}")
    return MessageResponse(message="Application deleted successfully")
