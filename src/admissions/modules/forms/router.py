"""
Form Templates Router

Endpoints (mounted at /api/forms):
- POST /save-form-structure - Create or update a course's template (content admin)
- GET /get-form-structure/{course_id} - Read a course's template (authenticated)
"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from admissions.core.auth import CurrentUser, get_current_user, require
from admissions.core.database import get_db
from admissions.core.policy import Capability
from admissions.modules.forms import service
from admissions.modules.forms.schemas import (
    FormStructureRequest,
    FormStructureResponse,
    SaveFormStructureResponse,
)

router = APIRouter()


@router.post(
    "/save-form-structure",
    response_model=SaveFormStructureResponse,
    summary="Save form structure",
    responses={201: {"model": SaveFormStructureResponse}},
)
async def save_form_structure(
    data: FormStructureRequest,
    response: Response,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(require(Capability.MANAGE_FORM_TEMPLATES)),
) -> SaveFormStructureResponse:
    """
    Create the template for a course (201) or merge an update into it (200).
    """
    template, created = await service.save_form_structure(db, user, data)
    if created:
        response.status_code = status.HTTP_201_CREATED
    return SaveFormStructureResponse(
        message=f"Form structure {'saved' if created else 'updated'} successfully",
        course_id=template.course_id,
        form=service.to_response(template),
    )


@router.get(
    "/get-form-structure/{course_id}",
    response_model=FormStructureResponse,
    summary="Get form structure",
)
async def get_form_structure(
    course_id: str,
    db: AsyncSession = Depends(get_db),
    _user: CurrentUser = Depends(get_current_user),
) -> FormStructureResponse:
    template = await service.get_form_structure(db, course_id)
    return service.to_response(template)
