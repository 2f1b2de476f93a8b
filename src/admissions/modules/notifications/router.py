"""
Student Notifications Router

Endpoints (mounted at /api/student-notifications):
- GET /student-notifications - Officer feedback on the caller's applications
- POST /mark-comments-read/{application_id} - Mark one application's feedback read
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from admissions.core.auth import CurrentUser, require
from admissions.core.database import get_db
from admissions.core.policy import Capability
from admissions.modules.notifications import service
from admissions.modules.notifications.schemas import NotificationList
from admissions.modules.shared.schemas import MessageResponse

router = APIRouter()


@router.get("/student-notifications", response_model=NotificationList, summary="List notifications")
async def student_notifications(
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(require(Capability.READ_NOTIFICATIONS)),
) -> NotificationList:
    return await service.list_notifications(db, user)


@router.post(
    "/mark-comments-read/{application_id}",
    response_model=MessageResponse,
    summary="Mark comments read",
)
async def mark_comments_read(
    application_id: str,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(require(Capability.READ_NOTIFICATIONS)),
) -> MessageResponse:
    await service.mark_comments_read(db, user, application_id)
    return MessageResponse(message="Comments marked as read")
