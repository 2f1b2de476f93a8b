"""
Verification Officer Router

Endpoints (mounted at /api/verification-officer):
- GET /assigned-students - Students with applications assigned to the caller
- GET /assigned-applications - Assigned applications with payment summaries
- PUT /students/{student_id}/verify - Set an assigned student's verification flag
- GET /profile - The caller's name
- POST /verify-application/{application_id} - Verify or reject an application
- POST /save-application-comments/{application_id} - Save review comments
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from admissions.core.auth import CurrentUser, require
from admissions.core.database import get_db
from admissions.core.policy import Capability
from admissions.core.rate_limit import enforce_rate_limit
from admissions.modules.shared.schemas import MessageResponse
from admissions.modules.verification import service
from admissions.modules.verification.schemas import (
    AssignedApplication,
    AssignedStudent,
    CommentsRequest,
    DecisionRequest,
    OfficerProfile,
    VerifyStudentRequest,
    VerifyStudentResponse,
)

router = APIRouter()

reviewer = require(Capability.REVIEW_APPLICATIONS)

# (limit, window_seconds) per officer
RATE_LIMIT_DECISIONS = (30, 60)


@router.get("/assigned-students", response_model=list[AssignedStudent], summary="Assigned students")
async def assigned_students(
    db: AsyncSession = Depends(get_db),
    officer: CurrentUser = Depends(reviewer),
) -> list[AssignedStudent]:
    students = await service.list_assigned_students(db, officer)
    return [AssignedStudent.model_validate(s) for s in students]


@router.get(
    "/assigned-applications",
    response_model=list[AssignedApplication],
    summary="Assigned applications",
)
async def assigned_applications(
    db: AsyncSession = Depends(get_db),
    officer: CurrentUser = Depends(reviewer),
) -> list[AssignedApplication]:
    return await service.list_assigned_applications(db, officer)


@router.put(
    "/students/{student_id}/verify",
    response_model=VerifyStudentResponse,
    summary="Verify an assigned student",
)
async def verify_student(
    student_id: str,
    data: VerifyStudentRequest,
    db: AsyncSession = Depends(get_db),
    officer: CurrentUser = Depends(reviewer),
) -> VerifyStudentResponse:
    student = await service.set_student_verification(db, officer, student_id, data.verified)
    return VerifyStudentResponse(
        message=f"Student {'verified' if data.verified else 'unverified'} successfully",
        student=AssignedStudent.model_validate(student),
    )


@router.get("/profile", response_model=OfficerProfile, summary="Officer profile")
async def profile(
    db: AsyncSession = Depends(get_db),
    officer: CurrentUser = Depends(reviewer),
) -> OfficerProfile:
    return OfficerProfile.model_validate(await service.get_officer(db, officer))


@router.post(
    "/verify-application/{application_id}",
    response_model=MessageResponse,
    summary="Decide on an application",
)
async def verify_application(
    application_id: str,
    data: DecisionRequest,
    db: AsyncSession = Depends(get_db),
    officer: CurrentUser = Depends(reviewer),
) -> MessageResponse:
    """
    Verify (``verified: true``) or reject an assigned application.

    Verification requires a completed payment for the application.
    """
    limit, window = RATE_LIMIT_DECISIONS
    await enforce_rate_limit(f"rate_limit:decide:{officer.id}", limit, window)

    await service.decide(db, officer, application_id, data)
    return MessageResponse(
        message=f"Application {'verified' if data.verified else 'rejected'} successfully"
    )


@router.post(
    "/save-application-comments/{application_id}",
    response_model=MessageResponse,
    summary="Save review comments",
)
async def save_application_comments(
    application_id: str,
    data: CommentsRequest,
    db: AsyncSession = Depends(get_db),
    officer: CurrentUser = Depends(reviewer),
) -> MessageResponse:
    limit, window = RATE_LIMIT_DECISIONS
    await enforce_rate_limit(f"rate_limit:comments:{officer.id}", limit, window)

    await service.save_comments(db, officer, application_id, data)
    return MessageResponse(message="Comments saved successfully")
