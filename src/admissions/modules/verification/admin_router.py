"""
Verification Admin Router

Endpoints (mounted at /api/verification-admin):
- GET /users, GET /users/{user_id} - Account overview
- PUT /users/{user_id}/verify - Set a user's verification flag
- GET /verification-officers - All verification officers
- GET /courses/{course_id}/users - Users attached to a course
- PUT /students/{student_id}/assign - Assign one student's application to an officer
- GET /courses/{course_id}/applications-count - Status counts for a course
- POST /courses/{course_id}/assign-officers - Batch-assign a course's applications
- POST /courses/{course_id}/unassign-officers - Clear a course's assignments
- GET /applications - Applications with live student and course
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from admissions.core.auth import CurrentUser, require
from admissions.core.database import get_db
from admissions.core.policy import Capability
from admissions.modules.applications.schemas import ApplicationDetail
from admissions.modules.users.schemas import UserSummary
from admissions.modules.verification import service
from admissions.modules.verification.schemas import (
    ApplicationsCountResponse,
    AssignedApplicationRef,
    AssignStudentRequest,
    AssignStudentResponse,
    BatchAssignRequest,
    BatchAssignResponse,
    UnassignResponse,
    VerifyUserRequest,
    VerifyUserResponse,
)

router = APIRouter()

administrator = require(Capability.ADMINISTER_VERIFICATION)
assigner = require(Capability.ASSIGN_OFFICERS)


@router.get("/users", response_model=list[UserSummary], summary="List users")
async def list_users(
    db: AsyncSession = Depends(get_db),
    _admin: CurrentUser = Depends(administrator),
) -> list[UserSummary]:
    return [UserSummary.model_validate(u) for u in await service.list_users(db)]


@router.get("/verification-officers", response_model=list[UserSummary], summary="List officers")
async def list_officers(
    db: AsyncSession = Depends(get_db),
    _admin: CurrentUser = Depends(administrator),
) -> list[UserSummary]:
    return [UserSummary.model_validate(u) for u in await service.list_officers(db)]


@router.get("/courses/{course_id}/users", response_model=list[UserSummary], summary="List course users")
async def list_course_users(
    course_id: str,
    db: AsyncSession = Depends(get_db),
    _admin: CurrentUser = Depends(administrator),
) -> list[UserSummary]:
    users = await service.list_course_users(db, course_id)
    return [UserSummary.model_validate(u) for u in users]


@router.get("/users/{user_id}", response_model=UserSummary, summary="Get a user")
async def get_user(
    user_id: str,
    db: AsyncSession = Depends(get_db),
    _admin: CurrentUser = Depends(administrator),
) -> UserSummary:
    return UserSummary.model_validate(await service.get_user(db, user_id))


@router.put("/users/{user_id}/verify", response_model=VerifyUserResponse, summary="Verify a user")
async def verify_user(
    user_id: str,
    data: VerifyUserRequest,
    db: AsyncSession = Depends(get_db),
    admin: CurrentUser = Depends(administrator),
) -> VerifyUserResponse:
    user = await service.set_user_verification(
        db, admin, user_id, data.verified, data.verification_comment
    )
    return VerifyUserResponse(
        message="Verification status updated",
        user=UserSummary.model_validate(user),
    )


@router.put(
    "/students/{student_id}/assign",
    response_model=AssignStudentResponse,
    summary="Assign a student to an officer",
)
async def assign_student(
    student_id: str,
    data: AssignStudentRequest,
    db: AsyncSession = Depends(get_db),
    admin: CurrentUser = Depends(assigner),
) -> AssignStudentResponse:
    application = await service.assign_student(db, admin, student_id, data.officer_id, data.course_id)
    return AssignStudentResponse(
        message="Student assigned",
        application=AssignedApplicationRef.model_validate(application),
    )


@router.get(
    "/courses/{course_id}/applications-count",
    response_model=ApplicationsCountResponse,
    summary="Application statistics for a course",
)
async def applications_count(
    course_id: str,
    db: AsyncSession = Depends(get_db),
    _admin: CurrentUser = Depends(administrator),
) -> ApplicationsCountResponse:
    course, stats = await service.application_stats(db, course_id)
    return ApplicationsCountResponse(
        message=f"Application statistics for course {course.title}",
        course_id=course.id,
        stats=stats,
    )


@router.post(
    "/courses/{course_id}/assign-officers",
    response_model=BatchAssignResponse,
    summary="Distribute applications among officers",
)
async def assign_officers(
    course_id: str,
    data: BatchAssignRequest,
    db: AsyncSession = Depends(get_db),
    admin: CurrentUser = Depends(assigner),
) -> BatchAssignResponse:
    """
    Walk the course's applications in submission order and hand them to
    the course's officers ``batchSize`` at a time, round-robin.
    """
    officer_count, assignments = await service.batch_assign_officers(
        db, admin, course_id, data.batch_size
    )
    return BatchAssignResponse(
        message=f"Applications distributed successfully among {officer_count} officers",
        total_assigned=len(assignments),
        assignments=assignments,
    )


@router.post(
    "/courses/{course_id}/unassign-officers",
    response_model=UnassignResponse,
    summary="Clear officer assignments for a course",
)
async def unassign_officers(
    course_id: str,
    db: AsyncSession = Depends(get_db),
    admin: CurrentUser = Depends(assigner),
) -> UnassignResponse:
    matched, modified = await service.unassign_officers(db, admin, course_id)
    return UnassignResponse(
        message=f"Successfully unassigned officers for {matched} applications",
        total_unassigned=modified,
    )


@router.get("/applications", response_model=list[ApplicationDetail], summary="List applications")
async def list_applications(
    db: AsyncSession = Depends(get_db),
    _admin: CurrentUser = Depends(administrator),
) -> list[ApplicationDetail]:
    applications = await service.list_linked_applications(db)
    return [ApplicationDetail.model_validate(a) for a in applications]
