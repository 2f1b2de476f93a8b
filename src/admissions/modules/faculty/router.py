"""
Faculty Router

Endpoints (mounted at /api/faculty, faculty only):
- PUT /info - Update the caller's faculty profile
- GET /info/{email} - Faculty profile by email
- GET /students - All students, by name
- GET /student-info/{email} - A student's name
- PUT /update-student - Replace a student's dashboard snapshot
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from admissions.core.auth import CurrentUser, require
from admissions.core.database import get_db
from admissions.core.policy import Capability
from admissions.modules.faculty import service
from admissions.modules.faculty.schemas import (
    FacultyInfo,
    FacultyInfoRequest,
    FacultyInfoResponse,
    StudentDashboard,
    StudentListItem,
    StudentName,
    UpdateStudentRequest,
)
from admissions.modules.shared.schemas import MessageResponse

router = APIRouter()
student_router = APIRouter()

faculty_only = require(Capability.MANAGE_STUDENT_RECORDS)


def _faculty_info(user) -> FacultyInfo:
    return FacultyInfo(
        name=user.name,
        email=user.email,
        department=user.department or "",
        contact=user.contact or "",
        bio=user.bio or "",
    )


@router.put("/info", response_model=FacultyInfoResponse, summary="Update faculty profile")
async def update_info(
    data: FacultyInfoRequest,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(faculty_only),
) -> FacultyInfoResponse:
    faculty = await service.update_faculty_info(db, user, data)
    return FacultyInfoResponse(
        message="Faculty info updated successfully",
        faculty=_faculty_info(faculty),
    )


@router.get("/info/{email}", response_model=FacultyInfo, summary="Get faculty profile")
async def get_info(
    email: str,
    db: AsyncSession = Depends(get_db),
    _user: CurrentUser = Depends(faculty_only),
) -> FacultyInfo:
    return _faculty_info(await service.get_faculty_info(db, email))


@router.get("/students", response_model=list[StudentListItem], summary="List students")
async def list_students(
    db: AsyncSession = Depends(get_db),
    _user: CurrentUser = Depends(faculty_only),
) -> list[StudentListItem]:
    return [StudentListItem.model_validate(s) for s in await service.list_students(db)]


@router.get("/student-info/{email}", response_model=StudentName, summary="Get a student's name")
async def student_info(
    email: str,
    db: AsyncSession = Depends(get_db),
    _user: CurrentUser = Depends(faculty_only),
) -> StudentName:
    return StudentName.model_validate(await service.get_student(db, email))


@router.put("/update-student", response_model=MessageResponse, summary="Update a student dashboard")
async def update_student(
    data: UpdateStudentRequest,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(faculty_only),
) -> MessageResponse:
    await service.update_student_dashboard(db, user, data)
    return MessageResponse(message="Student dashboard updated successfully")


@student_router.get("/dashboard", response_model=StudentDashboard, summary="My dashboard")
async def dashboard(
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(require(Capability.VIEW_OWN_DASHBOARD)),
) -> StudentDashboard:
    """Mounted at /api/student."""
    student, data = await service.get_own_dashboard(db, user)
    return StudentDashboard(email=student.email, name=student.name, dashboard_data=data)
