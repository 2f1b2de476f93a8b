"""
Faculty and Student Dashboard Schemas
"""

from typing import Any

from pydantic import EmailStr, Field

from admissions.modules.shared.schemas import CamelModel


class FacultyInfoRequest(CamelModel):
    """Profile fields a faculty member maintains. Omitted fields are left unchanged."""

    email: EmailStr
    name: str | None = Field(default=None, min_length=1, max_length=200)
    department: str | None = None
    contact: str | None = None
    bio: str | None = None


class FacultyInfo(CamelModel):
    name: str
    email: str
    department: str = ""
    contact: str = ""
    bio: str = ""


class FacultyInfoResponse(CamelModel):
    message: str
    faculty: FacultyInfo


class StudentListItem(CamelModel):
    id: str
    name: str
    email: str


class StudentName(CamelModel):
    name: str


class DashboardData(CamelModel):
    """A student's dashboard snapshot, as maintained by faculty."""

    courses: list[Any] = Field(default_factory=list)
    cgpa: str | float = "N/A"
    last_gpa: str | float = "N/A"
    assignments: list[Any] = Field(default_factory=list)
    schedule: list[Any] = Field(default_factory=list)
    announcements: str = "No announcements"
    activity: str = "No activity"


class UpdateStudentRequest(CamelModel):
    """Dashboard fields for one student. Blank values fall back to defaults."""

    email: EmailStr
    courses: list[Any] | None = None
    cgpa: str | float | None = None
    last_gpa: str | float | None = None
    assignments: list[Any] | None = None
    schedule: list[Any] | None = None
    announcements: str | None = None
    activity: str | None = None


class StudentDashboard(CamelModel):
    email: str
    name: str
    dashboard_data: DashboardData
