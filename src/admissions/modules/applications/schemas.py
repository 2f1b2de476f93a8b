"""
Application Schemas

Typed views of application payloads and responses.
"""

from datetime import datetime
from typing import Any

from pydantic import ConfigDict, Field

from admissions.modules.applications.models import ApplicationStatus
from admissions.modules.courses.models import ProgramType
from admissions.modules.shared.schemas import CamelModel
from admissions.modules.users.models import UserRole


class DeclaredDocument(CamelModel):
    """A document the applicant declares in formData.documents."""

    model_config = ConfigDict(extra="allow")

    type: str | None = None
    key: str | None = None

    @property
    def pairing_key(self) -> str | None:
        return self.key or self.type


class DocumentDescriptor(CamelModel):
    """A stored document attached to an application."""

    type: str
    key: str | None = None
    filename: str
    path: str
    original_name: str
    mimetype: str
    size: int


class FormDataPayload(CamelModel):
    """
    The parts of formData the server relies on.

    Any other answers are kept as submitted.
    """

    model_config = ConfigDict(extra="allow")

    documents: list[DeclaredDocument] | None = None


class StudentRef(CamelModel):
    id: str
    name: str
    email: str
    registration_number: str | None = None
    verified: bool = False


class CourseRef(CamelModel):
    id: str
    title: str


class OfficerRef(CamelModel):
    id: str
    name: str
    role: UserRole | None = None


class ApplicationResponse(CamelModel):
    """An application as stored."""

    id: str
    student_id: str | None = None
    course_id: str | None = None
    form_data: dict[str, Any] = Field(default_factory=dict)
    education_details: dict[str, Any] = Field(default_factory=dict)
    program_type: ProgramType
    assigned_officer_id: str | None = None
    verified: bool = False
    verified_by_id: str | None = None
    status: ApplicationStatus
    last_active_section: int = 0
    field_comments: dict[str, str] = Field(default_factory=dict)
    comments_read: bool = False
    created_at: datetime
    updated_at: datetime


class ApplicationDetail(ApplicationResponse):
    """Application with its related people and course resolved."""

    student: StudentRef | None = None
    course: CourseRef | None = None
    assigned_officer: OfficerRef | None = None
    verified_by: OfficerRef | None = None


class ApplicationSavedResponse(CamelModel):
    message: str
    application_id: str
    status: ApplicationStatus
