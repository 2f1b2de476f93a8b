"""
Verification Schemas

Requests and responses for the verification admin and officer desks.
"""

from pydantic import Field, StrictBool

from admissions.modules.applications.models import ApplicationStatus
from admissions.modules.applications.schemas import ApplicationDetail, StudentRef
from admissions.modules.payments.schemas import PaymentSummary
from admissions.modules.shared.schemas import CamelModel
from admissions.modules.users.schemas import UserRef, UserSummary


# ============================================
# Verification admin
# ============================================


class VerifyUserRequest(CamelModel):
    verified: StrictBool
    verification_comment: str | None = None


class VerifyUserResponse(CamelModel):
    message: str
    user: UserSummary


class AssignStudentRequest(CamelModel):
    """Assign one student's application to an officer."""

    officer_id: str = Field(..., min_length=1)
    course_id: str | None = None


class AssignedApplicationRef(CamelModel):
    id: str
    student_id: str | None = None
    course_id: str | None = None
    assigned_officer_id: str | None = None
    student: StudentRef | None = None


class AssignStudentResponse(CamelModel):
    message: str
    application: AssignedApplicationRef


class ApplicationStats(CamelModel):
    total: int = 0
    pending: int = 0
    verified: int = 0
    rejected: int = 0
    draft: int = 0
    valid_students: int = 0
    invalid_students: int = 0


class ApplicationsCountResponse(CamelModel):
    message: str
    course_id: str
    stats: ApplicationStats


class BatchAssignRequest(CamelModel):
    batch_size: int = Field(..., gt=0)


class Assignment(CamelModel):
    application_id: str
    student_id: str
    officer_id: str
    officer_name: str
    application_status: ApplicationStatus


class BatchAssignResponse(CamelModel):
    message: str
    total_assigned: int
    assignments: list[Assignment]


class UnassignResponse(CamelModel):
    message: str
    total_unassigned: int


# ============================================
# Verification officer
# ============================================


class AssignedStudent(StudentRef):
    verified_by: UserRef | None = None


class AssignedApplication(ApplicationDetail):
    payment: PaymentSummary | None = None


class VerifyStudentRequest(CamelModel):
    verified: StrictBool


class VerifyStudentResponse(CamelModel):
    message: str
    student: AssignedStudent


class OfficerProfile(CamelModel):
    name: str


class DecisionRequest(CamelModel):
    """An officer's verification decision."""

    verified: StrictBool
    comments: str | None = None
    field_comments: dict[str, str] | None = None


class CommentsRequest(CamelModel):
    comments: str | None = None
    field_comments: dict[str, str] | None = None
