"""
User Schemas

Pydantic schemas for account management requests and responses.
"""

from datetime import datetime

from pydantic import EmailStr, Field

from admissions.modules.shared.schemas import CamelModel
from admissions.modules.users.models import UserRole


class UserRef(CamelModel):
    """Minimal reference to another user (verifier, officer)."""

    id: str
    name: str
    role: UserRole | None = None


class UserSummary(CamelModel):
    """User as listed to administrators."""

    id: str
    name: str
    email: str
    role: UserRole
    verified: bool
    verified_by: UserRef | None = None
    verification_comment: str | None = None
    course_ids: list[str] = Field(default_factory=list)


class UserResponse(UserSummary):
    """Full user record."""

    department: str | None = None
    contact: str | None = None
    bio: str | None = None
    profile_image: str | None = None
    registration_number: str | None = None
    phone_number: str | None = None
    cgpa: float = 0
    last_gpa: float = 0
    semester: int = 1
    created_at: datetime
    updated_at: datetime


class CreateUserRequest(CamelModel):
    """Request body for POST /api/users/create."""

    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    password: str = Field(..., min_length=1)
    role: UserRole
    course_id: str | None = None


class CreateUserResponse(CamelModel):
    message: str
    user_id: str
