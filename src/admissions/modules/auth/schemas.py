"""Authentication schemas."""

from pydantic import EmailStr, Field

from admissions.modules.shared.schemas import CamelModel
from admissions.modules.users.models import UserRole


class RegisterRequest(CamelModel):
    """Self-registration request (always creates a student)."""

    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    password: str = Field(..., min_length=1)


class RegisterResponse(CamelModel):
    user_id: str
    token: str
    role: UserRole
    message: str


class LoginRequest(CamelModel):
    """Login request schema."""

    email: EmailStr
    password: str


class LoginResponse(CamelModel):
    """Login response schema."""

    token: str
    user_id: str
    role: UserRole


class ChangePasswordRequest(CamelModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=1)
    confirm_new_password: str = Field(..., min_length=1)
