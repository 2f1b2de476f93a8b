"""
User Models

Database models for accounts, roles and the course links that scope
verification officers and content staff.
"""

from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, Column, Float, ForeignKey, Integer, String, Table, Text
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.types import JSON

from admissions.core.database import Base
from admissions.modules.shared import BaseModel, enum_values

if TYPE_CHECKING:
    from admissions.modules.courses.models import Course
    from admissions.modules.payments.models import Payment


class UserRole(str, Enum):
    """User roles in the system."""

    STUDENT = "student"
    ADMIN = "admin"
    CONTENT_ADMIN = "content_admin"
    FACULTY = "faculty"
    VERIFICATION_ADMIN = "verification_admin"
    VERIFICATION_OFFICER = "verification_officer"


# Courses a user is attached to (officers are matched to courses through this)
user_courses = Table(
    "user_courses",
    Base.metadata,
    Column("user_id", String(36), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column(
        "course_id", String(36), ForeignKey("courses.id", ondelete="CASCADE"), primary_key=True
    ),
)


class User(BaseModel):
    """
    User model for authentication and authorization.

    One table for every role. Faculty profile fields and the student
    dashboard snapshot are nullable columns on the same row.
    """

    __tablename__ = "users"

    # Authentication fields
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        index=True,
        nullable=False,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)

    role: Mapped[UserRole] = mapped_column(
        SAEnum(UserRole, name="user_role", values_callable=enum_values),
        nullable=False,
        default=UserRole.STUDENT,
        index=True,
    )

    # Verification state (mirrored from application decisions)
    verified: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    verified_by_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    verification_comment: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Faculty profile
    department: Mapped[str | None] = mapped_column(String(200), nullable=True)
    contact: Mapped[str | None] = mapped_column(String(100), nullable=True)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Student profile
    profile_image: Mapped[str | None] = mapped_column(String(500), nullable=True)
    registration_number: Mapped[str | None] = mapped_column(String(50), nullable=True)
    phone_number: Mapped[str | None] = mapped_column(String(20), nullable=True)
    cgpa: Mapped[float] = mapped_column(Float, default=0, nullable=False)
    last_gpa: Mapped[float] = mapped_column(Float, default=0, nullable=False)
    semester: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    dashboard_data: Mapped[dict | None] = mapped_column(JSON, nullable=True)

    # Relationships
    verified_by: Mapped["User | None"] = relationship(
        "User",
        remote_side="User.id",
        lazy="selectin",
        join_depth=1,
    )
    courses: Mapped[list["Course"]] = relationship(
        "Course",
        secondary=user_courses,
        lazy="selectin",
    )
    payments: Mapped[list["Payment"]] = relationship(
        "Payment",
        back_populates="user",
        lazy="selectin",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, role={self.role.value})>"

    @property
    def course_ids(self) -> list[str]:
        return [course.id for course in self.courses]
