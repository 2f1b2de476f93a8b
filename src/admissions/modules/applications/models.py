"""
Application Models

A student's application for one course and the status it moves through:
draft -> pending -> verified / rejected.
"""

import enum
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, Enum, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.types import JSON

from admissions.modules.courses.models import Course, ProgramType
from admissions.modules.shared import BaseModel, enum_values
from admissions.modules.users.models import User

if TYPE_CHECKING:
    from admissions.modules.payments.models import Payment


class ApplicationStatus(str, enum.Enum):
    """Lifecycle status of an application."""

    DRAFT = "draft"
    PENDING = "pending"
    VERIFIED = "verified"
    REJECTED = "rejected"


class Application(BaseModel):
    """
    Course application.

    ``form_data`` holds the applicant's answers plus ``documents`` (stored
    file descriptors) and the officer's ``verificationComments`` and
    ``verificationStatus``. Student and course links are nulled rather than
    cascaded so orphaned applications stay visible to administrators.
    """

    __tablename__ = "applications"
    __table_args__ = (UniqueConstraint("student_id", "course_id", name="uq_application_student_course"),)

    student_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    course_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("courses.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    form_data: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    education_details: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    program_type: Mapped[ProgramType] = mapped_column(
        Enum(ProgramType, name="program_type", values_callable=enum_values),
        nullable=False,
    )

    # Review
    assigned_officer_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    verified: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    verified_by_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    status: Mapped[ApplicationStatus] = mapped_column(
        Enum(ApplicationStatus, name="application_status", values_callable=enum_values),
        nullable=False,
        default=ApplicationStatus.DRAFT,
        index=True,
    )
    last_active_section: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    # Officer feedback, keyed by field name (document_<n> for documents)
    field_comments: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    comments_read: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    # Relationships
    student: Mapped[User | None] = relationship(
        User, foreign_keys=[student_id], lazy="selectin"
    )
    course: Mapped[Course | None] = relationship(Course, lazy="selectin")
    assigned_officer: Mapped[User | None] = relationship(
        User, foreign_keys=[assigned_officer_id], lazy="selectin"
    )
    verified_by: Mapped[User | None] = relationship(
        User, foreign_keys=[verified_by_id], lazy="selectin"
    )
    payments: Mapped[list["Payment"]] = relationship(
        "Payment",
        back_populates="application",
        lazy="selectin",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Application(id={self.id}, status={self.status.value})>"

    @property
    def documents(self) -> list[dict]:
        return list((self.form_data or {}).get("documents") or [])

    @property
    def verification_comments(self) -> str:
        return (self.form_data or {}).get("verificationComments") or ""
