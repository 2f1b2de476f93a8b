"""initial schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19 09:00:00.000000

This migration creates:
1. users, courses and the user_courses link table
2. form_templates (one per course)
3. applications, unique per student and course
4. payments, unique per user and application
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

user_role = postgresql.ENUM(
    "student",
    "admin",
    "content_admin",
    "faculty",
    "verification_admin",
    "verification_officer",
    name="user_role",
    create_type=False,
)
program_type = postgresql.ENUM("UG", "PG", name="program_type", create_type=False)
application_status = postgresql.ENUM(
    "draft", "pending", "verified", "rejected", name="application_status", create_type=False
)
payment_status = postgresql.ENUM("pending", "completed", name="payment_status", create_type=False)

ENUMS = (user_role, program_type, application_status, payment_status)


def timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
    ]


def upgrade() -> None:
    """Create every table of the admissions schema."""
    bind = op.get_bind()
    # program_type is shared by three tables, so types are created once up front
    for enum_type in ENUMS:
        enum_type.create(bind, checkfirst=True)

    op.create_table(
        "users",
        sa.Column("id", sa.String(length=36), nullable=False),
        *timestamps(),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("password_hash", sa.Text(), nullable=False),
        sa.Column("role", user_role, nullable=False),
        sa.Column("verified", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("verified_by_id", sa.String(length=36), nullable=True),
        sa.Column("verification_comment", sa.Text(), nullable=True),
        # Faculty profile
        sa.Column("department", sa.String(length=200), nullable=True),
        sa.Column("contact", sa.String(length=100), nullable=True),
        sa.Column("bio", sa.Text(), nullable=True),
        # Student profile
        sa.Column("profile_image", sa.String(length=500), nullable=True),
        sa.Column("registration_number", sa.String(length=50), nullable=True),
        sa.Column("phone_number", sa.String(length=20), nullable=True),
        sa.Column("cgpa", sa.Float(), nullable=False, server_default="0"),
        sa.Column("last_gpa", sa.Float(), nullable=False, server_default="0"),
        sa.Column("semester", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("dashboard_data", sa.JSON(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["verified_by_id"], ["users.id"], ondelete="SET NULL"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_role", "users", ["role"])

    op.create_table(
        "courses",
        sa.Column("id", sa.String(length=36), nullable=False),
        *timestamps(),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("duration", sa.Integer(), nullable=False),
        sa.Column("details", sa.Text(), nullable=True),
        sa.Column("fee", sa.Float(), nullable=False),
        sa.Column("contact", sa.String(length=200), nullable=False),
        sa.Column("requirement", sa.Text(), nullable=False),
        sa.Column("subject_code", sa.String(length=50), nullable=False),
        sa.Column("assigned_to", sa.String(length=255), nullable=False),
        # Description maintained by the content admin
        sa.Column("program_description", sa.Text(), nullable=True),
        sa.Column("image1", sa.String(length=500), nullable=True),
        sa.Column("image2", sa.String(length=500), nullable=True),
        sa.Column("vision", sa.Text(), nullable=True),
        sa.Column("mission", sa.Text(), nullable=True),
        sa.Column("years_of_department", sa.Integer(), nullable=True),
        sa.Column("syllabus", sa.JSON(), nullable=True),
        sa.Column("program_educational_objectives", sa.JSON(), nullable=True),
        sa.Column("program_outcomes", sa.JSON(), nullable=True),
        sa.Column("program_type", program_type, nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_courses_subject_code", "courses", ["subject_code"])
    op.create_index("ix_courses_assigned_to", "courses", ["assigned_to"])

    op.create_table(
        "user_courses",
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("course_id", sa.String(length=36), nullable=False),
        sa.PrimaryKeyConstraint("user_id", "course_id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["course_id"], ["courses.id"], ondelete="CASCADE"),
    )

    op.create_table(
        "form_templates",
        sa.Column("id", sa.String(length=36), nullable=False),
        *timestamps(),
        sa.Column("course_id", sa.String(length=36), nullable=False),
        sa.Column("program_type", program_type, nullable=True),
        sa.Column("education_fields", sa.JSON(), nullable=False),
        sa.Column("sections", sa.JSON(), nullable=False),
        sa.Column("required_academic_fields", sa.JSON(), nullable=False),
        sa.Column("required_academic_subfields", sa.JSON(), nullable=False),
        sa.Column("required_documents", sa.JSON(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("course_id"),
        sa.ForeignKeyConstraint(["course_id"], ["courses.id"], ondelete="CASCADE"),
    )

    op.create_table(
        "applications",
        sa.Column("id", sa.String(length=36), nullable=False),
        *timestamps(),
        sa.Column("student_id", sa.String(length=36), nullable=True),
        sa.Column("course_id", sa.String(length=36), nullable=True),
        sa.Column("form_data", sa.JSON(), nullable=False),
        sa.Column("education_details", sa.JSON(), nullable=False),
        sa.Column("program_type", program_type, nullable=False),
        sa.Column("assigned_officer_id", sa.String(length=36), nullable=True),
        sa.Column("verified", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("verified_by_id", sa.String(length=36), nullable=True),
        sa.Column("status", application_status, nullable=False, server_default="draft"),
        sa.Column("last_active_section", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("field_comments", sa.JSON(), nullable=False),
        sa.Column("comments_read", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("student_id", "course_id", name="uq_application_student_course"),
        sa.ForeignKeyConstraint(["student_id"], ["users.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["course_id"], ["courses.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["assigned_officer_id"], ["users.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["verified_by_id"], ["users.id"], ondelete="SET NULL"),
    )
    op.create_index("ix_applications_student_id", "applications", ["student_id"])
    op.create_index("ix_applications_course_id", "applications", ["course_id"])
    op.create_index("ix_applications_assigned_officer_id", "applications", ["assigned_officer_id"])
    op.create_index("ix_applications_status", "applications", ["status"])

    op.create_table(
        "payments",
        sa.Column("id", sa.String(length=36), nullable=False),
        *timestamps(),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("application_id", sa.String(length=36), nullable=False),
        sa.Column("course_id", sa.String(length=36), nullable=True),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("course_name", sa.String(length=200), nullable=False),
        sa.Column("amount", sa.Float(), nullable=False),
        sa.Column("payment_method", sa.String(length=50), nullable=False),
        sa.Column("payment_date", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("last_date", sa.String(length=50), nullable=False),
        sa.Column("status", payment_status, nullable=False, server_default="completed"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "application_id", name="uq_payment_user_application"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["application_id"], ["applications.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["course_id"], ["courses.id"], ondelete="SET NULL"),
    )
    op.create_index("ix_payments_user_id", "payments", ["user_id"])
    op.create_index("ix_payments_application_id", "payments", ["application_id"])


def downgrade() -> None:
    """Drop every table and enum type."""
    op.drop_table("payments")
    op.drop_table("applications")
    op.drop_table("form_templates")
    op.drop_table("user_courses")
    op.drop_table("courses")
    op.drop_table("users")

    bind = op.get_bind()
    for enum_type in reversed(ENUMS):
        enum_type.drop(bind, checkfirst=True)
