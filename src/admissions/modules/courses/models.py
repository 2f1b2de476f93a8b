"""
Course Models

The course catalog. Each course is owned by one content admin
(``assigned_to`` holds that admin's email).
"""

import enum

from sqlalchemy import Enum, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import JSON

from admissions.modules.shared import BaseModel, enum_values


class ProgramType(str, enum.Enum):
    """Undergraduate or postgraduate program."""

    UG = "UG"
    PG = "PG"


class Course(BaseModel):
    """A course students can apply to."""

    __tablename__ = "courses"

    # Catalog fields (required on creation)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    duration: Mapped[int] = mapped_column(Integer, nullable=False)
    details: Mapped[str | None] = mapped_column(Text, nullable=True)
    fee: Mapped[float] = mapped_column(Float, nullable=False)
    contact: Mapped[str] = mapped_column(String(200), nullable=False)
    requirement: Mapped[str] = mapped_column(Text, nullable=False)
    subject_code: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    assigned_to: Mapped[str] = mapped_column(String(255), nullable=False, index=True)

    # Description maintained by the assigned content admin
    program_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    image1: Mapped[str | None] = mapped_column(String(500), nullable=True)
    image2: Mapped[str | None] = mapped_column(String(500), nullable=True)
    vision: Mapped[str | None] = mapped_column(Text, nullable=True)
    mission: Mapped[str | None] = mapped_column(Text, nullable=True)
    years_of_department: Mapped[int | None] = mapped_column(Integer, nullable=True)
    syllabus: Mapped[list | None] = mapped_column(JSON, nullable=True)
    program_educational_objectives: Mapped[list | None] = mapped_column(JSON, nullable=True)
    program_outcomes: Mapped[list | None] = mapped_column(JSON, nullable=True)
    program_type: Mapped[ProgramType | None] = mapped_column(
        Enum(ProgramType, name="program_type", values_callable=enum_values),
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<Course(id={self.id}, title={self.title}, code={self.subject_code})>"
