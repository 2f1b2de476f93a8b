"""
Course Schemas

Pydantic schemas for catalog requests and responses.
"""

from datetime import datetime

from pydantic import ConfigDict, Field

from admissions.modules.courses.models import ProgramType
from admissions.modules.shared.schemas import CamelModel


class CourseCreate(CamelModel):
    """Request body for creating or replacing a course."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    duration: int = Field(..., gt=0)
    fee: float = Field(..., gt=0)
    requirement: str = Field(..., min_length=1)
    contact: str = Field(..., min_length=1, max_length=200)
    subject_code: str = Field(..., min_length=1, max_length=50)
    assigned_to: str = Field(..., min_length=1, max_length=255)
    details: str | None = None


class SyllabusEntry(CamelModel):
    semester: str = ""
    subjects: list[str] = Field(default_factory=list)


class CourseResponse(CamelModel):
    """A course as returned by the catalog."""

    id: str
    title: str
    description: str
    duration: int
    details: str | None = None
    fee: float
    contact: str
    requirement: str
    subject_code: str
    assigned_to: str
    program_description: str | None = None
    image1: str | None = None
    image2: str | None = None
    vision: str | None = None
    mission: str | None = None
    years_of_department: int | None = None
    syllabus: list[SyllabusEntry] | None = None
    program_educational_objectives: list[str] | None = None
    program_outcomes: list[str] | None = None
    program_type: ProgramType | None = None
    created_at: datetime
    updated_at: datetime


class CourseMutationResponse(CamelModel):
    message: str
    course: CourseResponse


class CourseDescriptionRequest(CamelModel):
    """Description fields a content admin maintains. All are required."""

    program_description: str = Field(..., min_length=1)
    image1: str = Field(..., min_length=1)
    image2: str = Field(..., min_length=1)
    vision: str = Field(..., min_length=1)
    mission: str = Field(..., min_length=1)
    years_of_department: int = Field(..., gt=0)
    syllabus: list[SyllabusEntry] = Field(..., min_length=1)
    program_educational_objectives: list[str] = Field(..., min_length=1)
    program_outcomes: list[str] = Field(..., min_length=1)
    program_type: ProgramType


class CourseDescriptionResponse(CamelModel):
    """Description view with empty defaults for unset fields."""

    title: str = ""
    description: str = ""
    program_description: str = ""
    image1: str = ""
    image2: str = ""
    vision: str = ""
    mission: str = ""
    years_of_department: int | None = None
    syllabus: list[SyllabusEntry] = Field(default_factory=lambda: [SyllabusEntry()])
    program_educational_objectives: list[str] = Field(default_factory=list)
    program_outcomes: list[str] = Field(default_factory=list)
    program_type: ProgramType | None = None


class VerifyCodeRequest(CamelModel):
    subject_code: str = Field(..., min_length=1)


class VerifyCodeResponse(CamelModel):
    course_id: str
