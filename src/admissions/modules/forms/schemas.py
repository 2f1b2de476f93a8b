"""
Form Template Schemas

Typed structure of a course's application form.
"""

import enum
from typing import Literal

from pydantic import Field

from admissions.modules.courses.models import ProgramType
from admissions.modules.shared.schemas import CamelModel

AcademicLevel = Literal["tenth", "twelth", "graduation", "postgraduate"]


class DocumentType(str, enum.Enum):
    """Document types a template may require."""

    TENTH_MARKSHEET = "10th Marksheet"
    TWELFTH_MARKSHEET = "12th Marksheet"
    GRADUATION_MARKSHEET = "Graduation Marksheet"
    POSTGRADUATE_MARKSHEET = "Postgraduate Marksheet"
    AADHAAR = "Aadhaar"
    PAN = "PAN"
    DRIVING_LICENSE = "Driving License"
    PASSPORT_PHOTO = "Image (Passport Photo)"
    SIGNATURE = "Signature"


class EducationFields(CamelModel):
    tenth: bool = False
    twelth: bool = False
    ug: bool = False
    pg: bool = False


class FormField(CamelModel):
    name: str = Field(..., min_length=1)
    type: Literal["text", "number", "date"]
    required: bool = False


class FormSection(CamelModel):
    name: str = Field(..., min_length=1)
    fields: list[FormField] = Field(default_factory=list)


class CustomField(CamelModel):
    name: str = Field(..., min_length=1)
    label: str = Field(..., min_length=1)
    type: Literal["text", "number", "date", "dropdown"]
    required: bool = False
    options: list[str] = Field(default_factory=list)


class SchoolSubfields(CamelModel):
    """Required details for 10th / 12th."""

    percentage: bool = False
    year_of_passing: bool = False
    board: bool = False
    school_name: bool = False
    custom_fields: list[CustomField] = Field(default_factory=list)


class DegreeSubfields(CamelModel):
    """Required details for graduation / postgraduate."""

    percentage: bool = False
    year_of_passing: bool = False
    university: bool = False
    college_name: bool = False
    custom_fields: list[CustomField] = Field(default_factory=list)


class AcademicSubfields(CamelModel):
    tenth: SchoolSubfields = Field(default_factory=SchoolSubfields)
    twelth: SchoolSubfields = Field(default_factory=SchoolSubfields)
    graduation: DegreeSubfields = Field(default_factory=DegreeSubfields)
    postgraduate: DegreeSubfields = Field(default_factory=DegreeSubfields)


class FormStructureRequest(CamelModel):
    """
    Request body for POST /api/forms/save-form-structure.

    Omitted sections keep their stored value when updating.
    """

    course_id: str = Field(..., min_length=1)
    program_type: ProgramType | None = None
    education_fields: EducationFields | None = None
    sections: list[FormSection] | None = None
    required_academic_fields: list[AcademicLevel] | None = None
    required_academic_subfields: AcademicSubfields | None = None
    required_documents: list[DocumentType] | None = None


class FormStructureResponse(CamelModel):
    """Full template with defaults filled in."""

    program_type: ProgramType | None = None
    education_fields: EducationFields = Field(default_factory=EducationFields)
    sections: list[FormSection] = Field(default_factory=list)
    required_academic_fields: list[AcademicLevel] = Field(default_factory=list)
    required_academic_subfields: AcademicSubfields = Field(default_factory=AcademicSubfields)
    required_documents: list[DocumentType] = Field(default_factory=list)


class SaveFormStructureResponse(CamelModel):
    message: str
    course_id: str
    form: FormStructureResponse
