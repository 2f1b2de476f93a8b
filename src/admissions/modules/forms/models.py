"""
Form Template Models

One template per course describing which education levels, documents
and custom fields an application must carry.
"""

from sqlalchemy import Enum, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import JSON

from admissions.modules.courses.models import ProgramType
from admissions.modules.shared import BaseModel, enum_values


class FormTemplate(BaseModel):
    """Admin-defined application form for a course."""

    __tablename__ = "form_templates"

    course_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("courses.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    program_type: Mapped[ProgramType | None] = mapped_column(
        Enum(ProgramType, name="program_type", values_callable=enum_values),
        nullable=True,
    )
    education_fields: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    sections: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    required_academic_fields: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    required_academic_subfields: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    required_documents: Mapped[list] = mapped_column(JSON, nullable=False, default=list)

    def __repr__(self) -> str:
        return f"<FormTemplate(course_id={self.course_id}, program_type={self.program_type})>"
