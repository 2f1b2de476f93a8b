"""
Submission Requirements

A form template resolves, per program type, into the concrete set of
things a submitted application must carry.
"""

from dataclasses import dataclass, field
from typing import Any

from admissions.core.errors import ValidationError
from admissions.modules.courses.models import ProgramType
from admissions.modules.forms.models import FormTemplate
from admissions.modules.forms.schemas import AcademicSubfields

# Subfield flags and the educationDetails keys they require
SUBFIELD_KEYS = ("percentage", "year_of_passing", "board", "school_name", "university", "college_name")


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


@dataclass(frozen=True)
class SubmissionRequirements:
    """What a submission must include for one course and program type."""

    program_type: ProgramType | None
    education_levels: tuple[str, ...] = ()
    documents: tuple[str, ...] = ()
    level_details: dict[str, tuple[str, ...]] = field(default_factory=dict)
    form_fields: tuple[str, ...] = ()


def resolve_requirements(template: FormTemplate) -> SubmissionRequirements:
    """
    Flatten a stored template into SubmissionRequirements.

    Args:
        template: The course's form template

    Returns:
        Requirements with required levels, per-level detail keys (camelCase,
        as sent by clients), required document types and required form fields
    """
    subfields = AcademicSubfields.model_validate(template.required_academic_subfields or {})
    levels = tuple(template.required_academic_fields or [])

    level_details: dict[str, tuple[str, ...]] = {}
    for level in levels:
        level_fields = getattr(subfields, level, None)
        if level_fields is None:
            continue
        keys = [_camel(key) for key in SUBFIELD_KEYS if getattr(level_fields, key, False)]
        keys.extend(custom.name for custom in level_fields.custom_fields if custom.required)
        level_details[level] = tuple(keys)

    form_fields = tuple(
        form_field["name"]
        for section in template.sections or []
        for form_field in section.get("fields", [])
        if form_field.get("required")
    )

    return SubmissionRequirements(
        program_type=template.program_type,
        education_levels=levels,
        documents=tuple(template.required_documents or []),
        level_details=level_details,
        form_fields=form_fields,
    )


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip()) or value in ({}, [])


def check_submission(
    requirements: SubmissionRequirements,
    program_type: ProgramType,
    form_data: dict[str, Any],
    education_details: dict[str, Any],
    declared_document_types: list[str],
) -> None:
    """
    Verify a submission satisfies its course requirements.

    Raises:
        ValidationError: Listing every missing field, level or document
    """
    if requirements.program_type and requirements.program_type != program_type:
        raise ValidationError(
            f"Program type must be {requirements.program_type.value} for this course",
            fields=["programType"],
        )

    missing: list[str] = []

    for name in requirements.form_fields:
        if _is_blank(form_data.get(name)):
            missing.append(f"formData.{name}")

    for level in requirements.education_levels:
        details = education_details.get(level)
        if _is_blank(details):
            missing.append(f"educationDetails.{level}")
            continue
        if not isinstance(details, dict):
            continue
        for key in requirements.level_details.get(level, ()):
            if _is_blank(details.get(key)):
                missing.append(f"educationDetails.{level}.{key}")

    declared = set(declared_document_types)
    for document_type in requirements.documents:
        if document_type not in declared:
            missing.append(f"documents.{document_type}")

    if missing:
        raise ValidationError("Application is missing required information", fields=missing)
