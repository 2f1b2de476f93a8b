"""
Application Helpers

Parsing and validation of multipart application submissions, shared by
the draft and submit flows.
"""

import json
import re
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError as PydanticValidationError
from starlette.datastructures import FormData, UploadFile
from starlette.exceptions import HTTPException
from starlette.requests import Request

from admissions.core.config import settings
from admissions.core.errors import UploadError, ValidationError
from admissions.core.storage import StoredFile
from admissions.modules.applications.schemas import DeclaredDocument, DocumentDescriptor, FormDataPayload
from admissions.modules.courses.models import ProgramType

AADHAAR_PATTERN = re.compile(r"^\d{12}$")
EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")

DOCUMENTS_FIELD = "documents"
KEYED_DOCUMENT_FIELD = re.compile(r"^documents\[(?P<key>[^\[\]]+)\]$")


@dataclass
class UploadSet:
    """
    Files from one multipart request.

    Unkeyed files (field ``documents``) pair with declared documents by
    position; keyed files (field ``documents[<key>]``) pair by key.
    """

    positional: list[UploadFile] = field(default_factory=list)
    keyed: dict[str, UploadFile] = field(default_factory=dict)

    @property
    def files(self) -> list[UploadFile]:
        return self.positional + list(self.keyed.values())

    def __len__(self) -> int:
        return len(self.positional) + len(self.keyed)


@dataclass
class Submission:
    """A parsed draft or submit request."""

    course_id: str
    form_data: dict[str, Any]
    education_details: dict[str, Any]
    program_type: ProgramType
    uploads: UploadSet
    last_active_section: int = 0
    student_id: str | None = None


def parse_json_object(raw: Any, field_name: str, label: str) -> dict[str, Any]:
    """
    Decode a JSON-object form field.

    Raises:
        ValidationError: If the value is not a JSON object
    """
    if isinstance(raw, dict):
        return raw
    try:
        value = json.loads(raw) if isinstance(raw, str | bytes) else None
    except json.JSONDecodeError:
        value = None
    if not isinstance(value, dict):
        raise ValidationError(f"{label} must be a valid JSON object", fields=[field_name])
    return value


@asynccontextmanager
async def read_multipart(request: Request) -> AsyncIterator[FormData]:
    """
    Parse a multipart body, closing its files on exit.

    One file over the limit is let through so the count check in
    validate_uploads reports it.

    Raises:
        UploadError: If the body cannot be parsed or holds far too many files
    """
    try:
        form = await request.form(max_files=settings.max_upload_files + 1)
    except HTTPException as e:
        if str(e.detail).startswith("Too many files"):
            raise UploadError(
                f"Too many files. Maximum {settings.max_upload_files} per submission"
            ) from e
        raise UploadError(str(e.detail)) from e
    try:
        yield form
    finally:
        await form.close()


def collect_uploads(form: FormData) -> UploadSet:
    """
    Gather uploaded files from a parsed multipart form.

    Raises:
        ValidationError: If keyed and unkeyed files are mixed, or a key repeats
    """
    uploads = UploadSet()
    for name, value in form.multi_items():
        if not isinstance(value, UploadFile):
            continue
        if name == DOCUMENTS_FIELD:
            uploads.positional.append(value)
            continue
        match = KEYED_DOCUMENT_FIELD.match(name)
        if not match:
            continue
        key = match.group("key")
        if key in uploads.keyed:
            raise ValidationError(f"Duplicate upload for document key '{key}'", fields=[name])
        uploads.keyed[key] = value

    if uploads.positional and uploads.keyed:
        raise ValidationError(
            "Upload documents either all keyed (documents[<key>]) or all unkeyed (documents)",
            fields=[DOCUMENTS_FIELD],
        )
    return uploads


def parse_submission(form: FormData, *, draft: bool) -> Submission:
    """
    Turn a multipart application request into a Submission.

    Raises:
        ValidationError: On missing or malformed fields
    """
    course_id = str(form.get("courseId") or "").strip()
    if not course_id:
        raise ValidationError("Course ID is required", fields=["courseId"])

    form_data = parse_json_object(form.get("formData"), "formData", "Form data")
    education_details = parse_json_object(
        form.get("educationDetails"), "educationDetails", "Education details"
    )

    try:
        program_type = ProgramType(str(form.get("programType") or ""))
    except ValueError as e:
        raise ValidationError("Program type must be UG or PG", fields=["programType"]) from e

    last_active_section = 0
    if draft:
        raw_section = form.get("lastActiveSection", "0")
        try:
            last_active_section = int(str(raw_section))
        except ValueError:
            last_active_section = -1
        if last_active_section < 0:
            raise ValidationError(
                "Last active section must be a non-negative integer",
                fields=["lastActiveSection"],
            )

    student_id = form.get("studentId")
    return Submission(
        course_id=course_id,
        form_data=form_data,
        education_details=education_details,
        program_type=program_type,
        uploads=collect_uploads(form),
        last_active_section=last_active_section,
        student_id=str(student_id) if student_id else None,
    )


def declared_documents(form_data: dict[str, Any]) -> list[DeclaredDocument] | None:
    """
    Typed view of formData.documents (None when absent or not a list).

    Raises:
        ValidationError: If an entry is not an object
    """
    try:
        payload = FormDataPayload.model_validate(form_data)
    except PydanticValidationError as e:
        raise ValidationError(
            "Documents array is missing or invalid", fields=["formData.documents"]
        ) from e
    return payload.documents


def validate_identity_fields(form_data: dict[str, Any]) -> None:
    """
    Submission-only checks on the applicant's identity fields.

    Raises:
        ValidationError: If the Aadhaar number or email is invalid
    """
    aadhaar = form_data.get("aadhaarNumber")
    if isinstance(aadhaar, int) and not isinstance(aadhaar, bool):
        aadhaar = str(aadhaar)
    if not isinstance(aadhaar, str) or not AADHAAR_PATTERN.match(aadhaar):
        raise ValidationError(
            "Valid 12-digit Aadhaar number is required", fields=["formData.aadhaarNumber"]
        )

    email = form_data.get("email")
    if not isinstance(email, str) or not EMAIL_PATTERN.search(email):
        raise ValidationError("Valid email is required", fields=["formData.email"])


def pair_documents(
    declared: list[DeclaredDocument],
    uploads: UploadSet,
) -> list[tuple[DeclaredDocument, UploadFile]]:
    """
    Match each uploaded file to the document it was declared as.

    Args:
        declared: Entries of formData.documents
        uploads: Files from the request

    Returns:
        (declared document, file) pairs in declaration order for keyed
        uploads, upload order for positional ones

    Raises:
        ValidationError: If a file has no declared document with a type
    """
    pairs: list[tuple[DeclaredDocument, UploadFile]] = []

    for index, upload in enumerate(uploads.positional):
        document = declared[index] if index < len(declared) else None
        if document is None or not document.type:
            raise ValidationError(
                f"Document type missing for file at index {index}",
                fields=[f"formData.documents[{index}].type"],
            )
        pairs.append((document, upload))

    if uploads.keyed:
        by_key = {doc.pairing_key: doc for doc in declared if doc.pairing_key}
        for key, upload in uploads.keyed.items():
            document = by_key.get(key)
            if document is None or not document.type:
                raise ValidationError(
                    f"Document type missing for file with key '{key}'",
                    fields=[f"documents[{key}]"],
                )
            pairs.append((document, upload))
        order = {id(doc): i for i, doc in enumerate(declared)}
        pairs.sort(key=lambda pair: order[id(pair[0])])

    return pairs


def build_descriptor(document: DeclaredDocument, stored: StoredFile) -> dict[str, Any]:
    """Stored document descriptor as kept in formData.documents."""
    descriptor = DocumentDescriptor(
        type=document.type,
        key=document.key,
        filename=stored.filename,
        path=stored.path,
        original_name=stored.original_name,
        mimetype=stored.mimetype,
        size=stored.size,
    )
    return descriptor.model_dump(by_alias=True, exclude_none=True)


def descriptor_paths(form_data: dict[str, Any] | None) -> list[str]:
    """Paths of stored documents referenced by formData."""
    documents = (form_data or {}).get("documents") or []
    return [doc["path"] for doc in documents if isinstance(doc, dict) and doc.get("path")]
