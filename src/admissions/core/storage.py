"""
Upload Storage

Validation and disk storage for uploaded documents. Files live under
``UPLOAD_DIR/<area>/`` and are served back only through authenticated
download endpoints.
"""

import asyncio
import logging
import os
import secrets
import time
from dataclasses import dataclass
from pathlib import Path

from fastapi import UploadFile

from admissions.core.config import settings
from admissions.core.errors import NotFoundError, UploadError, ValidationError

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {".jpeg", ".jpg", ".png", ".pdf"}
ALLOWED_MIME_TYPES = {"image/jpeg", "image/jpg", "image/png", "application/pdf"}


@dataclass
class StoredFile:
    """A document written to disk."""

    filename: str
    path: str
    original_name: str
    mimetype: str
    size: int


def area_dir(area: str) -> Path:
    return Path(settings.upload_dir) / area


def validate_upload(file: UploadFile) -> None:
    """
    Check an upload's type and declared size.

    Raises:
        UploadError: If the extension or mime type is not allowed, or the file is too large
    """
    original_name = file.filename or ""
    extension = os.path.splitext(original_name)[1].lower()
    mimetype = (file.content_type or "").lower()

    if extension not in ALLOWED_EXTENSIONS or mimetype not in ALLOWED_MIME_TYPES:
        raise UploadError("Only JPEG, PNG, and PDF files are allowed")

    if file.size is not None and file.size > settings.max_upload_size_bytes:
        raise UploadError(
            f"File {original_name} exceeds the {settings.max_upload_size_mb}MB limit"
        )


def validate_uploads(files: list[UploadFile]) -> None:
    """
    Validate a whole submission before anything is stored.

    Raises:
        UploadError: On too many files or any rejected file
    """
    if len(files) > settings.max_upload_files:
        raise UploadError(f"Too many files. Maximum {settings.max_upload_files} per submission")
    for file in files:
        validate_upload(file)


def _write_file(target: Path, content: bytes) -> None:
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(content)


def _generate_filename(field: str, original_name: str) -> str:
    extension = os.path.splitext(original_name)[1].lower()
    return f"{field}-{int(time.time() * 1000)}-{secrets.randbelow(10**9)}{extension}"


async def save_upload(file: UploadFile, area: str, field: str = "documents") -> StoredFile:
    """
    Write an upload to ``UPLOAD_DIR/<area>/`` under a generated name.

    Args:
        file: The validated upload
        area: Feature area directory (e.g. "applications")
        field: Prefix for the generated filename

    Returns:
        StoredFile describing what was written

    Raises:
        UploadError: If the actual content exceeds the size limit
    """
    content = await file.read()
    if len(content) > settings.max_upload_size_bytes:
        raise UploadError(
            f"File {file.filename} exceeds the {settings.max_upload_size_mb}MB limit"
        )

    filename = _generate_filename(field, file.filename or "")
    target = area_dir(area) / filename
    await asyncio.to_thread(_write_file, target, content)

    logger.info(f"Stored upload {file.filename} as {target} ({len(content)} bytes)")
    return StoredFile(
        filename=filename,
        path=str(target),
        original_name=file.filename or filename,
        mimetype=file.content_type or "",
        size=len(content),
    )


def _unlink(path: str) -> None:
    Path(path).unlink(missing_ok=True)


async def delete_stored(paths: list[str]) -> None:
    """Remove stored files; missing files are ignored."""
    for path in paths:
        try:
            await asyncio.to_thread(_unlink, path)
        except OSError as e:
            logger.error(f"Failed to delete stored file {path}: {e}")


def resolve_download_path(area: str, filename: str) -> Path:
    """
    Map a requested filename to a stored file inside ``area``.

    Raises:
        ValidationError: If the name tries to escape the area directory
        NotFoundError: If no such file is stored
    """
    base = area_dir(area).resolve()
    if not filename or Path(filename).name != filename or filename in {".", ".."}:
        logger.warning(f"Rejected download path: {filename!r}")
        raise ValidationError("Invalid file name", fields=["filename"])

    target = (base / filename).resolve()
    if target.parent != base:
        logger.warning(f"Rejected download path: {filename!r}")
        raise ValidationError("Invalid file name", fields=["filename"])

    if not target.is_file():
        raise NotFoundError("File")
    return target
