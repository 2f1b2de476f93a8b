"""
Unit tests for upload validation and storage.
"""

import pytest

from admissions.core import storage
from admissions.core.config import settings
from admissions.core.errors import NotFoundError, UploadError, ValidationError

from tests.factories import make_upload


@pytest.fixture
def upload_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "upload_dir", str(tmp_path))
    return tmp_path


class TestValidateUpload:
    @pytest.mark.parametrize(
        "filename,content_type",
        [("scan.pdf", "application/pdf"), ("photo.JPG", "image/jpeg"), ("id.png", "image/png")],
    )
    def test_accepts_allowed_types(self, filename, content_type):
        storage.validate_upload(make_upload(filename, content_type))

    def test_rejects_disallowed_extension(self):
        with pytest.raises(UploadError, match="JPEG, PNG, and PDF"):
            storage.validate_upload(make_upload("script.exe", "application/pdf"))

    def test_rejects_mismatched_mime_type(self):
        with pytest.raises(UploadError):
            storage.validate_upload(make_upload("scan.pdf", "text/html"))

    def test_rejects_oversized_file(self):
        upload = make_upload("scan.pdf", "application/pdf")
        upload.size = settings.max_upload_size_bytes + 1
        with pytest.raises(UploadError, match="limit"):
            storage.validate_upload(upload)

    def test_rejects_too_many_files(self):
        files = [make_upload(f"{i}.pdf", "application/pdf") for i in range(settings.max_upload_files + 1)]
        with pytest.raises(UploadError, match="Too many files"):
            storage.validate_uploads(files)


class TestSaveAndResolve:
    @pytest.mark.asyncio
    async def test_save_writes_under_area(self, upload_dir):
        stored = await storage.save_upload(make_upload("scan.pdf", "application/pdf", b"abc"), "applications")

        assert stored.filename.startswith("documents-")
        assert stored.filename.endswith(".pdf")
        assert stored.original_name == "scan.pdf"
        assert stored.size == 3
        assert (upload_dir / "applications" / stored.filename).read_bytes() == b"abc"

    @pytest.mark.asyncio
    async def test_resolve_returns_stored_file(self, upload_dir):
        stored = await storage.save_upload(make_upload("scan.pdf", "application/pdf"), "applications")

        path = storage.resolve_download_path("applications", stored.filename)
        assert path.name == stored.filename

    @pytest.mark.parametrize("filename", ["../secrets.txt", "..", "a/b.pdf"])
    def test_resolve_rejects_traversal(self, upload_dir, filename):
        with pytest.raises(ValidationError):
            storage.resolve_download_path("applications", filename)

    def test_resolve_missing_file(self, upload_dir):
        with pytest.raises(NotFoundError):
            storage.resolve_download_path("applications", "documents-1-2.pdf")

    @pytest.mark.asyncio
    async def test_delete_ignores_missing_files(self, upload_dir):
        stored = await storage.save_upload(make_upload("scan.pdf", "application/pdf"), "applications")

        await storage.delete_stored([stored.path, str(upload_dir / "gone.pdf")])
        assert not (upload_dir / "applications" / stored.filename).exists()
