"""
Object factories shared by the test suite.
"""

import io
from uuid import uuid4

from starlette.datastructures import Headers, UploadFile

from admissions.core.auth import CurrentUser
from admissions.modules.users.models import UserRole


def make_caller(role: UserRole, **overrides) -> CurrentUser:
    fields = {
        "id": str(uuid4()),
        "email": f"{role.value}@test.com",
        "role": role.value,
        "name": role.value.replace("_", " ").title(),
    }
    fields.update(overrides)
    return CurrentUser(**fields)


def make_upload(
    filename: str = "scan.pdf",
    content_type: str = "application/pdf",
    content: bytes = b"%PDF-1.4 test",
) -> UploadFile:
    return UploadFile(
        file=io.BytesIO(content),
        filename=filename,
        size=len(content),
        headers=Headers({"content-type": content_type}),
    )
