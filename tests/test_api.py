"""
Request-level checks of the error envelope and capability guards.

None of these requests reach the database: each one is rejected by
authentication, authorization or body validation first.
"""

import json
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest
import pytest_asyncio

from admissions.core import rate_limit
from admissions.core.config import settings
from admissions.core.database import get_db
from admissions.core.security import create_access_token
from admissions.main import app
from admissions.modules.users.models import UserRole


def bearer(role: UserRole) -> dict[str, str]:
    token = create_access_token(
        subject="user-1",
        additional_claims={"email": f"{role.value}@example.com", "role": role.value},
    )
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def client(monkeypatch):
    monkeypatch.setattr(rate_limit.redis_module, "get_redis", lambda: None)
    rate_limit._memory_store.clear()
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


@pytest.mark.asyncio
async def test_missing_token(client):
    response = await client.get("/api/courses")

    assert response.status_code == 401
    assert response.json()["error"] == "AUTHENTICATION_FAILED"
    assert response.headers["www-authenticate"] == "Bearer"


@pytest.mark.asyncio
async def test_garbage_token(client):
    response = await client.get("/api/courses", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "method,path,role",
    [
        ("GET", "/api/users", UserRole.STUDENT),
        ("GET", "/api/applications", UserRole.VERIFICATION_OFFICER),
        ("POST", "/api/verification-admin/courses/c-1/assign-officers", UserRole.CONTENT_ADMIN),
        ("GET", "/api/verification-officer/assigned-students", UserRole.ADMIN),
        ("GET", "/api/payments/applied-courses", UserRole.FACULTY),
        ("GET", "/api/student/dashboard", UserRole.FACULTY),
        ("GET", "/api/faculty/students", UserRole.STUDENT),
    ],
)
async def test_capability_guard(client, method, path, role):
    response = await client.request(method, path, headers=bearer(role), json={"batchSize": 1})

    assert response.status_code == 403
    assert response.json() == {
        "message": "Access denied: insufficient permissions.",
        "error": "FORBIDDEN",
    }


@pytest.mark.asyncio
async def test_body_validation_envelope(client):
    response = await client.post("/login", json={"email": "not-an-email"})

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "VALIDATION_ERROR"
    assert "email" in body["fields"]
    assert "password" in body["fields"]


@pytest.mark.asyncio
async def test_ready_reports_redis_state(client):
    response = await client.get("/ready")

    assert response.status_code == 200
    assert response.json() == {"status": "ready", "redis": "unavailable"}


@pytest.mark.asyncio
@pytest.mark.parametrize("extra", [1, 3])
async def test_too_many_files_is_an_upload_error(client, extra):
    files = [
        ("documents", (f"{i}.pdf", b"%PDF-1.4", "application/pdf"))
        for i in range(settings.max_upload_files + extra)
    ]
    data = {"courseId": "course-1", "formData": json.dumps({}), "programType": "UG"}
    context = AsyncMock(return_value=(MagicMock(id="user-1"), MagicMock(id="course-1"), None))
    app.dependency_overrides[get_db] = lambda: AsyncMock()
    try:
        with patch("admissions.modules.applications.service._load_context", context):
            response = await client.post(
                "/api/applications/save-draft",
                headers=bearer(UserRole.STUDENT),
                data=data,
                files=files,
            )
    finally:
        app.dependency_overrides.pop(get_db, None)

    assert response.status_code == 400
    assert response.json() == {
        "message": f"Too many files. Maximum {settings.max_upload_files} per submission",
        "error": "UPLOAD_REJECTED",
    }
