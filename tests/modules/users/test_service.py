"""
Unit tests for staff account management.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from admissions.core.errors import ConflictError, ForbiddenError, NotFoundError, ValidationError
from admissions.modules.users.models import UserRole
from admissions.modules.users.schemas import CreateUserRequest
from admissions.modules.users.service import (
    OFFICER_CREATABLE_ROLES,
    STAFF_CREATABLE_ROLES,
    create_user,
    creatable_roles,
    get_user,
)

from tests.factories import make_caller

SERVICE = "admissions.modules.users.service"


def officer_request(**overrides) -> CreateUserRequest:
    fields = {
        "name": "New Officer",
        "email": "officer.new@example.com",
        "password": "pw",
        "role": UserRole.VERIFICATION_OFFICER,
        "course_id": "course-1",
    }
    fields.update(overrides)
    return CreateUserRequest(**fields)


class TestCreatableRoles:
    def test_admin(self, admin_caller):
        assert creatable_roles(admin_caller) == STAFF_CREATABLE_ROLES
        assert UserRole.VERIFICATION_OFFICER not in STAFF_CREATABLE_ROLES

    def test_verification_admin(self, verification_admin_caller):
        assert creatable_roles(verification_admin_caller) == OFFICER_CREATABLE_ROLES

    @pytest.mark.parametrize("role", [UserRole.STUDENT, UserRole.FACULTY, UserRole.CONTENT_ADMIN])
    def test_others_forbidden(self, role):
        with pytest.raises(ForbiddenError):
            creatable_roles(make_caller(role))


class TestCreateUser:
    @pytest.mark.asyncio
    async def test_verification_admin_creates_officer(
        self, mock_db, verification_admin_caller, sample_course
    ):
        created = MagicMock(id="u-1", email="officer.new@example.com")
        created.name = "New Officer"
        with (
            patch(f"{SERVICE}.UserRepository") as repo,
            patch(f"{SERVICE}.course_repository") as courses,
            patch(f"{SERVICE}.send_account_created_email", new_callable=AsyncMock) as send,
        ):
            repo.email_exists = AsyncMock(return_value=False)
            repo.create = AsyncMock(return_value=created)
            courses.get_by_id = AsyncMock(return_value=sample_course)

            user = await create_user(mock_db, verification_admin_caller, officer_request())

        assert user is created
        assert repo.create.call_args.kwargs["courses"] == [sample_course]
        mock_db.commit.assert_called_once()
        send.assert_called_once_with(
            "officer.new@example.com",
            "New Officer",
            "verification_officer",
            course_title=sample_course.title,
        )

    @pytest.mark.asyncio
    async def test_role_outside_creator_scope(self, mock_db, verification_admin_caller):
        with pytest.raises(ValidationError) as exc_info:
            await create_user(
                mock_db, verification_admin_caller, officer_request(role=UserRole.ADMIN)
            )
        assert exc_info.value.fields == ["role"]

    @pytest.mark.asyncio
    async def test_admin_cannot_create_officer(self, mock_db, admin_caller):
        with pytest.raises(ValidationError):
            await create_user(mock_db, admin_caller, officer_request())

    @pytest.mark.asyncio
    async def test_officer_requires_course(self, mock_db, verification_admin_caller):
        with patch(f"{SERVICE}.UserRepository") as repo:
            repo.email_exists = AsyncMock(return_value=False)
            with pytest.raises(ValidationError) as exc_info:
                await create_user(mock_db, verification_admin_caller, officer_request(course_id=None))
        assert exc_info.value.fields == ["courseId"]

    @pytest.mark.asyncio
    async def test_unknown_course(self, mock_db, verification_admin_caller):
        with (
            patch(f"{SERVICE}.UserRepository") as repo,
            patch(f"{SERVICE}.course_repository") as courses,
        ):
            repo.email_exists = AsyncMock(return_value=False)
            courses.get_by_id = AsyncMock(return_value=None)
            with pytest.raises(NotFoundError, match="Course"):
                await create_user(mock_db, verification_admin_caller, officer_request())
        mock_db.commit.assert_not_called()

    @pytest.mark.asyncio
    async def test_duplicate_email(self, mock_db, admin_caller):
        request = officer_request(role=UserRole.FACULTY, course_id=None)
        with patch(f"{SERVICE}.UserRepository") as repo:
            repo.email_exists = AsyncMock(return_value=True)
            with pytest.raises(ConflictError, match="already registered"):
                await create_user(mock_db, admin_caller, request)


class TestGetUser:
    @pytest.mark.asyncio
    async def test_self_lookup(self, mock_db, student_caller, sample_student):
        with patch(f"{SERVICE}.UserRepository") as repo:
            repo.get_by_id = AsyncMock(return_value=sample_student)
            assert await get_user(mock_db, student_caller, student_caller.id) is sample_student

    @pytest.mark.asyncio
    async def test_other_user_forbidden(self, mock_db, student_caller):
        with pytest.raises(ForbiddenError, match="Access denied"):
            await get_user(mock_db, student_caller, "someone-else")

    @pytest.mark.asyncio
    async def test_admin_reads_anyone(self, mock_db, admin_caller, sample_student):
        with patch(f"{SERVICE}.UserRepository") as repo:
            repo.get_by_id = AsyncMock(return_value=sample_student)
            assert await get_user(mock_db, admin_caller, sample_student.id) is sample_student
