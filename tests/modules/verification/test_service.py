"""
Unit tests for the verification service.

These tests cover:
- Decisions: assigned-officer rule, payment requirement, mirrored user fields
- Comment saving without status changes
- Batch and single assignment by verification admins
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from admissions.core.errors import (
    ForbiddenError,
    InvalidStatusTransitionError,
    NotFoundError,
    PaymentRequiredError,
    ValidationError,
)
from admissions.modules.applications.models import ApplicationStatus
from admissions.modules.applications.repository import ensure_transition
from admissions.modules.payments.models import PaymentStatus
from admissions.modules.users.models import UserRole
from admissions.modules.verification.schemas import CommentsRequest, DecisionRequest
from admissions.modules.verification.service import (
    assign_student,
    batch_assign_officers,
    decide,
    save_comments,
)

from tests.factories import make_caller

SERVICE = "admissions.modules.verification.service"


@pytest.fixture
def assigned_application(sample_application, sample_officer):
    sample_application.assigned_officer_id = sample_officer.id
    sample_application.assigned_officer = sample_officer
    return sample_application


@pytest.fixture
def collaborators(assigned_application):
    async def update_fields(db, application, **fields):
        for key, value in fields.items():
            setattr(application, key, value)
        return application

    with (
        patch(f"{SERVICE}.application_repository") as apps,
        patch(f"{SERVICE}.payment_repository") as payments,
        patch(f"{SERVICE}.UserRepository") as users,
        patch(f"{SERVICE}.email") as email,
    ):
        apps.get_by_id = AsyncMock(return_value=assigned_application)
        apps.ensure_transition = ensure_transition
        apps.update_fields = AsyncMock(side_effect=update_fields)
        payments.get_completed_for_application = AsyncMock(return_value=None)
        users.update = AsyncMock()
        email.send_application_decision = AsyncMock(return_value=True)
        yield MagicMock(apps=apps, payments=payments, users=users, email=email)


class TestDecide:
    """Tests for decide."""

    @pytest.mark.asyncio
    async def test_verify_without_payment_fails(self, mock_db, officer_caller, collaborators):
        with pytest.raises(PaymentRequiredError) as exc_info:
            await decide(mock_db, officer_caller, "app", DecisionRequest(verified=True))

        assert exc_info.value.message == "Cannot verify application: No completed payment found"
        collaborators.apps.update_fields.assert_not_called()
        mock_db.commit.assert_not_called()

    @pytest.mark.asyncio
    async def test_verify_with_completed_payment(
        self, mock_db, officer_caller, collaborators, assigned_application, sample_officer
    ):
        payment = MagicMock(status=PaymentStatus.COMPLETED)
        collaborators.payments.get_completed_for_application.return_value = payment

        result = await decide(
            mock_db,
            officer_caller,
            assigned_application.id,
            DecisionRequest(verified=True, comments="All good"),
        )

        assert result.status == ApplicationStatus.VERIFIED
        assert result.verified is True
        assert result.verified_by is sample_officer
        assert result.form_data["verificationStatus"] == "verified"
        assert result.form_data["verificationComments"] == "All good"
        assert result.comments_read is False
        collaborators.users.update.assert_called_once_with(
            mock_db, assigned_application.student, verified=True, verified_by=sample_officer
        )
        mock_db.commit.assert_called_once()
        collaborators.email.send_application_decision.assert_called_once()

    @pytest.mark.asyncio
    async def test_reject_needs_no_payment(self, mock_db, officer_caller, collaborators, assigned_application):
        result = await decide(
            mock_db,
            officer_caller,
            assigned_application.id,
            DecisionRequest(verified=False, field_comments={"document_0": "Blurry scan"}),
        )

        assert result.status == ApplicationStatus.REJECTED
        assert result.verified_by is None
        assert result.field_comments == {"document_0": "Blurry scan"}
        assert result.comments_read is False
        collaborators.payments.get_completed_for_application.assert_not_called()
        collaborators.users.update.assert_called_once_with(
            mock_db, assigned_application.student, verified=False, verified_by=None
        )

    @pytest.mark.asyncio
    async def test_only_assigned_officer_may_decide(self, mock_db, collaborators):
        other = make_caller(UserRole.VERIFICATION_OFFICER)

        with pytest.raises(ForbiddenError):
            await decide(mock_db, other, "app", DecisionRequest(verified=False))

        collaborators.apps.update_fields.assert_not_called()

    @pytest.mark.asyncio
    async def test_unassigned_application_is_forbidden(
        self, mock_db, officer_caller, collaborators, assigned_application
    ):
        assigned_application.assigned_officer_id = None

        with pytest.raises(ForbiddenError):
            await decide(mock_db, officer_caller, "app", DecisionRequest(verified=False))

    @pytest.mark.asyncio
    async def test_missing_application(self, mock_db, officer_caller, collaborators):
        collaborators.apps.get_by_id.return_value = None

        with pytest.raises(NotFoundError):
            await decide(mock_db, officer_caller, "missing", DecisionRequest(verified=False))

    @pytest.mark.asyncio
    async def test_application_without_student(
        self, mock_db, officer_caller, collaborators, assigned_application
    ):
        assigned_application.student = None

        with pytest.raises(ValidationError, match="No student associated"):
            await decide(mock_db, officer_caller, "app", DecisionRequest(verified=False))

    @pytest.mark.asyncio
    async def test_draft_cannot_be_decided(self, mock_db, officer_caller, collaborators, assigned_application):
        assigned_application.status = ApplicationStatus.DRAFT

        with pytest.raises(InvalidStatusTransitionError):
            await decide(mock_db, officer_caller, "app", DecisionRequest(verified=False))

    @pytest.mark.asyncio
    async def test_decision_can_be_revised(self, mock_db, officer_caller, collaborators, assigned_application):
        assigned_application.status = ApplicationStatus.REJECTED
        collaborators.payments.get_completed_for_application.return_value = MagicMock()

        result = await decide(mock_db, officer_caller, "app", DecisionRequest(verified=True))

        assert result.status == ApplicationStatus.VERIFIED


class TestSaveComments:
    """Tests for save_comments."""

    @pytest.mark.asyncio
    async def test_saves_without_status_change(
        self, mock_db, officer_caller, collaborators, assigned_application
    ):
        assigned_application.comments_read = True

        result = await save_comments(
            mock_db,
            officer_caller,
            "app",
            CommentsRequest(comments="Upload a clearer photo", field_comments={"fullName": "Spelling"}),
        )

        assert result.status == ApplicationStatus.PENDING
        assert result.form_data["verificationComments"] == "Upload a clearer photo"
        assert result.field_comments == {"fullName": "Spelling"}
        assert result.comments_read is False
        mock_db.commit.assert_called_once()

    @pytest.mark.asyncio
    async def test_other_officer_forbidden(self, mock_db, collaborators):
        other = make_caller(UserRole.VERIFICATION_OFFICER)

        with pytest.raises(ForbiddenError):
            await save_comments(mock_db, other, "app", CommentsRequest(comments="x"))

    @pytest.mark.asyncio
    async def test_empty_request_writes_nothing(self, mock_db, officer_caller, collaborators):
        await save_comments(mock_db, officer_caller, "app", CommentsRequest())

        collaborators.apps.update_fields.assert_not_called()
        mock_db.commit.assert_not_called()


def _application(index: int, student=True):
    application = MagicMock()
    application.id = f"app-{index}"
    application.student_id = f"student-{index}" if student else None
    application.student = MagicMock() if student else None
    application.status = ApplicationStatus.PENDING
    return application


def _officer(name: str):
    officer = MagicMock()
    officer.id = f"id-{name}"
    officer.name = name
    return officer


class TestBatchAssignOfficers:
    """Tests for batch_assign_officers."""

    @pytest.fixture
    def admin(self):
        return make_caller(UserRole.VERIFICATION_ADMIN)

    @pytest.mark.asyncio
    async def test_assigns_valid_applications_in_chunks(self, mock_db, admin, sample_course):
        applications = [_application(0), _application(1, student=False), _application(2), _application(3)]
        officers = [_officer("A"), _officer("B")]

        with (
            patch(f"{SERVICE}.course_repository") as courses,
            patch(f"{SERVICE}.application_repository") as apps,
            patch(f"{SERVICE}.UserRepository") as users,
        ):
            courses.get_by_id = AsyncMock(return_value=sample_course)
            apps.list_by_course = AsyncMock(return_value=applications)
            apps.update_fields = AsyncMock()
            users.list_by_course = AsyncMock(return_value=officers)

            officer_count, assignments = await batch_assign_officers(mock_db, admin, sample_course.id, 2)

        assert officer_count == 2
        assert [(a.application_id, a.officer_name) for a in assignments] == [
            ("app-0", "A"),
            ("app-2", "A"),
            ("app-3", "B"),
        ]
        users.list_by_course.assert_called_once_with(
            mock_db, sample_course.id, UserRole.VERIFICATION_OFFICER
        )
        assert apps.update_fields.call_count == 3
        mock_db.commit.assert_called_once()

    @pytest.mark.asyncio
    async def test_no_valid_applications(self, mock_db, admin, sample_course):
        with (
            patch(f"{SERVICE}.course_repository") as courses,
            patch(f"{SERVICE}.application_repository") as apps,
        ):
            courses.get_by_id = AsyncMock(return_value=sample_course)
            apps.list_by_course = AsyncMock(return_value=[_application(0, student=False)])

            with pytest.raises(NotFoundError, match="No valid applications found for this course"):
                await batch_assign_officers(mock_db, admin, sample_course.id, 2)

    @pytest.mark.asyncio
    async def test_no_officers_on_course(self, mock_db, admin, sample_course):
        with (
            patch(f"{SERVICE}.course_repository") as courses,
            patch(f"{SERVICE}.application_repository") as apps,
            patch(f"{SERVICE}.UserRepository") as users,
        ):
            courses.get_by_id = AsyncMock(return_value=sample_course)
            apps.list_by_course = AsyncMock(return_value=[_application(0)])
            users.list_by_course = AsyncMock(return_value=[])

            with pytest.raises(ValidationError, match="No verification officers"):
                await batch_assign_officers(mock_db, admin, sample_course.id, 2)

        mock_db.commit.assert_not_called()

    @pytest.mark.asyncio
    async def test_unknown_course(self, mock_db, admin):
        with patch(f"{SERVICE}.course_repository") as courses:
            courses.get_by_id = AsyncMock(return_value=None)
            with pytest.raises(NotFoundError, match="Course"):
                await batch_assign_officers(mock_db, admin, "missing", 2)


class TestAssignStudent:
    @pytest.mark.asyncio
    async def test_rejects_non_officer(self, mock_db, verification_admin_caller):
        not_an_officer = MagicMock(role=UserRole.STUDENT)
        with patch(f"{SERVICE}.UserRepository") as users:
            users.get_by_id = AsyncMock(return_value=not_an_officer)
            with pytest.raises(ValidationError, match="Invalid officer ID"):
                await assign_student(mock_db, verification_admin_caller, "student-1", "officer-1")

    @pytest.mark.asyncio
    async def test_uses_latest_application_without_course(
        self, mock_db, verification_admin_caller, sample_officer, sample_application
    ):
        with (
            patch(f"{SERVICE}.UserRepository") as users,
            patch(f"{SERVICE}.application_repository") as apps,
        ):
            users.get_by_id = AsyncMock(return_value=sample_officer)
            apps.get_latest_for_student = AsyncMock(return_value=sample_application)
            apps.update_fields = AsyncMock(return_value=sample_application)

            result = await assign_student(
                mock_db, verification_admin_caller, sample_application.student_id, sample_officer.id
            )

        assert result is sample_application
        apps.update_fields.assert_called_once_with(
            mock_db, sample_application, assigned_officer=sample_officer
        )
        mock_db.commit.assert_called_once()

    @pytest.mark.asyncio
    async def test_student_without_application(self, mock_db, verification_admin_caller, sample_officer):
        with (
            patch(f"{SERVICE}.UserRepository") as users,
            patch(f"{SERVICE}.application_repository") as apps,
        ):
            users.get_by_id = AsyncMock(return_value=sample_officer)
            apps.get_by_student_and_course = AsyncMock(return_value=None)

            with pytest.raises(NotFoundError):
                await assign_student(
                    mock_db, verification_admin_caller, "student-1", sample_officer.id, "course-1"
                )
