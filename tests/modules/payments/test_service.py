"""
Unit tests for the payment service.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from admissions.core.errors import ConflictError, NotFoundError, ValidationError
from admissions.modules.applications.models import ApplicationStatus
from admissions.modules.payments.models import Payment, PaymentStatus
from admissions.modules.payments.schemas import ProcessPaymentRequest
from admissions.modules.payments.service import list_applied_courses, process_payment

SERVICE = "admissions.modules.payments.service"


@pytest.fixture
def payment_request(sample_application, sample_course):
    return ProcessPaymentRequest(
        application_id=sample_application.id,
        course_id=sample_course.id,
        amount=50000,
        payment_method="card",
        last_date="2026-03-31",
    )


class TestProcessPayment:
    """Tests for process_payment."""

    @pytest.mark.asyncio
    async def test_records_completed_payment(
        self, mock_db, student_caller, sample_student, sample_application, payment_request
    ):
        with (
            patch(f"{SERVICE}.repository") as repo,
            patch(f"{SERVICE}.application_repository") as apps,
            patch(f"{SERVICE}.UserRepository") as users,
            patch(f"{SERVICE}.Payment") as payment_cls,
        ):
            repo.get_by_user_and_application = AsyncMock(return_value=None)
            apps.get_for_student = AsyncMock(return_value=sample_application)
            users.get_by_id = AsyncMock(return_value=sample_student)
            payment_cls.return_value = MagicMock(spec=Payment, id="pay-1", amount=50000)

            payment = await process_payment(mock_db, student_caller, payment_request)

        kwargs = payment_cls.call_args.kwargs
        assert kwargs["status"] == PaymentStatus.COMPLETED
        assert kwargs["application"] is sample_application
        assert kwargs["course_name"] == "B.Sc. Computer Science"
        assert kwargs["name"] == sample_student.name
        assert sample_student.payments == [payment]
        mock_db.commit.assert_called_once()

    @pytest.mark.asyncio
    async def test_duplicate_payment_rejected(self, mock_db, student_caller, payment_request):
        with patch(f"{SERVICE}.repository") as repo:
            repo.get_by_user_and_application = AsyncMock(return_value=MagicMock())
            with pytest.raises(ConflictError, match="already processed"):
                await process_payment(mock_db, student_caller, payment_request)
        mock_db.commit.assert_not_called()

    @pytest.mark.asyncio
    async def test_application_must_belong_to_caller(self, mock_db, student_caller, payment_request):
        with (
            patch(f"{SERVICE}.repository") as repo,
            patch(f"{SERVICE}.application_repository") as apps,
        ):
            repo.get_by_user_and_application = AsyncMock(return_value=None)
            apps.get_for_student = AsyncMock(return_value=None)
            with pytest.raises(NotFoundError, match="Application"):
                await process_payment(mock_db, student_caller, payment_request)

    @pytest.mark.asyncio
    async def test_course_must_match_application(
        self, mock_db, student_caller, sample_application, payment_request
    ):
        payment_request.course_id = "another-course"
        with (
            patch(f"{SERVICE}.repository") as repo,
            patch(f"{SERVICE}.application_repository") as apps,
        ):
            repo.get_by_user_and_application = AsyncMock(return_value=None)
            apps.get_for_student = AsyncMock(return_value=sample_application)
            with pytest.raises(ValidationError) as exc_info:
                await process_payment(mock_db, student_caller, payment_request)
        assert exc_info.value.fields == ["courseId"]


class TestAppliedCourses:
    @pytest.mark.asyncio
    async def test_lists_fee_and_payment_status(
        self, mock_db, student_caller, sample_student, sample_application
    ):
        orphan = MagicMock(id="orphan", course=None)
        sample_student.payments = [
            MagicMock(application_id=sample_application.id, status=PaymentStatus.COMPLETED)
        ]
        with (
            patch(f"{SERVICE}.application_repository") as apps,
            patch(f"{SERVICE}.UserRepository") as users,
        ):
            users.get_by_id = AsyncMock(return_value=sample_student)
            apps.list_by_student = AsyncMock(return_value=[sample_application, orphan])

            items = await list_applied_courses(mock_db, student_caller)

        assert len(items) == 1
        item = items[0]
        assert item.application_id == sample_application.id
        assert item.course_name == "B.Sc. Computer Science"
        assert item.amount == 50000.0
        assert item.status == ApplicationStatus.PENDING
        assert item.payment_status == PaymentStatus.COMPLETED
