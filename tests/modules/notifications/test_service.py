"""
Unit tests for student notification derivation.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from admissions.core.errors import NotFoundError
from admissions.modules.notifications.service import (
    build_notification,
    list_notifications,
    mark_comments_read,
)

SERVICE = "admissions.modules.notifications.service"


class TestBuildNotification:
    """Tests for build_notification."""

    def test_no_comments_means_no_notification(self, sample_application):
        assert build_notification(sample_application) is None

    def test_general_comment_only(self, sample_application, sample_officer):
        sample_application.verification_comments = "Please re-upload your marksheet"
        sample_application.assigned_officer = sample_officer

        notification = build_notification(sample_application)

        assert notification.application_id == sample_application.id
        assert notification.course_title == "B.Sc. Computer Science"
        assert notification.officer_name == "Olu Officer"
        assert notification.general_comment == "Please re-upload your marksheet"
        assert notification.field_comments == {}
        assert notification.read is False

    def test_document_comments_resolve_types(self, sample_application):
        sample_application.field_comments = {
            "document_1": "Unreadable",
            "document_tenth": "Wrong year",
            "document_9": "Missing",
            "fullName": "Use legal name",
            "email": "",
        }

        notification = build_notification(sample_application)
        comments = notification.field_comments

        assert comments["document_1"].document_type == "Marksheet"
        assert comments["document_tenth"].document_type == "Marksheet"
        assert comments["document_9"].document_type == "Unknown Document"
        assert comments["fullName"].comment == "Use legal name"
        assert comments["fullName"].document_type is None
        assert "email" not in comments

    def test_verifier_name_takes_precedence(self, sample_application, sample_officer):
        verifier = MagicMock()
        verifier.name = "Vera Verifier"
        sample_application.verified_by = verifier
        sample_application.assigned_officer = sample_officer
        sample_application.verification_comments = "Approved"

        assert build_notification(sample_application).officer_name == "Vera Verifier"

    def test_fallback_names(self, sample_application):
        sample_application.course = None
        sample_application.verification_comments = "Note"

        notification = build_notification(sample_application)

        assert notification.course_title == "Unknown Course"
        assert notification.officer_name == "Verification Officer"


class TestListNotifications:
    @pytest.mark.asyncio
    async def test_unread_count(self, mock_db, student_caller, sample_application):
        read = MagicMock(**{
            "id": "app-read",
            "verification_comments": "Done",
            "field_comments": {},
            "documents": [],
            "comments_read": True,
            "verified_by": None,
            "assigned_officer": None,
            "updated_at": sample_application.updated_at,
        })
        read.course.title = "M.A. History"
        sample_application.verification_comments = "Fix your photo"
        silent = MagicMock(verification_comments="", field_comments={})

        with patch(f"{SERVICE}.application_repository") as repo:
            repo.list_by_student = AsyncMock(return_value=[sample_application, read, silent])
            result = await list_notifications(mock_db, student_caller)

        assert [n.application_id for n in result.notifications] == [sample_application.id, "app-read"]
        assert result.unread_count == 1
        repo.list_by_student.assert_called_once_with(mock_db, student_caller.id)


class TestMarkCommentsRead:
    @pytest.mark.asyncio
    async def test_marks_read(self, mock_db, student_caller, sample_application):
        with patch(f"{SERVICE}.application_repository") as repo:
            repo.get_for_student = AsyncMock(return_value=sample_application)
            repo.update_fields = AsyncMock()

            await mark_comments_read(mock_db, student_caller, sample_application.id)

        repo.get_for_student.assert_called_once_with(mock_db, sample_application.id, student_caller.id)
        repo.update_fields.assert_called_once_with(mock_db, sample_application, comments_read=True)
        mock_db.commit.assert_called_once()

    @pytest.mark.asyncio
    async def test_is_idempotent(self, mock_db, student_caller, sample_application):
        sample_application.comments_read = True
        with patch(f"{SERVICE}.application_repository") as repo:
            repo.get_for_student = AsyncMock(return_value=sample_application)
            repo.update_fields = AsyncMock()

            await mark_comments_read(mock_db, student_caller, sample_application.id)
            await mark_comments_read(mock_db, student_caller, sample_application.id)

        repo.update_fields.assert_not_called()
        assert sample_application.comments_read is True

    @pytest.mark.asyncio
    async def test_scoped_to_owner(self, mock_db, student_caller):
        with patch(f"{SERVICE}.application_repository") as repo:
            repo.get_for_student = AsyncMock(return_value=None)
            with pytest.raises(NotFoundError):
                await mark_comments_read(mock_db, student_caller, "someone-elses")
