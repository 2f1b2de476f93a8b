"""
Unit tests for the capability policy and the auth gateway.
"""

from datetime import timedelta

import pytest

from admissions.core.auth import authenticate
from admissions.core.errors import AuthError, ForbiddenError
from admissions.core.policy import (
    ROLE_CAPABILITIES,
    Capability,
    authorize,
    capabilities_for,
    has_capability,
)
from admissions.core.security import create_access_token
from admissions.modules.users.models import UserRole

from tests.factories import make_caller


class TestCapabilityTable:
    """Tests for the role -> capability mapping."""

    def test_every_role_has_an_entry(self):
        assert set(ROLE_CAPABILITIES) == set(UserRole)

    def test_only_officers_review_applications(self):
        reviewers = {role for role in UserRole if has_capability(role, Capability.REVIEW_APPLICATIONS)}
        assert reviewers == {UserRole.VERIFICATION_OFFICER}

    def test_students_apply_and_pay(self):
        assert has_capability("student", Capability.APPLY)
        assert has_capability("student", Capability.MAKE_PAYMENTS)
        assert not has_capability("student", Capability.VIEW_ANY_APPLICATION)

    def test_admins_and_verification_admins_assign_officers(self):
        assert has_capability(UserRole.ADMIN, Capability.ASSIGN_OFFICERS)
        assert has_capability(UserRole.VERIFICATION_ADMIN, Capability.ASSIGN_OFFICERS)
        assert not has_capability(UserRole.VERIFICATION_OFFICER, Capability.ASSIGN_OFFICERS)

    def test_content_admin_sees_only_assigned_catalog(self):
        assert has_capability(UserRole.CONTENT_ADMIN, Capability.BROWSE_ASSIGNED_CATALOG)
        assert not has_capability(UserRole.CONTENT_ADMIN, Capability.BROWSE_CATALOG)

    def test_unknown_role_has_no_capabilities(self):
        assert capabilities_for("janitor") == frozenset()


class TestAuthorize:
    """Tests for authorize()."""

    def test_allows_granted_capability(self):
        authorize(make_caller(UserRole.FACULTY), Capability.MANAGE_STUDENT_RECORDS)

    def test_rejects_missing_capability(self):
        with pytest.raises(ForbiddenError) as exc_info:
            authorize(make_caller(UserRole.STUDENT), Capability.MANAGE_USERS)
        assert exc_info.value.status_code == 403


class TestAuthenticate:
    """Tests for mapping bearer tokens to identities."""

    def test_valid_token_yields_identity(self):
        token = create_access_token("user-1", {"email": "a@test.com", "role": "admin", "name": "A"})

        user = authenticate(token)

        assert user.id == "user-1"
        assert user.email == "a@test.com"
        assert user.role == "admin"
        assert user.name == "A"

    def test_expired_token_is_rejected(self):
        token = create_access_token(
            "user-1", {"email": "a@test.com", "role": "admin"}, expires_delta=timedelta(seconds=-5)
        )
        with pytest.raises(AuthError):
            authenticate(token)

    def test_garbage_token_is_rejected(self):
        with pytest.raises(AuthError) as exc_info:
            authenticate("not-a-jwt")
        assert exc_info.value.status_code == 401

    def test_token_without_role_is_rejected(self):
        token = create_access_token("user-1", {"email": "a@test.com"})
        with pytest.raises(AuthError, match="claims"):
            authenticate(token)

    def test_non_access_token_is_rejected(self):
        token = create_access_token("user-1", {"role": "admin", "type": "refresh"})
        with pytest.raises(AuthError, match="access token"):
            authenticate(token)
