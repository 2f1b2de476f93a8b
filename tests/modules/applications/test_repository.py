"""
Unit tests for the application status state machine.
"""

import pytest

from admissions.core.errors import InvalidStatusTransitionError
from admissions.modules.applications.models import ApplicationStatus
from admissions.modules.applications.repository import VALID_STATUS_TRANSITIONS, ensure_transition

DRAFT = ApplicationStatus.DRAFT
PENDING = ApplicationStatus.PENDING
VERIFIED = ApplicationStatus.VERIFIED
REJECTED = ApplicationStatus.REJECTED


class TestEnsureTransition:
    @pytest.mark.parametrize(
        "current,new",
        [
            (DRAFT, DRAFT),
            (DRAFT, PENDING),
            (PENDING, VERIFIED),
            (PENDING, REJECTED),
            (REJECTED, VERIFIED),
            (VERIFIED, REJECTED),
        ],
    )
    def test_allowed(self, current, new):
        ensure_transition(current, new)

    @pytest.mark.parametrize(
        "current,new",
        [
            (DRAFT, VERIFIED),
            (DRAFT, REJECTED),
            (PENDING, DRAFT),
            (PENDING, PENDING),
            (VERIFIED, DRAFT),
            (REJECTED, PENDING),
        ],
    )
    def test_rejected(self, current, new):
        with pytest.raises(InvalidStatusTransitionError) as exc_info:
            ensure_transition(current, new)
        assert exc_info.value.current_status == current.value
        assert exc_info.value.new_status == new.value
        assert exc_info.value.status_code == 400

    def test_every_status_has_transitions(self):
        assert set(VALID_STATUS_TRANSITIONS) == set(ApplicationStatus)

    def test_nothing_returns_to_draft_once_submitted(self):
        for status, targets in VALID_STATUS_TRANSITIONS.items():
            if status != DRAFT:
                assert DRAFT not in targets
