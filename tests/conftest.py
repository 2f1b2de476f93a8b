"""
Shared fixtures.
"""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from admissions.modules.applications.models import Application, ApplicationStatus
from admissions.modules.courses.models import Course, ProgramType
from admissions.modules.users.models import User, UserRole

from tests.factories import make_caller


@pytest.fixture
def mock_db():
    """Create a mock database session."""
    db = AsyncMock()
    db.commit = AsyncMock()
    db.rollback = AsyncMock()
    db.refresh = AsyncMock()
    db.flush = AsyncMock()
    db.get = AsyncMock()
    db.execute = AsyncMock()
    db.add = MagicMock()
    return db


@pytest.fixture
def student_caller():
    return make_caller(UserRole.STUDENT)


@pytest.fixture
def admin_caller():
    return make_caller(UserRole.ADMIN)


@pytest.fixture
def officer_caller():
    return make_caller(UserRole.VERIFICATION_OFFICER)


@pytest.fixture
def verification_admin_caller():
    return make_caller(UserRole.VERIFICATION_ADMIN)


@pytest.fixture
def sample_student(student_caller):
    """A student user model matching student_caller."""
    student = MagicMock(spec=User)
    student.id = student_caller.id
    student.email = student_caller.email
    student.name = "Asha Student"
    student.role = UserRole.STUDENT
    student.verified = False
    student.verified_by = None
    student.payments = []
    return student


@pytest.fixture
def sample_officer(officer_caller):
    officer = MagicMock(spec=User)
    officer.id = officer_caller.id
    officer.email = officer_caller.email
    officer.name = "Olu Officer"
    officer.role = UserRole.VERIFICATION_OFFICER
    return officer


@pytest.fixture
def sample_course():
    course = MagicMock(spec=Course)
    course.id = str(uuid4())
    course.title = "B.Sc. Computer Science"
    course.fee = 50000.0
    course.assigned_to = "content_admin@test.com"
    course.program_type = ProgramType.UG
    return course


@pytest.fixture
def sample_application(sample_student, sample_course):
    """A pending application owned by sample_student."""
    application = MagicMock(spec=Application)
    application.id = str(uuid4())
    application.student_id = sample_student.id
    application.student = sample_student
    application.course_id = sample_course.id
    application.course = sample_course
    application.status = ApplicationStatus.PENDING
    application.form_data = {
        "aadhaarNumber": "123456789012",
        "email": "asha@test.com",
        "documents": [
            {"type": "Aadhaar", "filename": "a.pdf", "path": "/tmp/a.pdf"},
            {"type": "Marksheet", "key": "tenth", "filename": "b.pdf", "path": "/tmp/b.pdf"},
        ],
    }
    application.documents = application.form_data["documents"]
    application.verification_comments = ""
    application.field_comments = {}
    application.comments_read = False
    application.assigned_officer_id = None
    application.assigned_officer = None
    application.verified = False
    application.verified_by = None
    application.updated_at = datetime.now(UTC)
    return application
