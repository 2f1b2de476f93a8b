"""
Model registry.

Importing this module registers every ORM model on ``Base.metadata``
(used by Alembic and by test fixtures that create the schema).
"""

from admissions.core.database import Base
from admissions.modules.applications.models import Application, ApplicationStatus
from admissions.modules.courses.models import Course, ProgramType
from admissions.modules.forms.models import FormTemplate
from admissions.modules.payments.models import Payment, PaymentStatus
from admissions.modules.users.models import User, UserRole, user_courses

__all__ = [
    "Application",
    "ApplicationStatus",
    "Base",
    "Course",
    "FormTemplate",
    "Payment",
    "PaymentStatus",
    "ProgramType",
    "User",
    "UserRole",
    "user_courses",
]
