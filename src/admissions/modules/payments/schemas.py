"""
Payment Schemas
"""

from datetime import datetime

from pydantic import ConfigDict, Field

from admissions.modules.applications.models import ApplicationStatus
from admissions.modules.courses.schemas import CourseResponse
from admissions.modules.payments.models import PaymentStatus
from admissions.modules.shared.schemas import CamelModel


class ProcessPaymentRequest(CamelModel):
    """Request body for recording an application fee payment."""

    model_config = ConfigDict(str_strip_whitespace=True)

    application_id: str = Field(..., min_length=1)
    course_id: str = Field(..., min_length=1)
    course_name: str | None = None
    amount: float = Field(..., gt=0)
    payment_method: str = Field(..., min_length=1, max_length=50)
    last_date: str = Field(..., min_length=1, max_length=50)


class PaymentResponse(CamelModel):
    id: str
    user_id: str
    application_id: str
    course_id: str | None = None
    name: str
    email: str
    course_name: str
    amount: float
    payment_method: str
    payment_date: datetime
    last_date: str
    status: PaymentStatus
    created_at: datetime


class PaymentHistoryEntry(PaymentResponse):
    course: CourseResponse | None = None


class ProcessPaymentResponse(CamelModel):
    message: str
    payment: PaymentResponse


class PaymentSummary(CamelModel):
    """Payment details shown alongside an application."""

    amount: float
    payment_method: str
    payment_date: datetime
    status: PaymentStatus


class AppliedCourse(CamelModel):
    """One of the caller's applications, as a payable item."""

    application_id: str
    course_id: str
    course_name: str
    amount: float
    last_date: str | None = None
    status: ApplicationStatus
    payment_status: PaymentStatus | None = None


class UserDetails(CamelModel):
    name: str
    email: str
