"""
Payment Models

Ledger of application fee payments. One payment per (student, application).
"""

import enum
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Enum, Float, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from admissions.modules.courses.models import Course
from admissions.modules.shared import BaseModel, enum_values, utcnow


if TYPE_CHECKING:
    from admissions.modules.applications.models import Application
    from admissions.modules.users.models import User


class PaymentStatus(str, enum.Enum):
    PENDING = "pending"
    COMPLETED = "completed"


class Payment(BaseModel):
    """A recorded payment for an application."""

    __tablename__ = "payments"
    __table_args__ = (UniqueConstraint("user_id", "application_id", name="uq_payment_user_application"),)

    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    application_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("applications.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    course_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("courses.id", ondelete="SET NULL"),
        nullable=True,
    )

    # Payer snapshot
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    course_name: Mapped[str] = mapped_column(String(200), nullable=False)

    amount: Mapped[float] = mapped_column(Float, nullable=False)
    payment_method: Mapped[str] = mapped_column(String(50), nullable=False)
    payment_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )
    last_date: Mapped[str] = mapped_column(String(50), nullable=False)
    status: Mapped[PaymentStatus] = mapped_column(
        Enum(PaymentStatus, name="payment_status", values_callable=enum_values),
        nullable=False,
        default=PaymentStatus.COMPLETED,
    )

    # Relationships
    user: Mapped["User"] = relationship("User", back_populates="payments")
    application: Mapped["Application"] = relationship("Application", back_populates="payments")
    course: Mapped[Course | None] = relationship(Course, lazy="selectin")

    def __repr__(self) -> str:
        return f"<Payment(id={self.id}, application_id={self.application_id}, status={self.status.value})>"
