"""
Payment Repository

Database operations for the payment ledger.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import Payment, PaymentStatus


async def get_by_user_and_application(
    db: AsyncSession, user_id: str, application_id: str
) -> Payment | None:
    result = await db.execute(
        select(Payment).where(
            Payment.user_id == user_id,
            Payment.application_id == application_id,
        )
    )
    return result.scalar_one_or_none()


async def get_completed_for_application(db: AsyncSession, application_id: str) -> Payment | None:
    """The completed payment recorded for an application, if any."""
    result = await db.execute(
        select(Payment)
        .where(
            Payment.application_id == application_id,
            Payment.status == PaymentStatus.COMPLETED,
        )
        .limit(1)
    )
    return result.scalar_one_or_none()


async def get_latest_for_application(db: AsyncSession, application_id: str) -> Payment | None:
    result = await db.execute(
        select(Payment)
        .where(Payment.application_id == application_id)
        .order_by(Payment.payment_date.desc())
        .limit(1)
    )
    return result.scalar_one_or_none()


async def list_by_user(db: AsyncSession, user_id: str) -> list[Payment]:
    """A user's payments, most recent first."""
    result = await db.execute(
        select(Payment).where(Payment.user_id == user_id).order_by(Payment.payment_date.desc())
    )
    return list(result.scalars().all())
