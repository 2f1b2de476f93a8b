"""
Payments Router

Endpoints (mounted at /api/payments):
- GET /applied-courses - The caller's applications with their fees
- POST /process - Record a payment for an application
- GET /history - The caller's payments
- GET /user-details - Name and email for the payment form
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from admissions.core.auth import CurrentUser, require
from admissions.core.database import get_db
from admissions.core.policy import Capability
from admissions.modules.payments import service
from admissions.modules.payments.schemas import (
    AppliedCourse,
    PaymentHistoryEntry,
    PaymentResponse,
    ProcessPaymentRequest,
    ProcessPaymentResponse,
    UserDetails,
)

router = APIRouter()


@router.get("/applied-courses", response_model=list[AppliedCourse], summary="List payable applications")
async def applied_courses(
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(require(Capability.MAKE_PAYMENTS)),
) -> list[AppliedCourse]:
    return await service.list_applied_courses(db, user)


@router.post(
    "/process",
    response_model=ProcessPaymentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Process a payment",
)
async def process_payment(
    data: ProcessPaymentRequest,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(require(Capability.MAKE_PAYMENTS)),
) -> ProcessPaymentResponse:
    payment = await service.process_payment(db, user, data)
    return ProcessPaymentResponse(
        message="Payment processed successfully",
        payment=PaymentResponse.model_validate(payment),
    )


@router.get("/history", response_model=list[PaymentHistoryEntry], summary="Payment history")
async def history(
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(require(Capability.MAKE_PAYMENTS)),
) -> list[PaymentHistoryEntry]:
    payments = await service.list_history(db, user)
    return [PaymentHistoryEntry.model_validate(p) for p in payments]


@router.get("/user-details", response_model=UserDetails, summary="Payer details")
async def user_details(
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(require(Capability.MAKE_PAYMENTS)),
) -> UserDetails:
    found = await service.get_user_details(db, user)
    return UserDetails.model_validate(found)
