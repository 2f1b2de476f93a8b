"""
Authentication router.

Mounted at the application root:
- POST /register - Self-registration (student accounts)
- POST /login - Exchange credentials for an access token
- PUT /change-password - Change the caller's password
"""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from admissions.core.auth import CurrentUser, get_current_user
from admissions.core.database import get_db
from admissions.core.rate_limit import rate_limit
from admissions.modules.auth import service
from admissions.modules.auth.schemas import (
    ChangePasswordRequest,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
)
from admissions.modules.shared.schemas import MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter()

# (limit, window_seconds) per client IP
RATE_LIMIT_LOGIN = (10, 60)
RATE_LIMIT_REGISTER = (5, 60)


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a student account",
    dependencies=[Depends(rate_limit("register", *RATE_LIMIT_REGISTER))],
)
async def register(
    data: RegisterRequest,
    db: AsyncSession = Depends(get_db),
) -> RegisterResponse:
    """
    Create a student account and return an access token.

    A welcome email is sent to the new address.
    """
    user, token = await service.register(db, data)
    return RegisterResponse(
        user_id=user.id,
        token=token,
        role=user.role,
        message=f"Registered successfully as {user.role.value}",
    )


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Log in",
    dependencies=[Depends(rate_limit("login", *RATE_LIMIT_LOGIN))],
)
async def login(
    credentials: LoginRequest,
    db: AsyncSession = Depends(get_db),
) -> LoginResponse:
    """
    Authenticate user and return a JWT access token.

    Raises:
        AuthError 401: Invalid credentials
    """
    user, token = await service.login(db, credentials)
    return LoginResponse(token=token, user_id=user.id, role=user.role)


@router.put("/change-password", response_model=MessageResponse, summary="Change password")
async def change_password(
    data: ChangePasswordRequest,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> MessageResponse:
    await service.change_password(db, user.id, data)
    return MessageResponse(message="Password changed successfully!")
