"""
Users Router

Account management endpoints (mounted at /api/users):
- POST /create - Admins and verification admins create accounts
- GET / - List all users (admin)
- GET /{user_id} - Fetch a user (admin or self)
- DELETE /{user_id} - Delete a user (admin)
"""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from admissions.core.auth import CurrentUser, get_current_user, require
from admissions.core.database import get_db
from admissions.core.policy import Capability
from admissions.modules.shared.schemas import MessageResponse
from admissions.modules.users import service
from admissions.modules.users.schemas import CreateUserRequest, CreateUserResponse, UserResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/create",
    response_model=CreateUserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an account",
)
async def create_user(
    data: CreateUserRequest,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> CreateUserResponse:
    """
    Create an account for another person.

    **Access:** admins (staff and student roles) and verification admins
    (verification officers only, with a course).
    """
    created = await service.create_user(db, user, data)
    return CreateUserResponse(
        message=f"User created successfully as {created.role.value}",
        user_id=created.id,
    )


@router.get("", response_model=list[UserResponse], summary="List users")
async def list_users(
    db: AsyncSession = Depends(get_db),
    _admin: CurrentUser = Depends(require(Capability.MANAGE_USERS)),
) -> list[UserResponse]:
    users = await service.list_users(db)
    return [UserResponse.model_validate(u) for u in users]


@router.get("/{user_id}", response_model=UserResponse, summary="Get a user")
async def get_user(
    user_id: str,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> UserResponse:
    found = await service.get_user(db, user, user_id)
    return UserResponse.model_validate(found)


@router.delete("/{user_id}", response_model=MessageResponse, summary="Delete a user")
async def delete_user(
    user_id: str,
    db: AsyncSession = Depends(get_db),
    admin: CurrentUser = Depends(require(Capability.MANAGE_USERS)),
) -> MessageResponse:
    await service.delete_user(db, user_id)
    logger.info(f"Admin {admin.id} deleted user {user_id}")
    return MessageResponse(message="User deleted successfully")
