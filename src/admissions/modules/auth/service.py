"""
Authentication Service

Registration, login and password changes.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from admissions.core.email import send_welcome_email
from admissions.core.errors import AuthError, ConflictError, NotFoundError, ValidationError
from admissions.core.security import create_access_token, hash_password, verify_password
from admissions.modules.auth.schemas import ChangePasswordRequest, LoginRequest, RegisterRequest
from admissions.modules.users.models import User, UserRole
from admissions.modules.users.repository import UserRepository

logger = logging.getLogger(__name__)


def issue_token(user: User) -> str:
    """Create an access token carrying the user's identity claims."""
    return create_access_token(
        subject=str(user.id),
        additional_claims={
            "email": user.email,
            "role": user.role.value,
            "name": user.name,
        },
    )


async def register(db: AsyncSession, data: RegisterRequest) -> tuple[User, str]:
    """
    Register a new student account.

    Args:
        db: Database session
        data: Name, email and password

    Returns:
        The created user and an access token

    Raises:
        ConflictError: If the email is already registered
    """
    if await UserRepository.email_exists(db, data.email):
        logger.warning(f"Registration attempt for existing email: {data.email}")
        raise ConflictError("Already registered")

    user = await UserRepository.create(
        db,
        email=data.email,
        password_hash=hash_password(data.password),
        name=data.name,
        role=UserRole.STUDENT,
    )
    await db.commit()

    logger.info(f"Registered student {user.id} ({user.email})")

    try:
        await send_welcome_email(user.email, user.name)
    except Exception as e:
        logger.error(f"Failed to send welcome email to {user.email}: {e}", exc_info=True)

    return user, issue_token(user)


async def login(db: AsyncSession, credentials: LoginRequest) -> tuple[User, str]:
    """
    Authenticate a user by email and password.

    Raises:
        AuthError: If the email is unknown or the password is wrong
    """
    user = await UserRepository.get_by_email(db, credentials.email)

    if not user:
        logger.warning(f"Login attempt for non-existent email: {credentials.email}")
        raise AuthError("Invalid email or password.")

    if not verify_password(credentials.password, user.password_hash):
        logger.warning(f"Invalid password for user: {credentials.email}")
        raise AuthError("Invalid email or password.")

    logger.info(f"User logged in: {user.email} (role: {user.role.value})")
    return user, issue_token(user)


async def change_password(db: AsyncSession, user_id: str, data: ChangePasswordRequest) -> None:
    """
    Change the caller's password.

    Raises:
        NotFoundError: If the user no longer exists
        ValidationError: If the current password is wrong or the new ones differ
    """
    if data.new_password != data.confirm_new_password:
        raise ValidationError("New passwords do not match.", fields=["confirmNewPassword"])

    user = await UserRepository.get_by_id(db, user_id)
    if not user:
        raise NotFoundError("User", user_id)

    if not verify_password(data.current_password, user.password_hash):
        logger.warning(f"Password change with wrong current password for user {user_id}")
        raise ValidationError("Current password is incorrect.", fields=["currentPassword"])

    await UserRepository.update(db, user, password_hash=hash_password(data.new_password))
    await db.commit()
    logger.info(f"Password changed for user {user_id}")
