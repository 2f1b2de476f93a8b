"""
User Management Service

Staff-driven account creation, lookup and deletion.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from admissions.core.auth import CurrentUser
from admissions.core.email import send_account_created_email
from admissions.core.errors import ConflictError, ForbiddenError, NotFoundError, ValidationError
from admissions.core.policy import Capability, has_capability
from admissions.core.security import hash_password
from admissions.modules.courses import repository as course_repository
from admissions.modules.users.models import User, UserRole
from admissions.modules.users.repository import UserRepository
from admissions.modules.users.schemas import CreateUserRequest

logger = logging.getLogger(__name__)

# Roles each kind of creator may hand out
STAFF_CREATABLE_ROLES = (
    UserRole.ADMIN,
    UserRole.CONTENT_ADMIN,
    UserRole.VERIFICATION_ADMIN,
    UserRole.STUDENT,
    UserRole.FACULTY,
)
OFFICER_CREATABLE_ROLES = (UserRole.VERIFICATION_OFFICER,)


def creatable_roles(creator: CurrentUser) -> tuple[UserRole, ...]:
    """
    Return the roles a creator may assign.

    Raises:
        ForbiddenError: If the creator may not create accounts at all
    """
    if has_capability(creator.role, Capability.CREATE_STAFF):
        return STAFF_CREATABLE_ROLES
    if has_capability(creator.role, Capability.CREATE_OFFICERS):
        return OFFICER_CREATABLE_ROLES
    logger.warning(f"User {creator.id} ({creator.role}) attempted to create an account")
    raise ForbiddenError()


async def create_user(db: AsyncSession, creator: CurrentUser, data: CreateUserRequest) -> User:
    """
    Create an account on behalf of an administrator.

    Admins may create admin, content_admin, verification_admin, student
    and faculty accounts. Verification admins may only create
    verification officers and must attach them to an existing course.

    Args:
        db: Database session
        creator: The authenticated administrator
        data: New account details

    Returns:
        The created User

    Raises:
        ForbiddenError: If the creator cannot create accounts
        ValidationError: If the role is not allowed or a required course is missing
        ConflictError: If the email is already registered
        NotFoundError: If the course does not exist
    """
    allowed = creatable_roles(creator)
    if data.role not in allowed:
        raise ValidationError(
            f"Invalid role. Allowed roles: {', '.join(r.value for r in allowed)}",
            fields=["role"],
        )

    if await UserRepository.email_exists(db, data.email):
        raise ConflictError("User already registered.")

    if data.role == UserRole.VERIFICATION_OFFICER and not data.course_id:
        raise ValidationError(
            "Course ID is required for creating a verification officer.",
            fields=["courseId"],
        )

    courses = []
    if data.course_id:
        course = await course_repository.get_by_id(db, data.course_id)
        if not course:
            raise NotFoundError("Course", data.course_id)
        courses.append(course)

    user = await UserRepository.create(
        db,
        email=data.email,
        password_hash=hash_password(data.password),
        name=data.name,
        role=data.role,
        courses=courses,
    )
    await db.commit()

    logger.info(f"User {creator.id} created {data.role.value} account {user.id}")

    try:
        await send_account_created_email(
            user.email,
            user.name,
            data.role.value,
            course_title=courses[0].title if courses else None,
        )
    except Exception as e:
        logger.error(f"Failed to send account email to {user.email}: {e}", exc_info=True)

    return user


async def list_users(db: AsyncSession) -> list[User]:
    return await UserRepository.list_all(db)


async def get_user(db: AsyncSession, caller: CurrentUser, user_id: str) -> User:
    """
    Fetch a user. Admins may read anyone; others only themselves.

    Raises:
        ForbiddenError: If the caller is neither an admin nor the user
        NotFoundError: If the user does not exist
    """
    if caller.id != user_id and not has_capability(caller.role, Capability.MANAGE_USERS):
        logger.warning(f"User {caller.id} denied access to user {user_id}")
        raise ForbiddenError("Access denied.")

    user = await UserRepository.get_by_id(db, user_id)
    if not user:
        raise NotFoundError("User", user_id)
    return user


async def delete_user(db: AsyncSession, user_id: str) -> None:
    """
    Hard-delete a user.

    Raises:
        NotFoundError: If the user does not exist
    """
    user = await UserRepository.get_by_id(db, user_id)
    if not user:
        raise NotFoundError("User", user_id)

    await UserRepository.delete(db, user)
    await db.commit()
