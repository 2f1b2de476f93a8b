"""
Authentication and Authorization Module

Provides authentication dependencies for FastAPI endpoints.
Bearer tokens are verified with the helpers in security.py and the
resulting identity is checked against the capability policy.
"""

import logging
from collections.abc import Callable, Coroutine
from dataclasses import dataclass
from typing import Any

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from admissions.core.errors import AuthError
from admissions.core.policy import Capability, authorize
from admissions.core.security import decode_token

logger = logging.getLogger(__name__)

# auto_error is off so a missing header surfaces as AuthError (401)
security = HTTPBearer(
    auto_error=False,
    description="JWT Bearer token for authentication",
)


@dataclass
class CurrentUser:
    """
    The authenticated caller, populated from JWT claims.

    Attributes:
        id: User ID (UUID string)
        email: User's email address
        role: One of the UserRole values
        name: Display name (optional)
    """

    id: str
    email: str
    role: str
    name: str | None = None

    def __str__(self) -> str:
        return f"CurrentUser(id={self.id}, email={self.email}, role={self.role})"


def authenticate(token: str) -> CurrentUser:
    """
    Map a bearer token to a caller identity.

    Args:
        token: JWT string from the Authorization header

    Returns:
        CurrentUser built from the token claims

    Raises:
        AuthError: If the token is invalid, expired or missing claims
    """
    payload = decode_token(token)
    if payload is None:
        raise AuthError()

    if payload.get("type", "access") != "access":
        logger.warning(f"Rejected token of type {payload.get('type')}")
        raise AuthError("This endpoint requires an access token.")

    user_id = payload.get("sub")
    role = payload.get("role")
    if not user_id or not role:
        logger.warning("Rejected token with missing 'sub' or 'role' claim")
        raise AuthError("Token contains invalid or missing claims.")

    return CurrentUser(
        id=str(user_id),
        email=payload.get("email", ""),
        role=role,
        name=payload.get("name"),
    )


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> CurrentUser:
    """
    FastAPI dependency that validates the bearer token.

    Usage:
        @router.get("/me")
        async def me(user: CurrentUser = Depends(get_current_user)):
            ...

    Raises:
        AuthError: If the header is missing, malformed, or the token is invalid
    """
    if credentials is None or not credentials.credentials:
        raise AuthError("Access denied: no token provided.")

    user = authenticate(credentials.credentials)
    logger.debug(f"Authenticated {user}")
    return user


def require(capability: Capability) -> Callable[..., Coroutine[Any, Any, CurrentUser]]:
    """
    Build a dependency that authenticates the caller and checks a capability.

    Usage:
        @router.post("/courses/{course_id}/assign-officers")
        async def assign(user: CurrentUser = Depends(require(Capability.ASSIGN_OFFICERS))):
            ...
    """

    async def dependency(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        authorize(user, capability)
        return user

    return dependency


__all__ = [
    "CurrentUser",
    "authenticate",
    "get_current_user",
    "require",
]
