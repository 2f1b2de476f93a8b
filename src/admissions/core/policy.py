"""
Capability Policy

Every protected operation declares the capability it needs. This module
is the single place that maps roles to capabilities, so routers never
compare role strings themselves.
"""

import enum
import logging

from admissions.core.errors import ForbiddenError
from admissions.modules.users.models import UserRole

logger = logging.getLogger(__name__)


class Capability(str, enum.Enum):
    """Operations that require a specific grant."""

    # Accounts
    MANAGE_USERS = "manage_users"
    CREATE_STAFF = "create_staff"
    CREATE_OFFICERS = "create_officers"

    # Catalog and templates
    BROWSE_CATALOG = "browse_catalog"
    BROWSE_ASSIGNED_CATALOG = "browse_assigned_catalog"
    MANAGE_COURSES = "manage_courses"
    DESCRIBE_COURSES = "describe_courses"
    MANAGE_FORM_TEMPLATES = "manage_form_templates"

    # Applications
    APPLY = "apply"
    VIEW_ANY_APPLICATION = "view_any_application"
    MANAGE_APPLICATIONS = "manage_applications"

    # Verification
    ADMINISTER_VERIFICATION = "administer_verification"
    ASSIGN_OFFICERS = "assign_officers"
    REVIEW_APPLICATIONS = "review_applications"

    # Payments and notifications
    MAKE_PAYMENTS = "make_payments"
    READ_NOTIFICATIONS = "read_notifications"

    # Faculty and student records
    MANAGE_STUDENT_RECORDS = "manage_student_records"
    VIEW_OWN_DASHBOARD = "view_own_dashboard"


ROLE_CAPABILITIES: dict[UserRole, frozenset[Capability]] = {
    UserRole.STUDENT: frozenset(
        {
            Capability.BROWSE_CATALOG,
            Capability.APPLY,
            Capability.MAKE_PAYMENTS,
            Capability.READ_NOTIFICATIONS,
            Capability.VIEW_OWN_DASHBOARD,
        }
    ),
    UserRole.ADMIN: frozenset(
        {
            Capability.MANAGE_USERS,
            Capability.CREATE_STAFF,
            Capability.BROWSE_CATALOG,
            Capability.MANAGE_COURSES,
            Capability.VIEW_ANY_APPLICATION,
            Capability.MANAGE_APPLICATIONS,
            Capability.ASSIGN_OFFICERS,
        }
    ),
    UserRole.CONTENT_ADMIN: frozenset(
        {
            Capability.BROWSE_ASSIGNED_CATALOG,
            Capability.DESCRIBE_COURSES,
            Capability.MANAGE_FORM_TEMPLATES,
        }
    ),
    UserRole.FACULTY: frozenset({Capability.MANAGE_STUDENT_RECORDS}),
    UserRole.VERIFICATION_ADMIN: frozenset(
        {
            Capability.CREATE_OFFICERS,
            Capability.BROWSE_CATALOG,
            Capability.VIEW_ANY_APPLICATION,
            Capability.ADMINISTER_VERIFICATION,
            Capability.ASSIGN_OFFICERS,
        }
    ),
    UserRole.VERIFICATION_OFFICER: frozenset(
        {
            Capability.VIEW_ANY_APPLICATION,
            Capability.REVIEW_APPLICATIONS,
        }
    ),
}


def capabilities_for(role: str | UserRole) -> frozenset[Capability]:
    """Return the capability set granted to a role (empty for unknown roles)."""
    try:
        return ROLE_CAPABILITIES[UserRole(role)]
    except ValueError:
        return frozenset()


def has_capability(role: str | UserRole, capability: Capability) -> bool:
    return capability in capabilities_for(role)


def authorize(identity, capability: Capability) -> None:
    """
    Ensure an identity holds a capability.

    Args:
        identity: Any object with ``id`` and ``role`` attributes
        capability: The capability the operation requires

    Raises:
        ForbiddenError: If the identity's role does not grant the capability
    """
    if not has_capability(identity.role, capability):
        logger.warning(
            f"Access denied: user {identity.id} with role '{identity.role}' "
            f"lacks capability '{capability.value}'"
        )
        raise ForbiddenError()
