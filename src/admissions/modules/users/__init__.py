"""
Users module - Accounts, roles, faculty profiles and student dashboards.
"""

from admissions.modules.users.models import User, UserRole

__all__ = ["User", "UserRole"]
