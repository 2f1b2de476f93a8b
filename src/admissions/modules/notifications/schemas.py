"""
Notification Schemas
"""

from datetime import datetime

from pydantic import Field

from admissions.modules.shared.schemas import CamelModel


class FieldComment(CamelModel):
    comment: str
    document_type: str | None = None


class Notification(CamelModel):
    """Officer feedback on one application."""

    application_id: str
    course_title: str
    officer_name: str
    general_comment: str = ""
    field_comments: dict[str, FieldComment] = Field(default_factory=dict)
    read: bool = False
    updated_at: datetime


class NotificationList(CamelModel):
    notifications: list[Notification]
    unread_count: int
