# 📄 File: social_platform/modules/notifications/application/dto/notification_dto.py
# 🧭 Purpose (Layman Explanation):
# The forms used to ask for notifications to be created (for one person or many at once),
# the filters for listing them, and the summary numbers for the notification badge.
#
# 🧪 Purpose (Technical Summary):
# Notification data transfer objects: create/bulk-create requests, the list query (filters,
# sort, page), a paginated response and per-status/per-type statistics.
#
# 🔗 Dependencies:
# - pydantic for DTO validation and serialization
# - social_platform.modules.notifications.domain.models.notification (Notification, enums)
#
# 🔄 Connected Modules / Calls From:
# - notification_service.py

"""
Notification Data Transfer Objects (DTOs)

DTO Classes:
- CreateNotificationRequest: one notification for one user
- BulkNotificationRequest: the same notification fanned out to many users
- NotificationQuery: filters, sort and page for listing a user's notifications
- NotificationPageDTO: one page of notifications plus navigation metadata
- NotificationStatsDTO: counts by status and by type
"""

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from social_platform.modules.notifications.domain.models.notification import (
    Notification,
    NotificationStatus,
    NotificationType,
)


class _NotificationContent(BaseModel):
    """Fields shared by single and bulk creation."""

    type: NotificationType = Field(..., description="What triggered the notification")
    title: str = Field(..., description="Short headline", examples=["New like"])
    message: str = Field(..., description="Body text", examples=["Ana liked your post"])
    entity_id: Optional[str] = Field(default=None, description="Related entity identifier")
    entity_type: Optional[str] = Field(default=None, description="Related entity kind", examples=["Post"])
    trigger_user_id: Optional[str] = Field(default=None, description="User who caused the notification")
    action_url: Optional[str] = Field(default=None, description="Where tapping the notification leads")
    expires_at: Optional[datetime] = Field(default=None, description="Hide after this time")
    metadata: Dict[str, Any] = Field(default_factory=dict, description="Free-form extra data")


class CreateNotificationRequest(_NotificationContent):
    user_id: str = Field(..., description="Recipient")


class BulkNotificationRequest(_NotificationContent):
    user_ids: List[str] = Field(default_factory=list, description="Recipients, one notification each")


class NotificationQuery(BaseModel):
    """
    Listing options for a user's notifications.

    ``page_size`` is normalized like every other listing: non-positive
    values select the default and large values are capped.
    """

    type: Optional[NotificationType] = Field(default=None, description="Only this type")
    status: Optional[NotificationStatus] = Field(default=None, description="Only this status")
    include_expired: bool = Field(default=False, description="Include notifications past expiry")
    sort_by: Literal["created_at", "read_at", "type"] = Field(default="created_at")
    sort_descending: bool = Field(default=True)
    page: int = Field(default=1, description="1-based page number")
    page_size: int = Field(default=20, description="Notifications per page")


class NotificationPageDTO(BaseModel):
    """Paginated notification list response DTO."""

    notifications: List[Notification] = Field(default_factory=list)
    total_count: int = Field(default=0, ge=0)
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=20, ge=1)
    total_pages: int = Field(default=0, ge=0)
    has_next: bool = Field(default=False)
    has_previous: bool = Field(default=False)


class NotificationStatsDTO(BaseModel):
    """Notification counters for one user."""

    user_id: str
    total_count: int = Field(default=0, ge=0)
    unread_count: int = Field(default=0, ge=0)
    read_count: int = Field(default=0, ge=0)
    archived_count: int = Field(default=0, ge=0)
    count_by_type: Dict[NotificationType, int] = Field(default_factory=dict)
