# 📄 File: social_platform/modules/notifications/domain/models/notification.py
# 🧭 Purpose (Layman Explanation):
# A notice shown to a user ("Ana liked your post"), which starts unread, can be read and can be
# put away in the archive. It can point back to what caused it and expire after a while.
# 🧪 Purpose (Technical Summary):
# Notification entity with a forward-only lifecycle (UNREAD -> READ -> ARCHIVED, plus
# UNREAD -> ARCHIVED). mark_as_read only acts on UNREAD so read_at is fixed on first read;
# archive stamps archived_at and back-fills read_at. Free-form JSON metadata.
# 🔗 Dependencies:
# pydantic, enum, social_platform.shared (validators, helpers)
# 🔄 Connected Modules / Calls From:
# notification_service.py, notification_repository.py, notification_repository_impl.py

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator

from social_platform.shared.utils.helpers import as_utc, generate_uuid, utc_now
from social_platform.shared.utils.validators import require_id, require_text


class NotificationType(str, Enum):
    """What triggered the notification"""
    LIKE = "like"
    COMMENT = "comment"
    FOLLOW = "follow"
    MENTION = "mention"
    POST = "post"
    SYSTEM = "system"


class NotificationStatus(str, Enum):
    """Notification lifecycle state"""
    UNREAD = "unread"
    READ = "read"
    ARCHIVED = "archived"


class Notification(BaseModel):
    """
    Notification delivered to one user.

    There is no transition back to UNREAD, and archiving is final.
    """

    id: str = Field(default_factory=generate_uuid)
    user_id: str
    type: NotificationType
    status: NotificationStatus = NotificationStatus.UNREAD
    title: str
    message: str

    # Correlation with whatever caused the notification
    entity_id: Optional[str] = None
    entity_type: Optional[str] = None
    trigger_user_id: Optional[str] = None
    action_url: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)

    created_at: datetime = Field(default_factory=utc_now)
    read_at: Optional[datetime] = None
    archived_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None

    @field_validator("id", "user_id", mode="before")
    @classmethod
    def validate_ids(cls, v, info):
        return require_id(v, info.field_name)

    @field_validator("title", "message", mode="before")
    @classmethod
    def validate_required_text(cls, v, info):
        return require_text(v, info.field_name)

    @field_validator("expires_at")
    @classmethod
    def validate_expires_at(cls, v):
        return as_utc(v)

    @field_validator("metadata", mode="before")
    @classmethod
    def default_metadata(cls, v):
        return v or {}

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    def mark_as_read(self) -> None:
        """UNREAD -> READ; any other state is left untouched."""
        if self.status == NotificationStatus.UNREAD:
            self.status = NotificationStatus.READ
            self.read_at = utc_now()

    def archive(self) -> None:
        """Move to ARCHIVED from any state, stamping read_at if it was never read."""
        if self.status == NotificationStatus.ARCHIVED:
            return
        now = utc_now()
        self.status = NotificationStatus.ARCHIVED
        self.archived_at = now
        if self.read_at is None:
            self.read_at = now

    def is_expired(self) -> bool:
        return self.expires_at is not None and self.expires_at < utc_now()

    @property
    def is_unread(self) -> bool:
        return self.status == NotificationStatus.UNREAD

    # =========================================================================
    # METADATA
    # =========================================================================

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = value

    def get_metadata(self, key: str, default: Any = None) -> Any:
        return self.metadata.get(key, default)

    def update_action_url(self, action_url: Optional[str]) -> None:
        self.action_url = action_url or None
