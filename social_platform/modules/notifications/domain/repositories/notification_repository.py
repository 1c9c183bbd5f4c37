# 📄 File: social_platform/modules/notifications/domain/repositories/notification_repository.py
# 🧭 Purpose (Layman Explanation):
# How notifications are stored, filtered for the notification screen, marked read in bulk
# and cleaned up once they are expired or archived for a long time.
# 🧪 Purpose (Technical Summary):
# Repository interface for Notification rows: batch insert (fan-out on write), filtered and
# sorted pages, per-status/per-type statistics, bulk status transitions and retention cleanup.
# 🔗 Dependencies:
# Domain models (Notification), shared Repository base, typing, abc
# 🔄 Connected Modules / Calls From:
# notification_service.py, notification_repository_impl.py

from abc import abstractmethod
from datetime import datetime
from typing import Dict, List, Optional, Sequence

from social_platform.modules.notifications.domain.models.notification import (
    Notification,
    NotificationStatus,
    NotificationType,
)
from social_platform.shared.core.repository import Repository


class NotificationRepository(Repository[Notification]):
    """
    Repository interface for Notification entity data access operations.

    Implementation Notes:
    - ``create_many`` inserts one row per notification in the current unit of work
    - Bulk transitions return the number of rows they changed
    """

    @abstractmethod
    async def create_many(self, notifications: Sequence[Notification]) -> List[Notification]:
        """
        Stage several notifications for insertion as one batch.

        Args:
            notifications: Notifications to insert

        Returns:
            The staged notifications
        """
        pass

    @abstractmethod
    async def get_by_user(
        self,
        user_id: str,
        notification_type: Optional[NotificationType] = None,
        status: Optional[NotificationStatus] = None,
        include_expired: bool = False,
        sort_by: str = "created_at",
        sort_descending: bool = True,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Notification]:
        """
        Get a filtered, sorted page of a user's notifications.

        Args:
            user_id: Notification owner
            notification_type: Only this type when given
            status: Only this status when given
            include_expired: Include notifications past their expiry
            sort_by: ``created_at``, ``read_at`` or ``type``
            sort_descending: Sort direction
            limit: Maximum number of notifications to return
            offset: Number of notifications to skip
        """
        pass

    @abstractmethod
    async def count_by_user(
        self,
        user_id: str,
        notification_type: Optional[NotificationType] = None,
        status: Optional[NotificationStatus] = None,
        include_expired: bool = False,
    ) -> int:
        """Count matching ``get_by_user`` without paging."""
        pass

    @abstractmethod
    async def count_by_status(self, user_id: str) -> Dict[NotificationStatus, int]:
        pass

    @abstractmethod
    async def count_by_type(self, user_id: str) -> Dict[NotificationType, int]:
        pass

    @abstractmethod
    async def mark_all_as_read(
        self,
        user_id: str,
        read_at: datetime,
        notification_type: Optional[NotificationType] = None,
        older_than: Optional[datetime] = None,
    ) -> int:
        """Move every UNREAD notification of a user (optionally filtered) to READ."""
        pass

    @abstractmethod
    async def archive_all(
        self,
        user_id: str,
        archived_at: datetime,
        notification_type: Optional[NotificationType] = None,
    ) -> int:
        """Move every non-archived notification of a user to ARCHIVED, stamping missing read_at."""
        pass

    @abstractmethod
    async def delete_expired(self, now: datetime) -> int:
        pass

    @abstractmethod
    async def delete_archived_before(self, cutoff: datetime) -> int:
        """Delete ARCHIVED notifications archived before ``cutoff``."""
        pass
