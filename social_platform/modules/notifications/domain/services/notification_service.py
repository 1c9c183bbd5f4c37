# 📄 File: social_platform/modules/notifications/domain/services/notification_service.py
# 🧭 Purpose (Layman Explanation):
# Creates the little alerts people see ("Ana liked your post"), sends the same alert to many
# people at once, lets users read, archive and delete them, and clears out old ones.
#
# 🧪 Purpose (Technical Summary):
# Notification domain service: single and fan-out-on-write bulk creation, owner-checked lifecycle
# transitions, filtered/sorted/paginated listing, statistics, bulk read/archive, retention cleanup
# and predefined creators used by the like, comment and follow flows.
#
# 🔗 Dependencies:
# - social_platform.modules.notifications.domain (Notification, enums, NotificationRepository)
# - social_platform.modules.notifications.application.dto (requests, query, page, stats)
# - social_platform.modules.user_management.domain.repositories.user_repository (trigger user names)
# - social_platform.shared (exceptions, pagination, settings, validators)
#
# 🔄 Connected Modules / Calls From:
# - like_service.py, comment_service.py, user_service.py (predefined creators)
# - social_platform.shared.core.dependencies (ServiceContainer)

import logging
import math
from datetime import datetime, timedelta
from typing import List, Optional

from social_platform.modules.notifications.application.dto.notification_dto import (
    BulkNotificationRequest,
    CreateNotificationRequest,
    NotificationPageDTO,
    NotificationQuery,
    NotificationStatsDTO,
)
from social_platform.modules.notifications.domain.models.notification import (
    Notification,
    NotificationStatus,
    NotificationType,
)
from social_platform.modules.notifications.domain.repositories.notification_repository import NotificationRepository
from social_platform.modules.user_management.domain.repositories.user_repository import UserRepository
from social_platform.shared.config.settings import get_settings
from social_platform.shared.core.exceptions import AuthorizationError, NotFoundError
from social_platform.shared.core.pagination import normalize_pagination, page_to_offset
from social_platform.shared.utils.helpers import utc_now
from social_platform.shared.utils.validators import require_id

logger = logging.getLogger(__name__)

_ANONYMOUS_NAME = "Someone"


class NotificationService:
    """
    Domain service for notification business logic.

    Creation methods accept ``commit``. Other services pass ``commit=False``
    to stage a notification in their own unit of work, so the notification
    and the action that caused it are committed together.
    """

    def __init__(
        self,
        notification_repository: NotificationRepository,
        user_repository: Optional[UserRepository] = None,
    ):
        self.notification_repository = notification_repository
        self.user_repository = user_repository

    # =========================================================================
    # CREATION
    # =========================================================================

    async def create_notification(self, request: CreateNotificationRequest, commit: bool = True) -> Notification:
        """
        Create one notification.

        Args:
            request: Recipient and notification content
            commit: Commit immediately; False leaves it staged in the caller's unit of work

        Returns:
            Notification: Created notification

        Raises:
            ValidationError: If the recipient, title or message is missing
        """
        notification = Notification(
            user_id=request.user_id,
            type=request.type,
            title=request.title,
            message=request.message,
            entity_id=request.entity_id,
            entity_type=request.entity_type,
            trigger_user_id=request.trigger_user_id,
            action_url=request.action_url,
            expires_at=request.expires_at,
            metadata=dict(request.metadata),
        )

        created = await self.notification_repository.create(notification)
        if commit:
            await self.notification_repository.save_changes()

        logger.info(f"Created {created.type.value} notification {created.id} for user {created.user_id}")
        return created

    async def create_bulk_notification(self, request: BulkNotificationRequest, commit: bool = True) -> List[Notification]:
        """
        Fan a notification out to many users, one row per recipient.

        An empty recipient list returns an empty list without touching storage.

        Returns:
            List[Notification]: Created notifications in recipient order
        """
        if not request.user_ids:
            logger.debug("Bulk notification requested with no recipients")
            return []

        notifications = [
            Notification(
                user_id=user_id,
                type=request.type,
                title=request.title,
                message=request.message,
                entity_id=request.entity_id,
                entity_type=request.entity_type,
                trigger_user_id=request.trigger_user_id,
                action_url=request.action_url,
                expires_at=request.expires_at,
                metadata=dict(request.metadata),
            )
            for user_id in request.user_ids
        ]

        created = await self.notification_repository.create_many(notifications)
        if commit:
            await self.notification_repository.save_changes()

        logger.info(f"Created {len(created)} {request.type.value} notifications in bulk")
        return created

    # =========================================================================
    # RETRIEVAL
    # =========================================================================

    async def get_notification(self, notification_id: str) -> Optional[Notification]:
        require_id(notification_id, "notification_id")
        return await self.notification_repository.get_by_id(notification_id)

    async def get_user_notifications(
        self,
        user_id: str,
        query: Optional[NotificationQuery] = None,
    ) -> NotificationPageDTO:
        """
        List a user's notifications with filters, sorting and pagination.

        Args:
            user_id: Notification owner
            query: Filters, sort and page; defaults list newest unexpired first

        Returns:
            NotificationPageDTO: Page of notifications with navigation metadata
        """
        require_id(user_id, "user_id")
        query = query or NotificationQuery()

        page_size = normalize_pagination(query.page_size, 0).limit
        page = max(query.page, 1)

        notifications = await self.notification_repository.get_by_user(
            user_id,
            notification_type=query.type,
            status=query.status,
            include_expired=query.include_expired,
            sort_by=query.sort_by,
            sort_descending=query.sort_descending,
            limit=page_size,
            offset=page_to_offset(page, page_size),
        )
        total_count = await self.notification_repository.count_by_user(
            user_id,
            notification_type=query.type,
            status=query.status,
            include_expired=query.include_expired,
        )

        total_pages = math.ceil(total_count / page_size) if total_count else 0
        logger.debug(f"Listed {len(notifications)} of {total_count} notifications for user {user_id}")
        return NotificationPageDTO(
            notifications=notifications,
            total_count=total_count,
            page=page,
            page_size=page_size,
            total_pages=total_pages,
            has_next=page < total_pages,
            has_previous=page > 1,
        )

    async def get_unread_notifications(self, user_id: str, limit: int = 20, offset: int = 0) -> List[Notification]:
        require_id(user_id, "user_id")
        page = normalize_pagination(limit, offset)
        return await self.notification_repository.get_by_user(
            user_id,
            status=NotificationStatus.UNREAD,
            limit=page.limit,
            offset=page.offset,
        )

    async def get_unread_count(self, user_id: str) -> int:
        require_id(user_id, "user_id")
        return await self.notification_repository.count_by_user(user_id, status=NotificationStatus.UNREAD)

    async def get_user_notification_stats(self, user_id: str) -> NotificationStatsDTO:
        """Counts by status and by type for one user, expired notifications included."""
        require_id(user_id, "user_id")
        by_status = await self.notification_repository.count_by_status(user_id)
        by_type = await self.notification_repository.count_by_type(user_id)

        return NotificationStatsDTO(
            user_id=user_id,
            total_count=sum(by_status.values()),
            unread_count=by_status.get(NotificationStatus.UNREAD, 0),
            read_count=by_status.get(NotificationStatus.READ, 0),
            archived_count=by_status.get(NotificationStatus.ARCHIVED, 0),
            count_by_type=by_type,
        )

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    async def _get_owned_notification(self, notification_id: str, user_id: str, action: str) -> Notification:
        require_id(notification_id, "notification_id")
        require_id(user_id, "user_id")

        notification = await self.notification_repository.get_by_id(notification_id)
        if notification is None:
            raise NotFoundError(resource_type="Notification", resource_id=notification_id, field="notification_id")

        if notification.user_id != user_id:
            logger.warning(f"User {user_id} attempted to {action} notification {notification_id} owned by another user")
            raise AuthorizationError(
                f"You can only {action} your own notifications",
                resource_type="Notification",
                resource_id=notification_id,
                required_action=action,
                user_id=user_id,
            )
        return notification

    async def mark_as_read(self, notification_id: str, user_id: str) -> Notification:
        """Mark one notification read; the first read time is kept on repeat calls."""
        notification = await self._get_owned_notification(notification_id, user_id, "read")
        notification.mark_as_read()

        updated = await self.notification_repository.update(notification)
        await self.notification_repository.save_changes()
        logger.debug(f"Notification {notification_id} marked as read")
        return updated

    async def archive(self, notification_id: str, user_id: str) -> Notification:
        notification = await self._get_owned_notification(notification_id, user_id, "archive")
        notification.archive()

        updated = await self.notification_repository.update(notification)
        await self.notification_repository.save_changes()
        logger.debug(f"Notification {notification_id} archived")
        return updated

    async def delete_notification(self, notification_id: str, user_id: str) -> bool:
        """
        Delete a notification owned by ``user_id``.

        Raises:
            NotFoundError: If the notification does not exist
            AuthorizationError: If it belongs to another user
        """
        await self._get_owned_notification(notification_id, user_id, "delete")
        await self.notification_repository.delete(notification_id)
        await self.notification_repository.save_changes()
        logger.info(f"Notification {notification_id} deleted by user {user_id}")
        return True

    async def mark_all_as_read(
        self,
        user_id: str,
        notification_type: Optional[NotificationType] = None,
        older_than: Optional[datetime] = None,
    ) -> int:
        """
        Mark every unread notification of a user as read.

        Args:
            user_id: Notification owner
            notification_type: Restrict to one type
            older_than: Restrict to notifications created before this time

        Returns:
            int: Number of notifications marked
        """
        require_id(user_id, "user_id")
        marked = await self.notification_repository.mark_all_as_read(
            user_id,
            utc_now(),
            notification_type=notification_type,
            older_than=older_than,
        )
        await self.notification_repository.save_changes()
        logger.info(f"Marked {marked} notifications as read for user {user_id}")
        return marked

    async def archive_all(self, user_id: str, notification_type: Optional[NotificationType] = None) -> int:
        require_id(user_id, "user_id")
        archived = await self.notification_repository.archive_all(
            user_id,
            utc_now(),
            notification_type=notification_type,
        )
        await self.notification_repository.save_changes()
        logger.info(f"Archived {archived} notifications for user {user_id}")
        return archived

    # =========================================================================
    # CLEANUP
    # =========================================================================

    async def cleanup_expired_notifications(self) -> int:
        deleted = await self.notification_repository.delete_expired(utc_now())
        await self.notification_repository.save_changes()
        logger.info(f"Deleted {deleted} expired notifications")
        return deleted

    async def cleanup_old_archived_notifications(self, days: Optional[int] = None) -> int:
        """
        Delete notifications archived more than ``days`` ago.

        Args:
            days: Retention window, NOTIFICATION_ARCHIVE_RETENTION_DAYS when omitted
        """
        if days is None:
            days = get_settings().NOTIFICATION_ARCHIVE_RETENTION_DAYS
        cutoff = utc_now() - timedelta(days=days)

        deleted = await self.notification_repository.delete_archived_before(cutoff)
        await self.notification_repository.save_changes()
        logger.info(f"Deleted {deleted} notifications archived before {cutoff.isoformat()}")
        return deleted

    # =========================================================================
    # PREDEFINED CREATORS
    # =========================================================================

    async def _display_name(self, user_id: str) -> str:
        if self.user_repository is None:
            return _ANONYMOUS_NAME
        user = await self.user_repository.get_by_id(user_id)
        return user.display_name if user else _ANONYMOUS_NAME

    async def create_like_notification(
        self,
        user_id: str,
        post_id: str,
        trigger_user_id: str,
        commit: bool = True,
    ) -> Notification:
        name = await self._display_name(trigger_user_id)
        return await self.create_notification(
            CreateNotificationRequest(
                user_id=user_id,
                type=NotificationType.LIKE,
                title="New Like",
                message=f"{name} liked your post",
                entity_id=post_id,
                entity_type="Post",
                trigger_user_id=trigger_user_id,
                action_url=f"/posts/{post_id}",
            ),
            commit=commit,
        )

    async def create_comment_notification(
        self,
        user_id: str,
        post_id: str,
        comment_id: str,
        trigger_user_id: str,
        commit: bool = True,
    ) -> Notification:
        name = await self._display_name(trigger_user_id)
        return await self.create_notification(
            CreateNotificationRequest(
                user_id=user_id,
                type=NotificationType.COMMENT,
                title="New Comment",
                message=f"{name} commented on your post",
                entity_id=comment_id,
                entity_type="Comment",
                trigger_user_id=trigger_user_id,
                action_url=f"/posts/{post_id}#comment-{comment_id}",
                metadata={"post_id": post_id},
            ),
            commit=commit,
        )

    async def create_follow_notification(
        self,
        user_id: str,
        trigger_user_id: str,
        commit: bool = True,
    ) -> Notification:
        name = await self._display_name(trigger_user_id)
        return await self.create_notification(
            CreateNotificationRequest(
                user_id=user_id,
                type=NotificationType.FOLLOW,
                title="New Follower",
                message=f"{name} started following you",
                entity_id=trigger_user_id,
                entity_type="User",
                trigger_user_id=trigger_user_id,
                action_url=f"/users/{trigger_user_id}",
            ),
            commit=commit,
        )

    async def create_follow_request_notification(
        self,
        user_id: str,
        trigger_user_id: str,
        commit: bool = True,
    ) -> Notification:
        name = await self._display_name(trigger_user_id)
        return await self.create_notification(
            CreateNotificationRequest(
                user_id=user_id,
                type=NotificationType.FOLLOW,
                title="New Follow Request",
                message=f"{name} wants to follow you",
                entity_id=trigger_user_id,
                entity_type="User",
                trigger_user_id=trigger_user_id,
                action_url="/follow-requests",
                metadata={"pending": True},
            ),
            commit=commit,
        )

    async def create_mention_notification(
        self,
        user_id: str,
        post_id: str,
        trigger_user_id: str,
        commit: bool = True,
    ) -> Notification:
        name = await self._display_name(trigger_user_id)
        return await self.create_notification(
            CreateNotificationRequest(
                user_id=user_id,
                type=NotificationType.MENTION,
                title="You were mentioned",
                message=f"{name} mentioned you in a post",
                entity_id=post_id,
                entity_type="Post",
                trigger_user_id=trigger_user_id,
                action_url=f"/posts/{post_id}",
            ),
            commit=commit,
        )
