# 📄 File: social_platform/modules/notifications/infrastructure/database/notification_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# This file stores notifications, fetches the right ones for the notification screen, marks
# many of them read at once and cleans out old ones.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy implementation of NotificationRepository: batch insert for fan-out, dynamic
# filtering/sorting, grouped counts for statistics, bulk UPDATE transitions and retention DELETEs.
#
# 🔗 Dependencies:
# - social_platform.modules.notifications.domain (Notification, enums, NotificationRepository)
# - social_platform.modules.notifications.infrastructure.database.models (NotificationModel)
# - social_platform.shared.infrastructure.database.repository (SQLAlchemyRepository)
#
# 🔄 Connected Modules / Calls From:
# - notification_service.py

"""
Notification Repository Implementation

Bulk transitions run as UPDATE statements with
``synchronize_session="evaluate"`` so rows already loaded in the session
see the new status.
"""

import logging
from datetime import datetime
from typing import Dict, List, Optional, Sequence

from sqlalchemy import delete, func, or_, select, update

from social_platform.modules.notifications.domain.models.notification import (
    Notification,
    NotificationStatus,
    NotificationType,
)
from social_platform.modules.notifications.domain.repositories.notification_repository import NotificationRepository
from social_platform.modules.notifications.infrastructure.database.models import NotificationModel
from social_platform.shared.core.exceptions import NotFoundError, ValidationError
from social_platform.shared.infrastructure.database.repository import SQLAlchemyRepository
from social_platform.shared.utils.helpers import utc_now

logger = logging.getLogger(__name__)

_SORT_COLUMNS = {
    "created_at": NotificationModel.created_at,
    "read_at": NotificationModel.read_at,
    "type": NotificationModel.type,
}


class NotificationRepositoryImpl(SQLAlchemyRepository, NotificationRepository):
    """
    SQLAlchemy implementation of the NotificationRepository interface.
    """

    resource_type = "Notification"

    # =========================================================================
    # CRUD
    # =========================================================================

    async def create(self, notification: Notification) -> Notification:
        notification_model = self._domain_to_model(notification)
        await self._add(notification_model)
        logger.debug(f"Created notification {notification.id} for user {notification.user_id}")
        return self._model_to_domain(notification_model)

    async def create_many(self, notifications: Sequence[Notification]) -> List[Notification]:
        models = [self._domain_to_model(notification) for notification in notifications]
        await self._add_all(models)
        logger.info(f"Created {len(models)} notifications in one batch")
        return [self._model_to_domain(model) for model in models]

    async def get_by_id(self, notification_id: str) -> Optional[Notification]:
        notification_model = await self._get(NotificationModel, notification_id)
        return self._model_to_domain(notification_model) if notification_model else None

    async def update(self, notification: Notification) -> Notification:
        notification_model = await self._get(NotificationModel, notification.id)
        if notification_model is None:
            raise NotFoundError(resource_type=self.resource_type, resource_id=notification.id)

        notification_model.status = notification.status.value
        notification_model.action_url = notification.action_url
        notification_model.metadata_json = dict(notification.metadata)
        notification_model.read_at = notification.read_at
        notification_model.archived_at = notification.archived_at
        notification_model.expires_at = notification.expires_at
        await self._flush("update")
        self._record_changes()
        return self._model_to_domain(notification_model)

    async def delete(self, notification_id: str) -> bool:
        notification_model = await self._get(NotificationModel, notification_id)
        if notification_model is None:
            return False
        await self._delete_model(notification_model)
        return True

    # =========================================================================
    # QUERIES
    # =========================================================================

    def _filters(
        self,
        user_id: str,
        notification_type: Optional[NotificationType],
        status: Optional[NotificationStatus],
        include_expired: bool,
    ) -> list:
        criteria = [NotificationModel.user_id == user_id]
        if notification_type is not None:
            criteria.append(NotificationModel.type == NotificationType(notification_type).value)
        if status is not None:
            criteria.append(NotificationModel.status == NotificationStatus(status).value)
        if not include_expired:
            criteria.append(or_(NotificationModel.expires_at.is_(None), NotificationModel.expires_at > utc_now()))
        return criteria

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
        sort_column = _SORT_COLUMNS.get(sort_by)
        if sort_column is None:
            raise ValidationError(
                f"Cannot sort notifications by '{sort_by}'",
                field="sort_by",
                value=sort_by,
                constraint=f"one_of_{'_'.join(_SORT_COLUMNS)}",
            )

        order = sort_column.desc() if sort_descending else sort_column.asc()
        stmt = (
            select(NotificationModel)
            .where(*self._filters(user_id, notification_type, status, include_expired))
            .order_by(order, NotificationModel.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        models = await self._scalars(stmt, "get_by_user")
        return [self._model_to_domain(model) for model in models]

    async def count_by_user(
        self,
        user_id: str,
        notification_type: Optional[NotificationType] = None,
        status: Optional[NotificationStatus] = None,
        include_expired: bool = False,
    ) -> int:
        return await self._count(
            NotificationModel,
            *self._filters(user_id, notification_type, status, include_expired),
        )

    async def count_by_status(self, user_id: str) -> Dict[NotificationStatus, int]:
        stmt = (
            select(NotificationModel.status, func.count())
            .where(NotificationModel.user_id == user_id)
            .group_by(NotificationModel.status)
        )
        counts = {status: 0 for status in NotificationStatus}
        for status, count in await self._rows(stmt, "count_by_status"):
            counts[NotificationStatus(status)] = count
        return counts

    async def count_by_type(self, user_id: str) -> Dict[NotificationType, int]:
        stmt = (
            select(NotificationModel.type, func.count())
            .where(NotificationModel.user_id == user_id)
            .group_by(NotificationModel.type)
        )
        return {NotificationType(row_type): count for row_type, count in await self._rows(stmt, "count_by_type")}

    # =========================================================================
    # BULK TRANSITIONS & CLEANUP
    # =========================================================================

    async def mark_all_as_read(
        self,
        user_id: str,
        read_at: datetime,
        notification_type: Optional[NotificationType] = None,
        older_than: Optional[datetime] = None,
    ) -> int:
        criteria = [
            NotificationModel.user_id == user_id,
            NotificationModel.status == NotificationStatus.UNREAD.value,
        ]
        if notification_type is not None:
            criteria.append(NotificationModel.type == NotificationType(notification_type).value)
        if older_than is not None:
            criteria.append(NotificationModel.created_at < older_than)

        stmt = (
            update(NotificationModel)
            .where(*criteria)
            .values(status=NotificationStatus.READ.value, read_at=read_at)
            .execution_options(synchronize_session="evaluate")
        )
        return await self._execute_write(stmt, "mark_all_as_read")

    async def archive_all(
        self,
        user_id: str,
        archived_at: datetime,
        notification_type: Optional[NotificationType] = None,
    ) -> int:
        criteria = [
            NotificationModel.user_id == user_id,
            NotificationModel.status != NotificationStatus.ARCHIVED.value,
        ]
        if notification_type is not None:
            criteria.append(NotificationModel.type == NotificationType(notification_type).value)

        # Back-fill read_at first so both statements only assign plain values
        backfill = (
            update(NotificationModel)
            .where(*criteria, NotificationModel.read_at.is_(None))
            .values(read_at=archived_at)
            .execution_options(synchronize_session="evaluate")
        )
        await self._execute_write(backfill, "archive_all", record=False)

        stmt = (
            update(NotificationModel)
            .where(*criteria)
            .values(status=NotificationStatus.ARCHIVED.value, archived_at=archived_at)
            .execution_options(synchronize_session="evaluate")
        )
        return await self._execute_write(stmt, "archive_all")

    async def delete_expired(self, now: datetime) -> int:
        stmt = delete(NotificationModel).where(
            NotificationModel.expires_at.is_not(None),
            NotificationModel.expires_at < now,
        )
        return await self._execute_write(stmt, "delete_expired")

    async def delete_archived_before(self, cutoff: datetime) -> int:
        stmt = delete(NotificationModel).where(
            NotificationModel.status == NotificationStatus.ARCHIVED.value,
            NotificationModel.archived_at < cutoff,
        )
        return await self._execute_write(stmt, "delete_archived_before")

    # =========================================================================
    # MAPPING
    # =========================================================================

    @staticmethod
    def _domain_to_model(notification: Notification) -> NotificationModel:
        return NotificationModel(
            id=notification.id,
            user_id=notification.user_id,
            type=notification.type.value,
            status=notification.status.value,
            title=notification.title,
            message=notification.message,
            entity_id=notification.entity_id,
            entity_type=notification.entity_type,
            trigger_user_id=notification.trigger_user_id,
            action_url=notification.action_url,
            metadata_json=dict(notification.metadata),
            created_at=notification.created_at,
            read_at=notification.read_at,
            archived_at=notification.archived_at,
            expires_at=notification.expires_at,
        )

    @staticmethod
    def _model_to_domain(notification_model: NotificationModel) -> Notification:
        return Notification(
            id=str(notification_model.id),
            user_id=str(notification_model.user_id),
            type=NotificationType(notification_model.type),
            status=NotificationStatus(notification_model.status),
            title=notification_model.title,
            message=notification_model.message,
            entity_id=notification_model.entity_id,
            entity_type=notification_model.entity_type,
            trigger_user_id=str(notification_model.trigger_user_id) if notification_model.trigger_user_id else None,
            action_url=notification_model.action_url,
            metadata=dict(notification_model.metadata_json or {}),
            created_at=notification_model.created_at,
            read_at=notification_model.read_at,
            archived_at=notification_model.archived_at,
            expires_at=notification_model.expires_at,
        )
