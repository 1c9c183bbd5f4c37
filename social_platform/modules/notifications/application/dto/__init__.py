# 📄 File: social_platform/modules/notifications/application/dto/__init__.py
# 🧭 Purpose (Layman Explanation):
# Forms for creating and listing notifications, and the badge numbers.
# 🧪 Purpose (Technical Summary):
# Notification data transfer objects.
# 🔗 Dependencies:
# pydantic
# 🔄 Connected Modules / Calls From:
# notification_service.py, transport layer

from .notification_dto import (
    BulkNotificationRequest,
    CreateNotificationRequest,
    NotificationPageDTO,
    NotificationQuery,
    NotificationStatsDTO,
)

__all__ = [
    "CreateNotificationRequest",
    "BulkNotificationRequest",
    "NotificationQuery",
    "NotificationPageDTO",
    "NotificationStatsDTO",
]
