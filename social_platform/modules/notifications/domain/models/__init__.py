# 📄 File: social_platform/modules/notifications/domain/models/__init__.py
# 🧭 Purpose (Layman Explanation):
# The notification data model and its kinds and states.
# 🧪 Purpose (Technical Summary):
# Package initialization for the Notification entity and its enums.
# 🔗 Dependencies:
# notification.py
# 🔄 Connected Modules / Calls From:
# notification_service.py, repositories, infrastructure layer

from .notification import Notification, NotificationStatus, NotificationType

__all__ = ["Notification", "NotificationStatus", "NotificationType"]
