# 📄 File: social_platform/modules/notifications/domain/repositories/__init__.py
# 🧭 Purpose (Layman Explanation):
# The promise the notification storage makes.
# 🧪 Purpose (Technical Summary):
# Abstract repository contract for notifications.
# 🔗 Dependencies:
# social_platform.shared.core.repository
# 🔄 Connected Modules / Calls From:
# notification_service.py, notification_repository_impl.py

from .notification_repository import NotificationRepository

__all__ = ["NotificationRepository"]
