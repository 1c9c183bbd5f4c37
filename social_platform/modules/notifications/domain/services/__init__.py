# 📄 File: social_platform/modules/notifications/domain/services/__init__.py
# 🧭 Purpose (Layman Explanation):
# The business logic for creating and managing notifications.
# 🧪 Purpose (Technical Summary):
# Package initialization for the notification domain service.
# 🔗 Dependencies:
# notification_service.py
# 🔄 Connected Modules / Calls From:
# like, comment and user services; social_platform.shared.core.dependencies

from .notification_service import NotificationService

__all__ = ["NotificationService"]
