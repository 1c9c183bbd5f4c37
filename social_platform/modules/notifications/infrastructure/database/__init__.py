# 📄 File: social_platform/modules/notifications/infrastructure/database/__init__.py
# 🧭 Purpose (Layman Explanation):
# The database table and storage class for notifications.
# 🧪 Purpose (Technical Summary):
# SQLAlchemy ORM model and repository implementation for notifications.
# 🔗 Dependencies:
# sqlalchemy, social_platform.shared.infrastructure.database
# 🔄 Connected Modules / Calls From:
# social_platform.shared.core.dependencies, integration tests

from .models import NotificationModel
from .notification_repository_impl import NotificationRepositoryImpl

__all__ = ["NotificationModel", "NotificationRepositoryImpl"]
