# 📄 File: social_platform/modules/messaging/infrastructure/database/__init__.py
# 🧭 Purpose (Layman Explanation):
# The database table and storage class for private messages.
# 🧪 Purpose (Technical Summary):
# SQLAlchemy ORM model and repository implementation for messages.
# 🔗 Dependencies:
# sqlalchemy, social_platform.shared.infrastructure.database
# 🔄 Connected Modules / Calls From:
# social_platform.shared.core.dependencies, integration tests

from .models import MessageModel
from .message_repository_impl import MessageRepositoryImpl

__all__ = ["MessageModel", "MessageRepositoryImpl"]
