# 📄 File: social_platform/modules/messaging/domain/services/__init__.py
# 🧭 Purpose (Layman Explanation):
# The business logic for sending and managing private messages.
# 🧪 Purpose (Technical Summary):
# Package initialization for the messaging domain service.
# 🔗 Dependencies:
# message_service.py
# 🔄 Connected Modules / Calls From:
# social_platform.shared.core.dependencies

from .message_service import MessageService

__all__ = ["MessageService"]
