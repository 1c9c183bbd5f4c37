# 📄 File: social_platform/modules/messaging/domain/repositories/__init__.py
# 🧭 Purpose (Layman Explanation):
# The promise the message storage makes.
# 🧪 Purpose (Technical Summary):
# Abstract repository contract for messages.
# 🔗 Dependencies:
# social_platform.shared.core.repository
# 🔄 Connected Modules / Calls From:
# message_service.py, message_repository_impl.py

from .message_repository import MessageRepository

__all__ = ["MessageRepository"]
