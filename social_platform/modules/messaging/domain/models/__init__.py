# 📄 File: social_platform/modules/messaging/domain/models/__init__.py
# 🧭 Purpose (Layman Explanation):
# The private message data model.
# 🧪 Purpose (Technical Summary):
# Package initialization for the Message entity and MessageType enum.
# 🔗 Dependencies:
# message.py
# 🔄 Connected Modules / Calls From:
# message_service.py, repositories, infrastructure layer

from .message import Message, MessageType

__all__ = ["Message", "MessageType"]
