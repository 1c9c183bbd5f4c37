# 📄 File: social_platform/modules/messaging/domain/repositories/message_repository.py
# 🧭 Purpose (Layman Explanation):
# How private messages are saved and read back as a conversation between two people.
# 🧪 Purpose (Technical Summary):
# Repository interface for Message entities; conversation pages exclude soft-deleted messages.
# 🔗 Dependencies:
# Domain models (Message), shared Repository base, typing, abc
# 🔄 Connected Modules / Calls From:
# message_service.py, message_repository_impl.py

from abc import abstractmethod
from typing import List

from social_platform.modules.messaging.domain.models.message import Message
from social_platform.shared.core.repository import Repository


class MessageRepository(Repository[Message]):
    """Repository interface for direct messages."""

    @abstractmethod
    async def get_conversation(self, user_a_id: str, user_b_id: str, limit: int, offset: int) -> List[Message]:
        """
        Messages exchanged between two users in either direction.

        Soft-deleted messages are excluded; newest first.
        """
        pass

    @abstractmethod
    async def count_unread(self, recipient_id: str) -> int:
        """Unread, non-deleted messages addressed to ``recipient_id``."""
        pass
