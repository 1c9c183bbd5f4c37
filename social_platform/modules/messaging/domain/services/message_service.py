# 📄 File: social_platform/modules/messaging/domain/services/message_service.py
# 🧭 Purpose (Layman Explanation):
# Private messages between two people: sending (with an optional file), editing what you sent,
# marking received messages as read, deleting your own messages and showing a conversation.
#
# 🧪 Purpose (Technical Summary):
# Message domain service. Sender-only edit/delete (soft delete), recipient-only read receipts,
# paginated two-party conversation listing that hides deleted messages, unread counter.
#
# 🔗 Dependencies:
# - social_platform.modules.messaging.domain (Message, MessageType, MessageRepository)
# - social_platform.modules.user_management.domain.repositories.user_repository (participant lookup)
# - social_platform.shared (exceptions, pagination, validators)
#
# 🔄 Connected Modules / Calls From:
# - social_platform.shared.core.dependencies (ServiceContainer)

import logging
from typing import List, Optional

from social_platform.modules.messaging.domain.models.message import Message, MessageType
from social_platform.modules.messaging.domain.repositories.message_repository import MessageRepository
from social_platform.modules.user_management.domain.repositories.user_repository import UserRepository
from social_platform.shared.core.exceptions import AuthorizationError, NotFoundError
from social_platform.shared.core.pagination import normalize_pagination
from social_platform.shared.utils.validators import ensure_different, require_id

logger = logging.getLogger(__name__)


class MessageService:
    """
    Domain service for direct messages.

    Business rules:
    - Users cannot message themselves
    - Only the sender edits or deletes a message; deleting hides it from both sides
    - Only the recipient marks a message as read; the first read time is kept
    """

    def __init__(self, message_repository: MessageRepository, user_repository: UserRepository):
        self.message_repository = message_repository
        self.user_repository = user_repository

    async def send_message(
        self,
        sender_id: str,
        recipient_id: str,
        content: Optional[str],
        message_type: MessageType = MessageType.TEXT,
        attachment_url: Optional[str] = None,
        attachment_file_name: Optional[str] = None,
        attachment_file_size: Optional[int] = None,
    ) -> Message:
        """
        Send a direct message.

        Args:
            sender_id: Sending user
            recipient_id: Receiving user
            content: Message text; required for TEXT messages
            message_type: Payload kind
            attachment_url: Attached file URL; name and size must come with it
            attachment_file_name: Attached file name
            attachment_file_size: Attached file size in bytes

        Raises:
            ValidationError: If ids are blank or equal, or content/attachment is invalid
            NotFoundError: If either user does not exist
        """
        logger.info(f"User {sender_id} sending {MessageType(message_type).value} message to {recipient_id}")

        # 1. Validate input
        require_id(sender_id, "sender_id")
        require_id(recipient_id, "recipient_id")
        ensure_different(sender_id, recipient_id, "recipient_id", "Sender and recipient cannot be the same")

        message = Message.create(sender_id, recipient_id, content, message_type)
        if attachment_url is not None or attachment_file_name is not None or attachment_file_size is not None:
            message.set_attachment(attachment_url, attachment_file_name, attachment_file_size)

        # 2. Load participants
        if await self.user_repository.get_by_id(sender_id) is None:
            raise NotFoundError("Sender not found", resource_type="User", resource_id=sender_id, field="sender_id")
        if await self.user_repository.get_by_id(recipient_id) is None:
            raise NotFoundError("Recipient not found", resource_type="User", resource_id=recipient_id, field="recipient_id")

        # 3. Persist
        created = await self.message_repository.create(message)
        await self.message_repository.save_changes()

        logger.info(f"Successfully sent message {created.id} from {sender_id} to {recipient_id}")
        return created

    async def _get_message(self, message_id: str) -> Message:
        require_id(message_id, "message_id")
        message = await self.message_repository.get_by_id(message_id)
        if message is None or message.is_deleted:
            raise NotFoundError(resource_type="Message", resource_id=message_id, field="message_id")
        return message

    @staticmethod
    def _deny(message: Message, user_id: str, action: str, role: str) -> AuthorizationError:
        logger.warning(f"User {user_id} attempted to {action} message {message.id} but is not its {role}")
        return AuthorizationError(
            f"Only the {role} can {action} this message",
            resource_type="Message",
            resource_id=message.id,
            required_action=action,
            user_id=user_id,
        )

    async def edit_message(self, message_id: str, sender_id: str, content: str) -> Message:
        require_id(sender_id, "sender_id")
        message = await self._get_message(message_id)
        if message.sender_id != sender_id:
            raise self._deny(message, sender_id, "edit", "sender")

        message.update_content(content)
        updated = await self.message_repository.update(message)
        await self.message_repository.save_changes()
        logger.info(f"Message {message_id} edited by {sender_id}")
        return updated

    async def mark_as_read(self, message_id: str, recipient_id: str) -> Message:
        """Mark a received message as read; repeated calls keep the first read time."""
        require_id(recipient_id, "recipient_id")
        message = await self._get_message(message_id)
        if message.recipient_id != recipient_id:
            raise self._deny(message, recipient_id, "read", "recipient")

        if message.is_read:
            return message

        message.mark_as_read()
        updated = await self.message_repository.update(message)
        await self.message_repository.save_changes()
        logger.debug(f"Message {message_id} marked as read")
        return updated

    async def delete_message(self, message_id: str, sender_id: str) -> bool:
        """Soft-delete a sent message."""
        require_id(sender_id, "sender_id")
        message = await self._get_message(message_id)
        if message.sender_id != sender_id:
            raise self._deny(message, sender_id, "delete", "sender")

        message.delete()
        await self.message_repository.update(message)
        await self.message_repository.save_changes()
        logger.info(f"Message {message_id} deleted by {sender_id}")
        return True

    async def get_conversation(
        self,
        user_a_id: str,
        user_b_id: str,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Message]:
        """Messages exchanged between two users, newest first, deleted ones excluded."""
        require_id(user_a_id, "user_a_id")
        require_id(user_b_id, "user_b_id")
        page = normalize_pagination(limit, offset)
        logger.debug(f"Retrieving conversation between {user_a_id} and {user_b_id}")
        return await self.message_repository.get_conversation(user_a_id, user_b_id, page.limit, page.offset)

    async def get_unread_count(self, user_id: str) -> int:
        require_id(user_id, "user_id")
        return await self.message_repository.count_unread(user_id)
