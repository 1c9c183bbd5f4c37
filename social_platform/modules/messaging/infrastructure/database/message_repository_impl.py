# 📄 File: social_platform/modules/messaging/infrastructure/database/message_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# Saves private messages and reads back the conversation between two people.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy implementation of MessageRepository. Soft-deleted rows stay in the table and are
# filtered out of conversation pages and unread counts.
#
# 🔗 Dependencies:
# - social_platform.modules.messaging.domain (Message, MessageType, MessageRepository)
# - social_platform.modules.messaging.infrastructure.database.models (MessageModel)
# - social_platform.shared.infrastructure.database.repository (SQLAlchemyRepository)
#
# 🔄 Connected Modules / Calls From:
# - message_service.py

import logging
from typing import List, Optional

from sqlalchemy import and_, or_, select

from social_platform.modules.messaging.domain.models.message import Message, MessageType
from social_platform.modules.messaging.domain.repositories.message_repository import MessageRepository
from social_platform.modules.messaging.infrastructure.database.models import MessageModel
from social_platform.shared.core.exceptions import NotFoundError
from social_platform.shared.infrastructure.database.repository import SQLAlchemyRepository

logger = logging.getLogger(__name__)

_MUTABLE_FIELDS = (
    "content", "attachment_url", "attachment_file_name", "attachment_file_size",
    "is_read", "is_edited", "is_deleted", "updated_at", "read_at",
)


class MessageRepositoryImpl(SQLAlchemyRepository, MessageRepository):
    """SQLAlchemy implementation of the MessageRepository interface."""

    resource_type = "Message"

    async def create(self, message: Message) -> Message:
        message_model = MessageModel(
            id=message.id,
            sender_id=message.sender_id,
            recipient_id=message.recipient_id,
            type=message.type.value,
            created_at=message.created_at,
        )
        self._copy_mutable_fields(message_model, message)
        await self._add(message_model)
        logger.info(f"Stored message {message.id} from {message.sender_id} to {message.recipient_id}")
        return self._model_to_domain(message_model)

    async def get_by_id(self, message_id: str) -> Optional[Message]:
        message_model = await self._get(MessageModel, message_id)
        return self._model_to_domain(message_model) if message_model else None

    async def get_conversation(self, user_a_id: str, user_b_id: str, limit: int, offset: int) -> List[Message]:
        stmt = (
            select(MessageModel)
            .where(
                MessageModel.is_deleted.is_(False),
                or_(
                    and_(MessageModel.sender_id == user_a_id, MessageModel.recipient_id == user_b_id),
                    and_(MessageModel.sender_id == user_b_id, MessageModel.recipient_id == user_a_id),
                ),
            )
            .order_by(MessageModel.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        return [self._model_to_domain(model) for model in await self._scalars(stmt, "get_conversation")]

    async def count_unread(self, recipient_id: str) -> int:
        return await self._count(
            MessageModel,
            MessageModel.recipient_id == recipient_id,
            MessageModel.is_read.is_(False),
            MessageModel.is_deleted.is_(False),
        )

    async def update(self, message: Message) -> Message:
        message_model = await self._get(MessageModel, message.id)
        if message_model is None:
            raise NotFoundError(resource_type=self.resource_type, resource_id=message.id)
        self._copy_mutable_fields(message_model, message)
        await self._flush("update")
        self._record_changes()
        return self._model_to_domain(message_model)

    async def delete(self, message_id: str) -> bool:
        """Hard delete; the service soft-deletes through ``update`` instead."""
        message_model = await self._get(MessageModel, message_id)
        if message_model is None:
            return False
        await self._delete_model(message_model)
        return True

    @staticmethod
    def _copy_mutable_fields(message_model: MessageModel, message: Message) -> None:
        for field in _MUTABLE_FIELDS:
            setattr(message_model, field, getattr(message, field))

    @staticmethod
    def _model_to_domain(message_model: MessageModel) -> Message:
        return Message(
            id=str(message_model.id),
            sender_id=str(message_model.sender_id),
            recipient_id=str(message_model.recipient_id),
            type=MessageType(message_model.type),
            created_at=message_model.created_at,
            **{field: getattr(message_model, field) for field in _MUTABLE_FIELDS},
        )
