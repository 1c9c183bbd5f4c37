# 📄 File: social_platform/modules/messaging/domain/models/message.py
# 🧭 Purpose (Layman Explanation):
# A private message from one person to another, possibly with a file attached. The recipient
# can see when they read it, the sender can edit it, and deleting only hides it.
# 🧪 Purpose (Technical Summary):
# Direct message entity. Sender and recipient must differ, Text messages need content,
# attachment url/file name/size travel together. mark_as_read is idempotent (read_at fixed on
# first read), delete() is a soft delete and a deleted message can no longer be edited.
# 🔗 Dependencies:
# pydantic, enum, social_platform.shared (exceptions, validators, helpers)
# 🔄 Connected Modules / Calls From:
# message_service.py, message_repository.py, message_repository_impl.py

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from social_platform.shared.core.exceptions import InvalidOperationError, ValidationError
from social_platform.shared.utils.helpers import generate_uuid, next_timestamp, utc_now
from social_platform.shared.utils.validators import ensure_different, require_id, require_positive, require_text


class MessageType(str, Enum):
    """Message payload kind"""
    TEXT = "text"
    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"
    FILE = "file"


class Message(BaseModel):
    """
    Direct message between two users.

    Invariants:
    - sender_id != recipient_id
    - content is non-blank while type is TEXT
    - attachment_url, attachment_file_name and attachment_file_size are all set or all empty
    """

    id: str = Field(default_factory=generate_uuid)
    sender_id: str
    recipient_id: str
    content: str = ""
    type: MessageType = MessageType.TEXT
    attachment_url: Optional[str] = None
    attachment_file_name: Optional[str] = None
    attachment_file_size: Optional[int] = None
    is_read: bool = False
    is_edited: bool = False
    is_deleted: bool = False
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
    read_at: Optional[datetime] = None

    @field_validator("id", "sender_id", "recipient_id", mode="before")
    @classmethod
    def validate_ids(cls, v, info):
        return require_id(v, info.field_name)

    @field_validator("content", mode="before")
    @classmethod
    def normalize_content(cls, v):
        return (v or "").strip()

    @model_validator(mode="after")
    def validate_message(self):
        ensure_different(self.sender_id, self.recipient_id, "recipient_id", "Sender and recipient cannot be the same")
        self._check_content(self.content, self.type)

        attachment_fields = (self.attachment_url, self.attachment_file_name, self.attachment_file_size)
        if any(value is not None for value in attachment_fields):
            self._check_attachment(*attachment_fields)
        return self

    @staticmethod
    def _check_content(content: str, message_type: MessageType) -> None:
        if not content and message_type == MessageType.TEXT:
            raise ValidationError(
                "Content is required for text messages",
                field="content",
                constraint="required_for_text",
            )

    @staticmethod
    def _check_attachment(url: Optional[str], file_name: Optional[str], file_size: Optional[int]):
        return (
            require_text(url, "attachment_url"),
            require_text(file_name, "attachment_file_name"),
            require_positive(file_size, "attachment_file_size"),
        )

    @classmethod
    def create(
        cls,
        sender_id: str,
        recipient_id: str,
        content: Optional[str],
        message_type: MessageType = MessageType.TEXT,
    ) -> "Message":
        return cls(sender_id=sender_id, recipient_id=recipient_id, content=content, type=message_type)

    # =========================================================================
    # MUTATORS
    # =========================================================================

    def update_content(self, content: Optional[str]) -> None:
        """Edit the message text; deleted messages cannot be edited."""
        if self.is_deleted:
            raise InvalidOperationError(
                "Cannot edit deleted message",
                operation="update_content",
                entity_type="Message",
                entity_id=self.id,
            )
        content = (content or "").strip()
        self._check_content(content, self.type)
        self.content = content
        self.is_edited = True
        self.updated_at = next_timestamp(self.updated_at)

    def mark_as_read(self) -> None:
        """Mark as read; ``read_at`` keeps the time of the first read."""
        if not self.is_read:
            self.is_read = True
            self.read_at = utc_now()

    def delete(self) -> None:
        self.is_deleted = True
        self.updated_at = next_timestamp(self.updated_at)

    def set_attachment(self, url: str, file_name: str, file_size: int) -> None:
        url, file_name, file_size = self._check_attachment(url, file_name, file_size)
        self.attachment_url = url
        self.attachment_file_name = file_name
        self.attachment_file_size = file_size
        self.updated_at = next_timestamp(self.updated_at)

    @property
    def has_attachment(self) -> bool:
        return bool(self.attachment_url and self.attachment_url.strip())
