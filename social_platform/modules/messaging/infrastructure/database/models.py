# 📄 File: social_platform/modules/messaging/infrastructure/database/models.py
# 🧭 Purpose (Layman Explanation):
# How private messages are stored in the database.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy ORM model for direct messages, indexed for conversation and unread-count queries.
#
# 🔗 Dependencies:
# - SQLAlchemy ORM
# - social_platform.shared.infrastructure.database (Base, UTCDateTime, uuid_column_type)
#
# 🔄 Connected Modules / Calls From:
# - message_repository_impl.py

from sqlalchemy import BigInteger, Boolean, Column, ForeignKey, Index, String, Text

from social_platform.shared.infrastructure.database.connection import Base
from social_platform.shared.infrastructure.database.types import UTCDateTime, uuid_column_type


class MessageModel(Base):
    """SQLAlchemy model for direct messages (soft-deleted rows are kept)."""
    __tablename__ = "messages"
    __table_args__ = (
        Index("ix_messages_pair_created", "sender_id", "recipient_id", "created_at"),
        Index("ix_messages_recipient_read", "recipient_id", "is_read"),
    )

    id = Column(uuid_column_type(), primary_key=True, nullable=False)
    sender_id = Column(uuid_column_type(), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    recipient_id = Column(uuid_column_type(), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    content = Column(Text, nullable=False, default="")
    type = Column(String(20), nullable=False)
    attachment_url = Column(String(1000), nullable=True)
    attachment_file_name = Column(String(255), nullable=True)
    attachment_file_size = Column(BigInteger, nullable=True)
    is_read = Column(Boolean, nullable=False, default=False)
    is_edited = Column(Boolean, nullable=False, default=False)
    is_deleted = Column(Boolean, nullable=False, default=False)
    created_at = Column(UTCDateTime(), nullable=False)
    updated_at = Column(UTCDateTime(), nullable=False)
    read_at = Column(UTCDateTime(), nullable=True)

    def __repr__(self) -> str:
        return f"<MessageModel(id={self.id}, sender_id={self.sender_id}, recipient_id={self.recipient_id})>"
