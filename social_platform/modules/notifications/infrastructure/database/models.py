# 📄 File: social_platform/modules/notifications/infrastructure/database/models.py
# 🧭 Purpose (Layman Explanation):
# How notifications are stored in the database, one row per person notified.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy ORM model for notifications with a JSON metadata column. The column is named
# "metadata" in the table but mapped as ``metadata_json`` because ``metadata`` is reserved
# on declarative classes.
#
# 🔗 Dependencies:
# - SQLAlchemy ORM (JSON type)
# - social_platform.shared.infrastructure.database (Base, UTCDateTime, uuid_column_type)
#
# 🔄 Connected Modules / Calls From:
# - notification_repository_impl.py

from sqlalchemy import JSON, Column, ForeignKey, Index, String, Text

from social_platform.shared.infrastructure.database.connection import Base
from social_platform.shared.infrastructure.database.types import UTCDateTime, uuid_column_type


class NotificationModel(Base):
    """SQLAlchemy model for notifications."""
    __tablename__ = "notifications"
    __table_args__ = (
        Index("ix_notifications_user_status", "user_id", "status"),
        Index("ix_notifications_user_created", "user_id", "created_at"),
    )

    id = Column(uuid_column_type(), primary_key=True, nullable=False)
    user_id = Column(uuid_column_type(), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    type = Column(String(20), nullable=False)
    status = Column(String(20), nullable=False)
    title = Column(String(200), nullable=False)
    message = Column(Text, nullable=False)
    entity_id = Column(String(64), nullable=True)
    entity_type = Column(String(50), nullable=True)
    trigger_user_id = Column(uuid_column_type(), ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    action_url = Column(String(1000), nullable=True)
    metadata_json = Column("metadata", JSON, nullable=False, default=dict)
    created_at = Column(UTCDateTime(), nullable=False)
    read_at = Column(UTCDateTime(), nullable=True)
    archived_at = Column(UTCDateTime(), nullable=True, index=True)
    expires_at = Column(UTCDateTime(), nullable=True, index=True)

    def __repr__(self) -> str:
        return f"<NotificationModel(id={self.id}, user_id={self.user_id}, type={self.type}, status={self.status})>"
