# 📄 File: social_platform/modules/content/infrastructure/database/models.py
# 🧭 Purpose (Layman Explanation):
# This file defines how posts, their attached media, comments, likes and shares are stored
# in the database tables.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy ORM models for the content context. PostModel owns its MediaAttachmentModel rows
# through a selectin-loaded relationship; every other reference is a cascading foreign key.
#
# 🔗 Dependencies:
# - SQLAlchemy ORM
# - social_platform.shared.infrastructure.database (Base, UTCDateTime, uuid_column_type)
# - users table (user_management models)
#
# 🔄 Connected Modules / Calls From:
# - post_repository_impl.py, comment_repository_impl.py, like_repository_impl.py, share_repository_impl.py

from sqlalchemy import (
    BigInteger,
    Boolean,
    Column,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from social_platform.shared.infrastructure.database.connection import Base
from social_platform.shared.infrastructure.database.types import UTCDateTime, uuid_column_type


# =============================================================================
# POST MODELS
# =============================================================================

class PostModel(Base):
    """
    SQLAlchemy model for posts.

    Deleting a post deletes its attachments, replies, likes, comments and shares.
    """
    __tablename__ = "posts"
    __table_args__ = (
        Index("ix_posts_author_created", "author_id", "created_at"),
        Index("ix_posts_visibility_created", "visibility", "created_at"),
    )

    id = Column(uuid_column_type(), primary_key=True, nullable=False)
    author_id = Column(uuid_column_type(), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    content = Column(Text, nullable=False, default="")
    type = Column(String(20), nullable=False)
    visibility = Column(String(20), nullable=False)
    is_edited = Column(Boolean, nullable=False, default=False)
    parent_post_id = Column(uuid_column_type(), ForeignKey("posts.id", ondelete="CASCADE"), nullable=True, index=True)
    root_post_id = Column(uuid_column_type(), ForeignKey("posts.id", ondelete="CASCADE"), nullable=True, index=True)
    created_at = Column(UTCDateTime(), nullable=False)
    updated_at = Column(UTCDateTime(), nullable=False)

    media_attachments = relationship(
        "MediaAttachmentModel",
        back_populates="post",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="MediaAttachmentModel.created_at",
    )

    def __repr__(self) -> str:
        return f"<PostModel(id={self.id}, author_id={self.author_id}, type={self.type})>"


class MediaAttachmentModel(Base):
    __tablename__ = "media_attachments"

    id = Column(uuid_column_type(), primary_key=True, nullable=False)
    post_id = Column(uuid_column_type(), ForeignKey("posts.id", ondelete="CASCADE"), nullable=False, index=True)
    url = Column(String(1000), nullable=False)
    file_name = Column(String(255), nullable=False)
    content_type = Column(String(100), nullable=False)
    file_size = Column(BigInteger, nullable=False)
    alt_text = Column(String(500), nullable=True)
    width = Column(Integer, nullable=True)
    height = Column(Integer, nullable=True)
    duration = Column(Integer, nullable=True)
    thumbnail_url = Column(String(1000), nullable=True)
    created_at = Column(UTCDateTime(), nullable=False)

    post = relationship("PostModel", back_populates="media_attachments")


# =============================================================================
# ENGAGEMENT MODELS
# =============================================================================

class CommentModel(Base):
    __tablename__ = "comments"
    __table_args__ = (
        Index("ix_comments_post_created", "post_id", "created_at"),
    )

    id = Column(uuid_column_type(), primary_key=True, nullable=False)
    user_id = Column(uuid_column_type(), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    post_id = Column(uuid_column_type(), ForeignKey("posts.id", ondelete="CASCADE"), nullable=False)
    content = Column(Text, nullable=False)
    is_edited = Column(Boolean, nullable=False, default=False)
    created_at = Column(UTCDateTime(), nullable=False)
    updated_at = Column(UTCDateTime(), nullable=False)


class LikeModel(Base):
    """One like per (user, post)."""
    __tablename__ = "likes"
    __table_args__ = (
        UniqueConstraint("user_id", "post_id", name="uq_likes_user_post"),
    )

    id = Column(uuid_column_type(), primary_key=True, nullable=False)
    user_id = Column(uuid_column_type(), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    post_id = Column(uuid_column_type(), ForeignKey("posts.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(UTCDateTime(), nullable=False)


class ShareModel(Base):
    """One share per (user, post)."""
    __tablename__ = "shares"
    __table_args__ = (
        UniqueConstraint("user_id", "post_id", name="uq_shares_user_post"),
    )

    id = Column(uuid_column_type(), primary_key=True, nullable=False)
    user_id = Column(uuid_column_type(), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    post_id = Column(uuid_column_type(), ForeignKey("posts.id", ondelete="CASCADE"), nullable=False, index=True)
    comment = Column(Text, nullable=True)
    created_at = Column(UTCDateTime(), nullable=False)
