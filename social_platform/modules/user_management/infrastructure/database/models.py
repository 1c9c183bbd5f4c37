# 📄 File: social_platform/modules/user_management/infrastructure/database/models.py
# 🧭 Purpose (Layman Explanation):
# This file defines how user accounts, follow relationships and login tickets are stored in
# the database tables.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy ORM models for the user management context. Rows are plain persistence records;
# repository implementations map them to and from domain models explicitly.
#
# 🔗 Dependencies:
# - SQLAlchemy ORM
# - social_platform.shared.infrastructure.database (Base, UTCDateTime, uuid_column_type)
#
# 🔄 Connected Modules / Calls From:
# - user_repository_impl.py, follow_repository_impl.py, auth_token_repository_impl.py
# - Other contexts' models reference users.id through foreign keys

"""
SQLAlchemy Models for User Management

Models:
- UserModel: account identity, public profile and login bookkeeping
- FollowModel: follower -> followee edge with acceptance state
- RefreshTokenModel, PasswordResetTokenModel, UserSessionModel: auth tickets

Every table that references a user cascades on user deletion.
"""

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)

from social_platform.shared.infrastructure.database.connection import Base
from social_platform.shared.infrastructure.database.types import UTCDateTime, uuid_column_type


# =============================================================================
# USER MODEL
# =============================================================================

class UserModel(Base):
    """
    SQLAlchemy model for user accounts.

    email and username are stored lower-cased, so plain unique indexes
    give case-insensitive uniqueness.
    """
    __tablename__ = "users"

    id = Column(uuid_column_type(), primary_key=True, nullable=False)

    # Identity
    email = Column(String(255), unique=True, nullable=False, index=True)
    username = Column(String(50), unique=True, nullable=False, index=True)
    display_name = Column(String(100), nullable=False)
    password_hash = Column(String(255), nullable=False)

    # Public profile
    bio = Column(Text, nullable=True)
    location = Column(String(100), nullable=True)
    website = Column(String(255), nullable=True)
    profile_image_url = Column(String(500), nullable=True)
    cover_image_url = Column(String(500), nullable=True)
    is_private = Column(Boolean, nullable=False, default=False)
    is_verified = Column(Boolean, nullable=False, default=False)
    birth_date = Column(Date, nullable=True)

    # Login bookkeeping
    last_login_at = Column(UTCDateTime(), nullable=True)
    password_changed_at = Column(UTCDateTime(), nullable=True)
    failed_login_attempts = Column(Integer, nullable=False, default=0)
    lockout_end_at = Column(UTCDateTime(), nullable=True)
    is_email_confirmed = Column(Boolean, nullable=False, default=False)
    email_confirmation_token = Column(String(255), nullable=True)
    email_confirmed_at = Column(UTCDateTime(), nullable=True)
    two_factor_enabled = Column(Boolean, nullable=False, default=False)

    created_at = Column(UTCDateTime(), nullable=False)
    updated_at = Column(UTCDateTime(), nullable=False)

    def __repr__(self) -> str:
        return f"<UserModel(id={self.id}, username={self.username})>"


# =============================================================================
# FOLLOW MODEL
# =============================================================================

class FollowModel(Base):
    """SQLAlchemy model for follow relationships (one row per pair)."""
    __tablename__ = "follows"
    __table_args__ = (
        UniqueConstraint("follower_id", "followee_id", name="uq_follows_pair"),
        Index("ix_follows_followee_accepted", "followee_id", "is_accepted"),
    )

    id = Column(uuid_column_type(), primary_key=True, nullable=False)
    follower_id = Column(uuid_column_type(), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    followee_id = Column(uuid_column_type(), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    is_accepted = Column(Boolean, nullable=False, default=True)
    accepted_at = Column(UTCDateTime(), nullable=True)
    created_at = Column(UTCDateTime(), nullable=False)

    def __repr__(self) -> str:
        return f"<FollowModel(follower_id={self.follower_id}, followee_id={self.followee_id}, accepted={self.is_accepted})>"


# =============================================================================
# AUTH TOKEN MODELS
# =============================================================================

class RefreshTokenModel(Base):
    __tablename__ = "refresh_tokens"

    id = Column(uuid_column_type(), primary_key=True, nullable=False)
    user_id = Column(uuid_column_type(), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    token = Column(String(255), unique=True, nullable=False)
    jwt_id = Column(String(255), nullable=False)
    created_at = Column(UTCDateTime(), nullable=False)
    expires_at = Column(UTCDateTime(), nullable=False, index=True)
    is_used = Column(Boolean, nullable=False, default=False)
    is_revoked = Column(Boolean, nullable=False, default=False)
    revoked_at = Column(UTCDateTime(), nullable=True)
    revoked_by_ip = Column(String(45), nullable=True)
    revoked_reason = Column(String(255), nullable=True)
    replaced_by_token = Column(String(255), nullable=True)
    ip_address = Column(String(45), nullable=True)
    user_agent = Column(String(500), nullable=True)


class PasswordResetTokenModel(Base):
    __tablename__ = "password_reset_tokens"

    id = Column(uuid_column_type(), primary_key=True, nullable=False)
    user_id = Column(uuid_column_type(), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    token = Column(String(255), unique=True, nullable=False)
    created_at = Column(UTCDateTime(), nullable=False)
    expires_at = Column(UTCDateTime(), nullable=False, index=True)
    is_used = Column(Boolean, nullable=False, default=False)
    used_at = Column(UTCDateTime(), nullable=True)
    ip_address = Column(String(45), nullable=True)


class UserSessionModel(Base):
    __tablename__ = "user_sessions"

    id = Column(uuid_column_type(), primary_key=True, nullable=False)
    user_id = Column(uuid_column_type(), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    session_id = Column(String(255), unique=True, nullable=False)
    created_at = Column(UTCDateTime(), nullable=False)
    last_activity_at = Column(UTCDateTime(), nullable=False)
    expires_at = Column(UTCDateTime(), nullable=False, index=True)
    is_active = Column(Boolean, nullable=False, default=True)
    ip_address = Column(String(45), nullable=True)
    user_agent = Column(String(500), nullable=True)
    device_info = Column(String(255), nullable=True)
    location = Column(String(100), nullable=True)
