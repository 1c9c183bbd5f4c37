# 📄 File: social_platform/modules/user_management/application/dto/user_dto.py
# 🧭 Purpose (Layman Explanation):
# Ready-to-send summaries about a user: their public profile (never their password) and the
# numbers shown on a profile page such as followers and posts.
#
# 🧪 Purpose (Technical Summary):
# User data transfer objects: a security-filtered public profile projection of the User entity
# and the aggregated statistics returned by UserService.get_user_stats.
#
# 🔗 Dependencies:
# - pydantic for DTO validation and serialization
# - social_platform.modules.user_management.domain.models.user (User domain entity)
#
# 🔄 Connected Modules / Calls From:
# - user_service.py (returns UserStatsDTO)
# - transport layer (serializes UserProfileDTO)

"""
User Data Transfer Objects (DTOs)

DTO Classes:
- UserProfileDTO: public profile, password hash and login bookkeeping removed
- UserStatsDTO: follower/following/post/pending-request counts
"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field

from social_platform.modules.user_management.domain.models.user import User


class UserProfileDTO(BaseModel):
    """
    Public user profile.

    Built from the domain entity with ``from_domain``; never carries the
    password hash, lockout state or confirmation tokens.
    """

    id: str = Field(..., description="User identifier")
    username: str = Field(..., description="Lower-cased unique username", examples=["ana"])
    display_name: str = Field(..., description="Name shown on the profile", examples=["Ana"])
    bio: Optional[str] = Field(default=None, description="Short biography")
    location: Optional[str] = Field(default=None, description="Free-text location")
    website: Optional[str] = Field(default=None, description="Personal website")
    profile_image_url: Optional[str] = Field(default=None, description="Avatar URL")
    cover_image_url: Optional[str] = Field(default=None, description="Cover image URL")
    is_private: bool = Field(..., description="Follow requests need approval")
    is_verified: bool = Field(..., description="Verified badge")
    birth_date: Optional[date] = Field(default=None, description="Birth date")
    created_at: datetime = Field(..., description="Registration time")

    @classmethod
    def from_domain(cls, user: User) -> "UserProfileDTO":
        return cls(
            id=user.id,
            username=user.username,
            display_name=user.display_name,
            bio=user.bio,
            location=user.location,
            website=user.website,
            profile_image_url=user.profile_image_url,
            cover_image_url=user.cover_image_url,
            is_private=user.is_private,
            is_verified=user.is_verified,
            birth_date=user.birth_date,
            created_at=user.created_at,
        )


class UserStatsDTO(BaseModel):
    """Profile statistics for one user."""

    user_id: str = Field(..., description="User the statistics belong to")
    followers_count: int = Field(default=0, ge=0, description="Accepted followers")
    following_count: int = Field(default=0, ge=0, description="Accepted follows made by the user")
    posts_count: int = Field(default=0, ge=0, description="Posts written, replies included")
    pending_requests_count: int = Field(default=0, ge=0, description="Follow requests awaiting approval")
