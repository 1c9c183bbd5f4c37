# 📄 File: social_platform/modules/user_management/domain/models/__init__.py
# 🧭 Purpose (Layman Explanation):
# Organizes the core account data models - who a user is, who follows whom, and the tokens
# that keep someone signed in or let them reset a password.
# 🧪 Purpose (Technical Summary):
# Package initialization for user management entities with their validation rules.
# 🔗 Dependencies:
# Domain model classes, pydantic base models
# 🔄 Connected Modules / Calls From:
# Domain services, repositories, infrastructure layer

"""
User Management Domain Models

Models:
- User: registered member with profile, privacy and login bookkeeping
- Follow: follower -> followee edge, accepted or pending approval
- RefreshToken, PasswordResetToken, UserSession: auth token lifecycles
"""

from .user import User
from .follow import Follow
from .auth_tokens import PasswordResetToken, RefreshToken, UserSession

__all__ = [
    "User",
    "Follow",
    "RefreshToken",
    "PasswordResetToken",
    "UserSession",
]
