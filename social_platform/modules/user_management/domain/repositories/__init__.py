# 📄 File: social_platform/modules/user_management/domain/repositories/__init__.py
# 🧭 Purpose (Layman Explanation):
# The promises the account storage makes, without saying which database keeps the data.
# 🧪 Purpose (Technical Summary):
# Abstract repository contracts for the user management context.
# 🔗 Dependencies:
# social_platform.shared.core.repository, domain models
# 🔄 Connected Modules / Calls From:
# Domain services, infrastructure implementations

from .user_repository import UserRepository
from .follow_repository import FollowRepository
from .auth_token_repository import (
    PasswordResetTokenRepository,
    RefreshTokenRepository,
    UserSessionRepository,
)

__all__ = [
    "UserRepository",
    "FollowRepository",
    "RefreshTokenRepository",
    "PasswordResetTokenRepository",
    "UserSessionRepository",
]
