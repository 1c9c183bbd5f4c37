# 📄 File: social_platform/modules/user_management/infrastructure/database/__init__.py
# 🧭 Purpose (Layman Explanation):
# The database tables and storage classes for accounts, follows and auth tokens.
# 🧪 Purpose (Technical Summary):
# SQLAlchemy ORM models and repository implementations for the user management context.
# 🔗 Dependencies:
# sqlalchemy, social_platform.shared.infrastructure.database
# 🔄 Connected Modules / Calls From:
# social_platform.shared.core.dependencies, integration tests

from .models import (
    FollowModel,
    PasswordResetTokenModel,
    RefreshTokenModel,
    UserModel,
    UserSessionModel,
)
from .user_repository_impl import UserRepositoryImpl
from .follow_repository_impl import FollowRepositoryImpl
from .auth_token_repository_impl import (
    PasswordResetTokenRepositoryImpl,
    RefreshTokenRepositoryImpl,
    UserSessionRepositoryImpl,
)

__all__ = [
    "UserModel",
    "FollowModel",
    "RefreshTokenModel",
    "PasswordResetTokenModel",
    "UserSessionModel",
    "UserRepositoryImpl",
    "FollowRepositoryImpl",
    "RefreshTokenRepositoryImpl",
    "PasswordResetTokenRepositoryImpl",
    "UserSessionRepositoryImpl",
]
