# 📄 File: social_platform/modules/user_management/domain/services/__init__.py
# 🧭 Purpose (Layman Explanation):
# Organizes the business logic services that handle accounts, following and signing in.
# 🧪 Purpose (Technical Summary):
# Package initialization for user management domain services.
# 🔗 Dependencies:
# Domain models, repositories, notification service
# 🔄 Connected Modules / Calls From:
# social_platform.shared.core.dependencies, transport layer

"""
User Management Domain Services

Domain Services:
- UserService: registration, profiles, social graph, statistics
- AuthTokenService: credentials, lockout, refresh tokens, password reset, sessions
"""

from .user_service import UserService
from .auth_token_service import AuthTokenService

__all__ = [
    "UserService",
    "AuthTokenService",
]
