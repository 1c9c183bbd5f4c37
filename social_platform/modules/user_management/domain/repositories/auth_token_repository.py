# 📄 File: social_platform/modules/user_management/domain/repositories/auth_token_repository.py
# 🧭 Purpose (Layman Explanation):
# Contracts for storing login-related tickets: refresh tokens, password reset tokens and
# device sessions, and for sweeping away the ones that have expired.
# 🧪 Purpose (Technical Summary):
# Repository interfaces for RefreshToken, PasswordResetToken and UserSession value objects,
# with lookup by opaque token string, per-user bulk revocation and expiry cleanup.
# 🔗 Dependencies:
# Domain models (auth_tokens), shared Repository base, typing, abc
# 🔄 Connected Modules / Calls From:
# auth_token_service.py, auth_token_repository_impl.py

from abc import abstractmethod
from datetime import datetime
from typing import List, Optional

from social_platform.modules.user_management.domain.models.auth_tokens import (
    PasswordResetToken,
    RefreshToken,
    UserSession,
)
from social_platform.shared.core.repository import Repository


class RefreshTokenRepository(Repository[RefreshToken]):
    """Repository interface for refresh tokens."""

    @abstractmethod
    async def get_by_token(self, token: str) -> Optional[RefreshToken]:
        pass

    @abstractmethod
    async def get_active_by_user(self, user_id: str) -> List[RefreshToken]:
        """Unused, unrevoked and unexpired tokens of one user."""
        pass

    @abstractmethod
    async def revoke_all_for_user(
        self,
        user_id: str,
        revoked_at: datetime,
        ip_address: Optional[str] = None,
        reason: Optional[str] = None,
    ) -> int:
        """
        Revoke every not-yet-revoked token of a user.

        Returns:
            Number of tokens revoked
        """
        pass

    @abstractmethod
    async def delete_expired(self, now: datetime) -> int:
        pass


class PasswordResetTokenRepository(Repository[PasswordResetToken]):
    """Repository interface for password reset tokens."""

    @abstractmethod
    async def get_by_token(self, token: str) -> Optional[PasswordResetToken]:
        pass

    @abstractmethod
    async def invalidate_for_user(self, user_id: str, used_at: datetime) -> int:
        """Mark every unused reset token of a user as used."""
        pass

    @abstractmethod
    async def delete_expired(self, now: datetime) -> int:
        pass


class UserSessionRepository(Repository[UserSession]):
    """Repository interface for device sessions."""

    @abstractmethod
    async def get_by_session_id(self, session_id: str) -> Optional[UserSession]:
        pass

    @abstractmethod
    async def get_active_by_user(self, user_id: str) -> List[UserSession]:
        pass

    @abstractmethod
    async def delete_expired(self, now: datetime) -> int:
        pass
