# 📄 File: social_platform/modules/user_management/domain/services/auth_token_service.py
# 🧭 Purpose (Layman Explanation):
# Handles signing in with a password, locking an account after too many wrong guesses, the
# "stay logged in" tokens, password reset links and the list of signed-in devices.
#
# 🧪 Purpose (Technical Summary):
# Domain service for credential checks and auth token lifecycles. Token values are opaque random
# strings; access token signing belongs to the excluded transport layer, which passes the access
# token id (jwt_id) in. Refresh tokens rotate, and reuse of a consumed token revokes the user's chain.
#
# 🔗 Dependencies:
# - social_platform.modules.user_management.domain (User, RefreshToken, PasswordResetToken, UserSession,
#   UserRepository, auth token repositories)
# - social_platform.shared.core.security (passlib hashing, secure token generation)
# - social_platform.shared.config.settings (lockout and expiry policy)
#
# 🔄 Connected Modules / Calls From:
# - social_platform.shared.core.dependencies (ServiceContainer)
# - transport layer authentication endpoints (excluded)

import logging
from datetime import timedelta
from typing import Optional

from social_platform.modules.user_management.domain.models.auth_tokens import (
    PasswordResetToken,
    RefreshToken,
    UserSession,
)
from social_platform.modules.user_management.domain.models.user import User
from social_platform.modules.user_management.domain.repositories.auth_token_repository import (
    PasswordResetTokenRepository,
    RefreshTokenRepository,
    UserSessionRepository,
)
from social_platform.modules.user_management.domain.repositories.user_repository import UserRepository
from social_platform.shared.config.settings import get_settings
from social_platform.shared.core.exceptions import (
    AccountLockedException,
    AuthenticationError,
    InvalidOperationError,
    NotFoundError,
)
from social_platform.shared.core.security import generate_secure_token, get_password_hash, verify_password
from social_platform.shared.utils.helpers import utc_now
from social_platform.shared.utils.validators import require_id, require_text

logger = logging.getLogger(__name__)


class AuthTokenService:
    """
    Domain service for authentication business logic.

    Business rules:
    - MAX_FAILED_LOGIN_ATTEMPTS wrong passwords lock the account for LOCKOUT_MINUTES
    - A refresh token can be used once; presenting a used or revoked token
      revokes every refresh token of that user
    - Issuing a password reset invalidates earlier unused reset tokens
    - Completing a password reset revokes all refresh tokens
    """

    def __init__(
        self,
        user_repository: UserRepository,
        refresh_token_repository: RefreshTokenRepository,
        password_reset_token_repository: PasswordResetTokenRepository,
        user_session_repository: UserSessionRepository,
    ):
        self.user_repository = user_repository
        self.refresh_token_repository = refresh_token_repository
        self.password_reset_token_repository = password_reset_token_repository
        self.user_session_repository = user_session_repository
        self.settings = get_settings()

    # =========================================================================
    # CREDENTIALS
    # =========================================================================

    async def authenticate(self, email: str, password: str) -> User:
        """
        Check an email/password pair.

        Args:
            email: Account email (case-insensitive)
            password: Plain text password

        Returns:
            User: The authenticated user, with login bookkeeping updated

        Raises:
            AuthenticationError: If the email is unknown or the password is wrong
            AccountLockedException: If the account is temporarily locked
        """
        logger.info(f"Authenticating user: {email}")

        # 1. Get user by email
        user = await self.user_repository.get_by_email(require_text(email, "email").lower())
        if user is None:
            logger.warning(f"Login attempt for unknown email: {email}")
            raise AuthenticationError("Invalid email or password")

        # 2. Refuse locked accounts
        if user.is_locked_out():
            logger.warning(f"Login attempt for locked account: {user.id}")
            raise AccountLockedException(
                user_id=user.id,
                locked_until=user.lockout_end_at.isoformat(),
            )

        # 3. Verify password and count failures
        if not verify_password(password or "", user.password_hash):
            user.record_failed_login(
                max_attempts=self.settings.MAX_FAILED_LOGIN_ATTEMPTS,
                lockout_minutes=self.settings.LOCKOUT_MINUTES,
            )
            await self.user_repository.update(user)
            await self.user_repository.save_changes()

            if user.is_locked_out():
                logger.warning(f"Account locked due to failed login attempts: {user.id}")
            raise AuthenticationError("Invalid email or password", user_id=user.id)

        # 4. Successful authentication
        user.record_successful_login()
        updated = await self.user_repository.update(user)
        await self.user_repository.save_changes()

        logger.info(f"Successfully authenticated user: {user.id}")
        return updated

    async def unlock_account(self, user_id: str) -> User:
        require_id(user_id, "user_id")
        user = await self.user_repository.get_by_id(user_id)
        if user is None:
            raise NotFoundError(resource_type="User", resource_id=user_id, field="user_id")

        user.unlock_account()
        updated = await self.user_repository.update(user)
        await self.user_repository.save_changes()
        logger.info(f"Successfully unlocked account for user: {user_id}")
        return updated

    # =========================================================================
    # REFRESH TOKENS
    # =========================================================================

    async def issue_refresh_token(
        self,
        user_id: str,
        jwt_id: str,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> RefreshToken:
        """
        Issue a refresh token paired with an access token id.

        Raises:
            NotFoundError: If the user does not exist
        """
        require_id(user_id, "user_id")
        if await self.user_repository.get_by_id(user_id) is None:
            raise NotFoundError(resource_type="User", resource_id=user_id, field="user_id")

        refresh_token = RefreshToken.issue(
            user_id=user_id,
            token=generate_secure_token(),
            jwt_id=jwt_id,
            expires_at=utc_now() + timedelta(days=self.settings.REFRESH_TOKEN_EXPIRE_DAYS),
            ip_address=ip_address,
            user_agent=user_agent,
        )
        created = await self.refresh_token_repository.create(refresh_token)
        await self.refresh_token_repository.save_changes()

        logger.info(f"Issued refresh token {created.id} for user {user_id}")
        return created

    async def rotate_refresh_token(
        self,
        token: str,
        new_jwt_id: str,
        ip_address: Optional[str] = None,
    ) -> RefreshToken:
        """
        Exchange a refresh token for a new one.

        Args:
            token: Presented refresh token value
            new_jwt_id: Id of the access token issued alongside the new refresh token
            ip_address: Client address

        Returns:
            RefreshToken: The replacement token

        Raises:
            AuthenticationError: If the token is unknown, expired, or already used or
                revoked (in which case every token of the user is revoked first)
        """
        token = require_text(token, "token")
        existing = await self.refresh_token_repository.get_by_token(token)
        if existing is None:
            logger.warning("Refresh attempted with unknown token")
            raise AuthenticationError("Invalid refresh token")

        if existing.is_used or existing.is_revoked:
            revoked = await self.refresh_token_repository.revoke_all_for_user(
                existing.user_id,
                utc_now(),
                ip_address=ip_address,
                reason="Attempted reuse of a consumed refresh token",
            )
            await self.refresh_token_repository.save_changes()
            logger.warning(f"Refresh token reuse detected for user {existing.user_id}; revoked {revoked} tokens")
            raise AuthenticationError("Refresh token is no longer valid", user_id=existing.user_id)

        if existing.is_expired():
            raise AuthenticationError("Refresh token has expired", user_id=existing.user_id)

        replacement = RefreshToken.issue(
            user_id=existing.user_id,
            token=generate_secure_token(),
            jwt_id=new_jwt_id,
            expires_at=utc_now() + timedelta(days=self.settings.REFRESH_TOKEN_EXPIRE_DAYS),
            ip_address=ip_address,
            user_agent=existing.user_agent,
        )
        existing.mark_as_used()
        existing.revoke(ip_address, "Replaced by new token", replaced_by_token=replacement.token)

        await self.refresh_token_repository.update(existing)
        created = await self.refresh_token_repository.create(replacement)
        await self.refresh_token_repository.save_changes()

        logger.info(f"Rotated refresh token {existing.id} -> {created.id} for user {existing.user_id}")
        return created

    async def revoke_refresh_token(
        self,
        token: str,
        ip_address: Optional[str] = None,
        reason: Optional[str] = None,
    ) -> RefreshToken:
        """
        Revoke one refresh token.

        Raises:
            NotFoundError: If the token does not exist
            InvalidOperationError: If it is already revoked
        """
        token = require_text(token, "token")
        existing = await self.refresh_token_repository.get_by_token(token)
        if existing is None:
            raise NotFoundError(resource_type="RefreshToken", field="token")

        if existing.is_revoked:
            raise InvalidOperationError(
                "Refresh token is already revoked",
                operation="revoke",
                entity_type="RefreshToken",
                entity_id=existing.id,
            )

        existing.revoke(ip_address, reason or "Revoked by user")
        updated = await self.refresh_token_repository.update(existing)
        await self.refresh_token_repository.save_changes()
        logger.info(f"Revoked refresh token {existing.id} for user {existing.user_id}")
        return updated

    async def revoke_all_user_tokens(
        self,
        user_id: str,
        ip_address: Optional[str] = None,
        reason: Optional[str] = None,
    ) -> int:
        require_id(user_id, "user_id")
        revoked = await self.refresh_token_repository.revoke_all_for_user(
            user_id,
            utc_now(),
            ip_address=ip_address,
            reason=reason or "Revoked all sessions",
        )
        await self.refresh_token_repository.save_changes()
        logger.info(f"Revoked {revoked} refresh tokens for user {user_id}")
        return revoked

    # =========================================================================
    # PASSWORD RESET
    # =========================================================================

    async def create_password_reset_token(
        self,
        email: str,
        ip_address: Optional[str] = None,
    ) -> Optional[PasswordResetToken]:
        """
        Create a password reset token for the account with ``email``.

        Returns:
            The new token, or None when no account uses that email. Callers
            should answer both cases the same way to avoid leaking accounts.
        """
        logger.info(f"Initiating password reset for: {email}")
        user = await self.user_repository.get_by_email(require_text(email, "email").lower())
        if user is None:
            logger.info(f"Password reset requested for non-existent email: {email}")
            return None

        now = utc_now()
        await self.password_reset_token_repository.invalidate_for_user(user.id, now)
        reset_token = PasswordResetToken.issue(
            user_id=user.id,
            token=generate_secure_token(),
            expires_at=now + timedelta(hours=self.settings.PASSWORD_RESET_TOKEN_EXPIRE_HOURS),
            ip_address=ip_address,
        )
        created = await self.password_reset_token_repository.create(reset_token)
        await self.password_reset_token_repository.save_changes()

        logger.info(f"Password reset token generated for user: {user.id}")
        return created

    async def reset_password(self, token: str, new_password: str) -> User:
        """
        Complete a password reset.

        Raises:
            AuthenticationError: If the token is unknown, used or expired
            NotFoundError: If the account no longer exists
        """
        token = require_text(token, "token")
        new_password = require_text(new_password, "new_password")

        reset_token = await self.password_reset_token_repository.get_by_token(token)
        if reset_token is None or not reset_token.is_valid():
            logger.warning("Invalid or expired password reset token presented")
            raise AuthenticationError("Password reset token is invalid or has expired")

        user = await self.user_repository.get_by_id(reset_token.user_id)
        if user is None:
            raise NotFoundError(resource_type="User", resource_id=reset_token.user_id, field="user_id")

        reset_token.mark_as_used()
        user.update_password(get_password_hash(new_password))

        await self.password_reset_token_repository.update(reset_token)
        updated = await self.user_repository.update(user)
        await self.refresh_token_repository.revoke_all_for_user(user.id, utc_now(), reason="Password reset")
        await self.user_repository.save_changes()

        logger.info(f"Successfully reset password for user: {user.id}")
        return updated

    # =========================================================================
    # SESSIONS
    # =========================================================================

    async def start_session(
        self,
        user_id: str,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
        device_info: Optional[str] = None,
        location: Optional[str] = None,
    ) -> UserSession:
        require_id(user_id, "user_id")
        if await self.user_repository.get_by_id(user_id) is None:
            raise NotFoundError(resource_type="User", resource_id=user_id, field="user_id")

        session = UserSession(
            user_id=user_id,
            session_id=generate_secure_token(),
            expires_at=utc_now() + timedelta(hours=self.settings.SESSION_EXPIRE_HOURS),
            ip_address=ip_address,
            user_agent=user_agent,
            device_info=device_info,
            location=location,
        )
        created = await self.user_session_repository.create(session)
        await self.user_session_repository.save_changes()
        logger.info(f"Started session {created.id} for user {user_id}")
        return created

    async def _get_session(self, session_id: str) -> UserSession:
        session_id = require_text(session_id, "session_id")
        session = await self.user_session_repository.get_by_session_id(session_id)
        if session is None:
            raise NotFoundError(resource_type="UserSession", field="session_id")
        return session

    async def touch_session(self, session_id: str) -> UserSession:
        """
        Record activity on a session.

        Raises:
            NotFoundError: If the session does not exist
            AuthenticationError: If the session has expired (it is terminated)
            InvalidOperationError: If the session was already terminated
        """
        session = await self._get_session(session_id)

        if session.is_active and session.is_expired():
            session.terminate()
            await self.user_session_repository.update(session)
            await self.user_session_repository.save_changes()
            logger.info(f"Session {session.id} expired and was terminated")
            raise AuthenticationError("Session has expired", user_id=session.user_id)

        session.update_activity()
        updated = await self.user_session_repository.update(session)
        await self.user_session_repository.save_changes()
        return updated

    async def end_session(self, session_id: str) -> bool:
        session = await self._get_session(session_id)
        session.terminate()
        await self.user_session_repository.update(session)
        await self.user_session_repository.save_changes()
        logger.info(f"Ended session {session.id} for user {session.user_id}")
        return True

    # =========================================================================
    # CLEANUP
    # =========================================================================

    async def cleanup_expired_tokens(self) -> int:
        """Delete expired refresh tokens, reset tokens and sessions."""
        now = utc_now()
        deleted = await self.refresh_token_repository.delete_expired(now)
        deleted += await self.password_reset_token_repository.delete_expired(now)
        deleted += await self.user_session_repository.delete_expired(now)
        await self.refresh_token_repository.save_changes()

        logger.info(f"Deleted {deleted} expired tokens and sessions")
        return deleted
