# 📄 File: social_platform/modules/user_management/domain/models/auth_tokens.py
# 🧭 Purpose (Layman Explanation):
# The "tickets" a signed-in user holds: a refresh token to stay logged in, a one-time
# password reset link, and a record of each device session.
# 🧪 Purpose (Technical Summary):
# Auth-adjacent value objects with expiry, usage and revocation state. Issue-time factories
# require a future expiry; rehydration from storage does not re-check it so expired rows still load.
# 🔗 Dependencies:
# pydantic, datetime, social_platform.shared (exceptions, validators, helpers)
# 🔄 Connected Modules / Calls From:
# auth_token_service.py, auth_token_repository.py, auth_token_repository_impl.py

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from social_platform.shared.core.exceptions import InvalidOperationError, ValidationError
from social_platform.shared.utils.helpers import as_utc, generate_uuid, utc_now
from social_platform.shared.utils.validators import require_id, require_text


def _require_future(expires_at: datetime) -> None:
    if expires_at <= utc_now():
        raise ValidationError(
            "Expiry date must be in the future",
            field="expires_at",
            value=expires_at.isoformat(),
        )


# =============================================================================
# REFRESH TOKEN
# =============================================================================

class RefreshToken(BaseModel):
    """
    Opaque refresh token bound to one access-token id (``jwt_id``).

    A token is active while it is unused, unrevoked and unexpired. Revoking
    does not guard against being called twice; callers check ``is_revoked``.
    """

    id: str = Field(default_factory=generate_uuid)
    user_id: str
    token: str
    jwt_id: str
    created_at: datetime = Field(default_factory=utc_now)
    expires_at: datetime
    is_used: bool = False
    is_revoked: bool = False
    revoked_at: Optional[datetime] = None
    revoked_by_ip: Optional[str] = None
    revoked_reason: Optional[str] = None
    replaced_by_token: Optional[str] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None

    @field_validator("id", "user_id", mode="before")
    @classmethod
    def validate_ids(cls, v, info):
        return require_id(v, info.field_name)

    @field_validator("expires_at")
    @classmethod
    def validate_expires_at(cls, v):
        return as_utc(v)

    @field_validator("token", "jwt_id", mode="before")
    @classmethod
    def validate_required_text(cls, v, info):
        return require_text(v, info.field_name)

    @classmethod
    def issue(
        cls,
        user_id: str,
        token: str,
        jwt_id: str,
        expires_at: datetime,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> "RefreshToken":
        """Issue a new refresh token; ``expires_at`` must lie in the future."""
        refresh_token = cls(
            user_id=user_id,
            token=token,
            jwt_id=jwt_id,
            expires_at=expires_at,
            ip_address=ip_address,
            user_agent=user_agent,
        )
        _require_future(refresh_token.expires_at)
        return refresh_token

    def is_expired(self) -> bool:
        return utc_now() >= self.expires_at

    def is_active(self) -> bool:
        return not self.is_used and not self.is_revoked and not self.is_expired()

    def mark_as_used(self) -> None:
        """Consume the token during rotation."""
        if self.is_used:
            raise InvalidOperationError("Refresh token has already been used", operation="mark_as_used", entity_type="RefreshToken", entity_id=self.id)
        if self.is_revoked:
            raise InvalidOperationError("Cannot use a revoked refresh token", operation="mark_as_used", entity_type="RefreshToken", entity_id=self.id)
        if self.is_expired():
            raise InvalidOperationError("Cannot use an expired refresh token", operation="mark_as_used", entity_type="RefreshToken", entity_id=self.id)
        self.is_used = True

    def revoke(
        self,
        ip_address: Optional[str] = None,
        reason: Optional[str] = None,
        replaced_by_token: Optional[str] = None,
    ) -> None:
        self.is_revoked = True
        self.revoked_at = utc_now()
        self.revoked_by_ip = ip_address
        self.revoked_reason = reason
        self.replaced_by_token = replaced_by_token

    def revoke_descendant_refresh_tokens(self, ip_address: Optional[str] = None, reason: Optional[str] = None) -> None:
        self.revoke(ip_address, reason or "Compromised token chain detected")


# =============================================================================
# PASSWORD RESET TOKEN
# =============================================================================

class PasswordResetToken(BaseModel):
    """Single-use password reset token."""

    id: str = Field(default_factory=generate_uuid)
    user_id: str
    token: str
    created_at: datetime = Field(default_factory=utc_now)
    expires_at: datetime
    is_used: bool = False
    used_at: Optional[datetime] = None
    ip_address: Optional[str] = None

    @field_validator("id", "user_id", mode="before")
    @classmethod
    def validate_ids(cls, v, info):
        return require_id(v, info.field_name)

    @field_validator("expires_at")
    @classmethod
    def validate_expires_at(cls, v):
        return as_utc(v)

    @field_validator("token", mode="before")
    @classmethod
    def validate_token(cls, v):
        return require_text(v, "token")

    @classmethod
    def issue(
        cls,
        user_id: str,
        token: str,
        expires_at: datetime,
        ip_address: Optional[str] = None,
    ) -> "PasswordResetToken":
        reset_token = cls(user_id=user_id, token=token, expires_at=expires_at, ip_address=ip_address)
        _require_future(reset_token.expires_at)
        return reset_token

    def is_expired(self) -> bool:
        return utc_now() >= self.expires_at

    def is_valid(self) -> bool:
        return not self.is_used and not self.is_expired()

    def mark_as_used(self) -> None:
        if self.is_used:
            raise InvalidOperationError("Password reset token has already been used", operation="mark_as_used", entity_type="PasswordResetToken", entity_id=self.id)
        if self.is_expired():
            raise InvalidOperationError("Password reset token has expired", operation="mark_as_used", entity_type="PasswordResetToken", entity_id=self.id)
        self.is_used = True
        self.used_at = utc_now()


# =============================================================================
# USER SESSION
# =============================================================================

class UserSession(BaseModel):
    """A signed-in device session."""

    id: str = Field(default_factory=generate_uuid)
    user_id: str
    session_id: str
    created_at: datetime = Field(default_factory=utc_now)
    last_activity_at: datetime = Field(default_factory=utc_now)
    expires_at: datetime
    is_active: bool = True
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    device_info: Optional[str] = None
    location: Optional[str] = None

    @field_validator("id", "user_id", mode="before")
    @classmethod
    def validate_ids(cls, v, info):
        return require_id(v, info.field_name)

    @field_validator("expires_at")
    @classmethod
    def validate_expires_at(cls, v):
        return as_utc(v)

    @field_validator("session_id", mode="before")
    @classmethod
    def validate_session_id(cls, v):
        return require_text(v, "session_id")

    def update_activity(self) -> None:
        if not self.is_active:
            raise InvalidOperationError(
                "Cannot update activity for inactive session",
                operation="update_activity",
                entity_type="UserSession",
                entity_id=self.id,
            )
        self.last_activity_at = utc_now()

    def terminate(self) -> None:
        self.is_active = False

    def is_expired(self) -> bool:
        return utc_now() >= self.expires_at

    def is_valid_session(self) -> bool:
        return self.is_active and not self.is_expired()
