# 📄 File: social_platform/modules/user_management/infrastructure/database/auth_token_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# Stores refresh tokens, password reset tokens and device sessions, and clears out expired ones.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy implementations of the three auth token repositories. Each maps its value object
# field-by-field; bulk revocation and cleanup run as single UPDATE/DELETE statements.
#
# 🔗 Dependencies:
# - social_platform.modules.user_management.domain (auth token models and repositories)
# - social_platform.modules.user_management.infrastructure.database.models
# - social_platform.shared.infrastructure.database.repository (SQLAlchemyRepository)
#
# 🔄 Connected Modules / Calls From:
# - auth_token_service.py

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import delete, select, update

from social_platform.modules.user_management.domain.models.auth_tokens import (
    PasswordResetToken,
    RefreshToken,
    UserSession,
)
from social_platform.modules.user_management.domain.repositories.auth_token_repository import (
    PasswordResetTokenRepository,
    RefreshTokenRepository,
    UserSessionRepository,
)
from social_platform.modules.user_management.infrastructure.database.models import (
    PasswordResetTokenModel,
    RefreshTokenModel,
    UserSessionModel,
)
from social_platform.shared.core.exceptions import NotFoundError
from social_platform.shared.infrastructure.database.repository import SQLAlchemyRepository
from social_platform.shared.utils.helpers import utc_now

logger = logging.getLogger(__name__)


class _FieldMappedRepository(SQLAlchemyRepository):
    """
    CRUD for value objects whose columns mirror their fields one-to-one.

    Subclasses set ``model_class``, ``domain_class`` and ``fields``.
    """

    model_class: Any = None
    domain_class: Any = None
    fields: Tuple[str, ...] = ()

    async def create(self, entity):
        model = self.model_class(id=entity.id, **self._field_values(entity))
        await self._add(model)
        return self._model_to_domain(model)

    async def get_by_id(self, entity_id: str):
        model = await self._get(self.model_class, entity_id)
        return self._model_to_domain(model) if model else None

    async def update(self, entity):
        model = await self._get(self.model_class, entity.id)
        if model is None:
            raise NotFoundError(resource_type=self.resource_type, resource_id=entity.id)
        for field, value in self._field_values(entity).items():
            setattr(model, field, value)
        await self._flush("update")
        self._record_changes()
        return self._model_to_domain(model)

    async def delete(self, entity_id: str) -> bool:
        model = await self._get(self.model_class, entity_id)
        if model is None:
            return False
        await self._delete_model(model)
        return True

    async def delete_expired(self, now: datetime) -> int:
        stmt = delete(self.model_class).where(self.model_class.expires_at < now)
        removed = await self._execute_write(stmt, "delete_expired")
        if removed:
            logger.info(f"Removed {removed} expired {self.resource_type} rows")
        return removed

    def _field_values(self, entity) -> Dict[str, Any]:
        return {field: getattr(entity, field) for field in self.fields}

    def _model_to_domain(self, model):
        data = {field: getattr(model, field) for field in self.fields}
        data["user_id"] = str(data["user_id"])
        return self.domain_class(id=str(model.id), **data)


# =============================================================================
# REFRESH TOKENS
# =============================================================================

class RefreshTokenRepositoryImpl(_FieldMappedRepository, RefreshTokenRepository):
    resource_type = "RefreshToken"
    model_class = RefreshTokenModel
    domain_class = RefreshToken
    fields = (
        "user_id", "token", "jwt_id", "created_at", "expires_at", "is_used", "is_revoked",
        "revoked_at", "revoked_by_ip", "revoked_reason", "replaced_by_token", "ip_address", "user_agent",
    )

    async def get_by_token(self, token: str) -> Optional[RefreshToken]:
        stmt = select(RefreshTokenModel).where(RefreshTokenModel.token == token)
        model = await self._scalar_one_or_none(stmt, "get_by_token")
        return self._model_to_domain(model) if model else None

    async def get_active_by_user(self, user_id: str) -> List[RefreshToken]:
        stmt = (
            select(RefreshTokenModel)
            .where(
                RefreshTokenModel.user_id == user_id,
                RefreshTokenModel.is_used.is_(False),
                RefreshTokenModel.is_revoked.is_(False),
                RefreshTokenModel.expires_at > utc_now(),
            )
            .order_by(RefreshTokenModel.created_at.desc())
        )
        return [self._model_to_domain(model) for model in await self._scalars(stmt, "get_active_by_user")]

    async def revoke_all_for_user(
        self,
        user_id: str,
        revoked_at: datetime,
        ip_address: Optional[str] = None,
        reason: Optional[str] = None,
    ) -> int:
        stmt = (
            update(RefreshTokenModel)
            .where(RefreshTokenModel.user_id == user_id, RefreshTokenModel.is_revoked.is_(False))
            .values(is_revoked=True, revoked_at=revoked_at, revoked_by_ip=ip_address, revoked_reason=reason)
            .execution_options(synchronize_session="evaluate")
        )
        revoked = await self._execute_write(stmt, "revoke_all_for_user")
        logger.warning(f"Revoked {revoked} refresh tokens for user {user_id}: {reason}")
        return revoked


# =============================================================================
# PASSWORD RESET TOKENS
# =============================================================================

class PasswordResetTokenRepositoryImpl(_FieldMappedRepository, PasswordResetTokenRepository):
    resource_type = "PasswordResetToken"
    model_class = PasswordResetTokenModel
    domain_class = PasswordResetToken
    fields = ("user_id", "token", "created_at", "expires_at", "is_used", "used_at", "ip_address")

    async def get_by_token(self, token: str) -> Optional[PasswordResetToken]:
        stmt = select(PasswordResetTokenModel).where(PasswordResetTokenModel.token == token)
        model = await self._scalar_one_or_none(stmt, "get_by_token")
        return self._model_to_domain(model) if model else None

    async def invalidate_for_user(self, user_id: str, used_at: datetime) -> int:
        stmt = (
            update(PasswordResetTokenModel)
            .where(PasswordResetTokenModel.user_id == user_id, PasswordResetTokenModel.is_used.is_(False))
            .values(is_used=True, used_at=used_at)
            .execution_options(synchronize_session="evaluate")
        )
        return await self._execute_write(stmt, "invalidate_for_user")


# =============================================================================
# USER SESSIONS
# =============================================================================

class UserSessionRepositoryImpl(_FieldMappedRepository, UserSessionRepository):
    resource_type = "UserSession"
    model_class = UserSessionModel
    domain_class = UserSession
    fields = (
        "user_id", "session_id", "created_at", "last_activity_at", "expires_at", "is_active",
        "ip_address", "user_agent", "device_info", "location",
    )

    async def get_by_session_id(self, session_id: str) -> Optional[UserSession]:
        stmt = select(UserSessionModel).where(UserSessionModel.session_id == session_id)
        model = await self._scalar_one_or_none(stmt, "get_by_session_id")
        return self._model_to_domain(model) if model else None

    async def get_active_by_user(self, user_id: str) -> List[UserSession]:
        stmt = (
            select(UserSessionModel)
            .where(
                UserSessionModel.user_id == user_id,
                UserSessionModel.is_active.is_(True),
                UserSessionModel.expires_at > utc_now(),
            )
            .order_by(UserSessionModel.last_activity_at.desc())
        )
        return [self._model_to_domain(model) for model in await self._scalars(stmt, "get_active_by_user")]
