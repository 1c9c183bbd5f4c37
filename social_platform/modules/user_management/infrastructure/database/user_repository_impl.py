# 📄 File: social_platform/modules/user_management/infrastructure/database/user_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# This file handles all database operations for user accounts, like creating new users,
# finding existing users, updating their information and searching by name.
#
# 🧪 Purpose (Technical Summary):
# Concrete implementation of UserRepository using SQLAlchemy ORM, with explicit
# domain <-> row mapping and the shared SQLAlchemyRepository error translation.
#
# 🔗 Dependencies:
# - social_platform.modules.user_management.domain.repositories.user_repository (interface)
# - social_platform.modules.user_management.domain.models.user (domain model)
# - social_platform.modules.user_management.infrastructure.database.models (UserModel)
# - social_platform.shared.infrastructure.database.repository (SQLAlchemyRepository)
#
# 🔄 Connected Modules / Calls From:
# - user_service.py, auth_token_service.py, like_service.py
# - social_platform.shared.core.dependencies (ServiceContainer)

"""
User Repository Implementation

Handles the mapping between domain User entities and UserModel rows.
Email and username are compared lower-cased, matching how they are stored.
"""

import logging
from typing import List, Optional, Sequence

from sqlalchemy import func, or_, select

from social_platform.modules.user_management.domain.models.user import User
from social_platform.modules.user_management.domain.repositories.user_repository import UserRepository
from social_platform.modules.user_management.infrastructure.database.models import UserModel
from social_platform.shared.core.exceptions import NotFoundError
from social_platform.shared.infrastructure.database.repository import LIKE_ESCAPE, SQLAlchemyRepository, contains_pattern

logger = logging.getLogger(__name__)


class UserRepositoryImpl(SQLAlchemyRepository, UserRepository):
    """
    SQLAlchemy implementation of the UserRepository interface.
    """

    resource_type = "User"

    async def create(self, user: User) -> User:
        """
        Stage a new user for insertion.

        Raises:
            DuplicateResourceError: If the email or username is already taken
        """
        user_model = self._domain_to_model(user)
        await self._add(user_model)
        logger.info(f"Created user with ID: {user_model.id}")
        return self._model_to_domain(user_model)

    async def get_by_id(self, user_id: str) -> Optional[User]:
        user_model = await self._get(UserModel, user_id)
        if user_model is None:
            logger.debug(f"User not found: {user_id}")
            return None
        return self._model_to_domain(user_model)

    async def get_by_email(self, email: str) -> Optional[User]:
        stmt = select(UserModel).where(UserModel.email == email.strip().lower())
        user_model = await self._scalar_one_or_none(stmt, "get_by_email")
        return self._model_to_domain(user_model) if user_model else None

    async def get_by_username(self, username: str) -> Optional[User]:
        stmt = select(UserModel).where(UserModel.username == username.strip().lower())
        user_model = await self._scalar_one_or_none(stmt, "get_by_username")
        return self._model_to_domain(user_model) if user_model else None

    async def get_by_ids(self, user_ids: Sequence[str]) -> List[User]:
        if not user_ids:
            return []
        stmt = select(UserModel).where(UserModel.id.in_(list(user_ids)))
        models = {model.id: model for model in await self._scalars(stmt, "get_by_ids")}
        return [self._model_to_domain(models[user_id]) for user_id in user_ids if user_id in models]

    async def is_email_taken(self, email: str) -> bool:
        return await self._count(UserModel, UserModel.email == email.strip().lower()) > 0

    async def is_username_taken(self, username: str) -> bool:
        return await self._count(UserModel, UserModel.username == username.strip().lower()) > 0

    async def search(self, term: str, limit: int, offset: int) -> List[User]:
        pattern = contains_pattern(term)
        stmt = (
            select(UserModel)
            .where(
                or_(
                    UserModel.username.like(pattern, escape=LIKE_ESCAPE),
                    func.lower(UserModel.display_name).like(pattern, escape=LIKE_ESCAPE),
                )
            )
            .order_by(UserModel.username)
            .limit(limit)
            .offset(offset)
        )
        models = await self._scalars(stmt, "search")
        logger.debug(f"User search '{term}' matched {len(models)} users")
        return [self._model_to_domain(model) for model in models]

    async def update(self, user: User) -> User:
        """
        Write every field of ``user`` back to its row.

        Raises:
            NotFoundError: If the user no longer exists
            DuplicateResourceError: If a changed email collides with another account
        """
        user_model = await self._get(UserModel, user.id)
        if user_model is None:
            raise NotFoundError(resource_type=self.resource_type, resource_id=user.id)

        self._update_model_from_domain(user_model, user)
        await self._flush("update")
        self._record_changes()
        logger.info(f"Updated user: {user.id}")
        return self._model_to_domain(user_model)

    async def delete(self, user_id: str) -> bool:
        user_model = await self._get(UserModel, user_id)
        if user_model is None:
            return False
        await self._delete_model(user_model)
        logger.info(f"Deleted user: {user_id}")
        return True

    # =========================================================================
    # MAPPING
    # =========================================================================

    _FIELDS = (
        "email", "username", "display_name", "password_hash", "bio", "location", "website",
        "profile_image_url", "cover_image_url", "is_private", "is_verified", "birth_date",
        "last_login_at", "password_changed_at", "failed_login_attempts", "lockout_end_at",
        "is_email_confirmed", "email_confirmation_token", "email_confirmed_at",
        "two_factor_enabled", "created_at", "updated_at",
    )

    def _domain_to_model(self, user: User) -> UserModel:
        user_model = UserModel(id=user.id)
        self._update_model_from_domain(user_model, user)
        return user_model

    def _update_model_from_domain(self, user_model: UserModel, user: User) -> None:
        for field in self._FIELDS:
            setattr(user_model, field, getattr(user, field))

    def _model_to_domain(self, user_model: UserModel) -> User:
        data = {field: getattr(user_model, field) for field in self._FIELDS}
        return User(id=str(user_model.id), **data)
