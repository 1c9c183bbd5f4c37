# 📄 File: social_platform/modules/user_management/infrastructure/database/follow_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# Stores and looks up who follows whom, and which follow requests are still waiting.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy implementation of FollowRepository. The (follower, followee) unique constraint
# turns a concurrent duplicate follow into DuplicateResourceError.
#
# 🔗 Dependencies:
# - social_platform.modules.user_management.domain (Follow, FollowRepository)
# - social_platform.modules.user_management.infrastructure.database.models (FollowModel)
# - social_platform.shared.infrastructure.database.repository (SQLAlchemyRepository)
#
# 🔄 Connected Modules / Calls From:
# - user_service.py, post_service.py, share_service.py

import logging
from typing import List, Optional

from sqlalchemy import and_, select

from social_platform.modules.user_management.domain.models.follow import Follow
from social_platform.modules.user_management.domain.repositories.follow_repository import FollowRepository
from social_platform.modules.user_management.infrastructure.database.models import FollowModel
from social_platform.shared.core.exceptions import NotFoundError
from social_platform.shared.infrastructure.database.repository import SQLAlchemyRepository

logger = logging.getLogger(__name__)


class FollowRepositoryImpl(SQLAlchemyRepository, FollowRepository):
    """SQLAlchemy implementation of the FollowRepository interface."""

    resource_type = "Follow"

    async def create(self, follow: Follow) -> Follow:
        follow_model = self._domain_to_model(follow)
        await self._add(follow_model)
        logger.info(f"Created follow {follow.follower_id} -> {follow.followee_id} (accepted={follow.is_accepted})")
        return self._model_to_domain(follow_model)

    async def get_by_id(self, follow_id: str) -> Optional[Follow]:
        follow_model = await self._get(FollowModel, follow_id)
        return self._model_to_domain(follow_model) if follow_model else None

    async def get_by_pair(self, follower_id: str, followee_id: str) -> Optional[Follow]:
        stmt = select(FollowModel).where(
            and_(FollowModel.follower_id == follower_id, FollowModel.followee_id == followee_id)
        )
        follow_model = await self._scalar_one_or_none(stmt, "get_by_pair")
        return self._model_to_domain(follow_model) if follow_model else None

    async def get_followers(self, user_id: str, limit: int, offset: int) -> List[Follow]:
        stmt = (
            select(FollowModel)
            .where(FollowModel.followee_id == user_id, FollowModel.is_accepted.is_(True))
            .order_by(FollowModel.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        return [self._model_to_domain(model) for model in await self._scalars(stmt, "get_followers")]

    async def get_following(self, user_id: str, limit: int, offset: int) -> List[Follow]:
        stmt = (
            select(FollowModel)
            .where(FollowModel.follower_id == user_id, FollowModel.is_accepted.is_(True))
            .order_by(FollowModel.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        return [self._model_to_domain(model) for model in await self._scalars(stmt, "get_following")]

    async def get_pending_requests(self, user_id: str, limit: int, offset: int) -> List[Follow]:
        stmt = (
            select(FollowModel)
            .where(FollowModel.followee_id == user_id, FollowModel.is_accepted.is_(False))
            .order_by(FollowModel.created_at.asc())
            .limit(limit)
            .offset(offset)
        )
        return [self._model_to_domain(model) for model in await self._scalars(stmt, "get_pending_requests")]

    async def get_accepted_followee_ids(self, follower_id: str) -> List[str]:
        stmt = select(FollowModel.followee_id).where(
            FollowModel.follower_id == follower_id, FollowModel.is_accepted.is_(True)
        )
        return [str(followee_id) for followee_id in await self._scalars(stmt, "get_accepted_followee_ids")]

    async def count_followers(self, user_id: str) -> int:
        return await self._count(FollowModel, FollowModel.followee_id == user_id, FollowModel.is_accepted.is_(True))

    async def count_following(self, user_id: str) -> int:
        return await self._count(FollowModel, FollowModel.follower_id == user_id, FollowModel.is_accepted.is_(True))

    async def count_pending_requests(self, user_id: str) -> int:
        return await self._count(FollowModel, FollowModel.followee_id == user_id, FollowModel.is_accepted.is_(False))

    async def update(self, follow: Follow) -> Follow:
        follow_model = await self._get(FollowModel, follow.id)
        if follow_model is None:
            raise NotFoundError(resource_type=self.resource_type, resource_id=follow.id)
        follow_model.is_accepted = follow.is_accepted
        follow_model.accepted_at = follow.accepted_at
        await self._flush("update")
        self._record_changes()
        return self._model_to_domain(follow_model)

    async def delete(self, follow_id: str) -> bool:
        follow_model = await self._get(FollowModel, follow_id)
        if follow_model is None:
            return False
        await self._delete_model(follow_model)
        logger.info(f"Deleted follow {follow_model.follower_id} -> {follow_model.followee_id}")
        return True

    # =========================================================================
    # MAPPING
    # =========================================================================

    @staticmethod
    def _domain_to_model(follow: Follow) -> FollowModel:
        return FollowModel(
            id=follow.id,
            follower_id=follow.follower_id,
            followee_id=follow.followee_id,
            is_accepted=follow.is_accepted,
            accepted_at=follow.accepted_at,
            created_at=follow.created_at,
        )

    @staticmethod
    def _model_to_domain(follow_model: FollowModel) -> Follow:
        return Follow(
            id=str(follow_model.id),
            follower_id=str(follow_model.follower_id),
            followee_id=str(follow_model.followee_id),
            is_accepted=follow_model.is_accepted,
            accepted_at=follow_model.accepted_at,
            created_at=follow_model.created_at,
        )
