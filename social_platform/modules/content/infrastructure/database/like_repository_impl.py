# 📄 File: social_platform/modules/content/infrastructure/database/like_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# Saves likes, removes them and answers "who liked this" and "how many likes".
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy implementation of LikeRepository. The (user_id, post_id) unique constraint makes a
# racing duplicate like surface as DuplicateResourceError from the shared base.
#
# 🔗 Dependencies:
# - social_platform.modules.content.domain (Like, LikeRepository)
# - social_platform.modules.content.infrastructure.database.models (LikeModel)
# - social_platform.shared.infrastructure.database.repository (SQLAlchemyRepository)
#
# 🔄 Connected Modules / Calls From:
# - like_service.py, post_service.py

import logging
from typing import List, Optional

from sqlalchemy import select

from social_platform.modules.content.domain.models.like import Like
from social_platform.modules.content.domain.repositories.like_repository import LikeRepository
from social_platform.modules.content.infrastructure.database.models import LikeModel
from social_platform.shared.core.exceptions import NotFoundError
from social_platform.shared.infrastructure.database.repository import SQLAlchemyRepository

logger = logging.getLogger(__name__)


class LikeRepositoryImpl(SQLAlchemyRepository, LikeRepository):

    resource_type = "Like"

    async def create(self, like: Like) -> Like:
        like_model = LikeModel(id=like.id, user_id=like.user_id, post_id=like.post_id, created_at=like.created_at)
        await self._add(like_model)
        logger.info(f"User {like.user_id} liked post {like.post_id}")
        return self._model_to_domain(like_model)

    async def get_by_id(self, like_id: str) -> Optional[Like]:
        like_model = await self._get(LikeModel, like_id)
        return self._model_to_domain(like_model) if like_model else None

    async def get_by_user_and_post(self, user_id: str, post_id: str) -> Optional[Like]:
        stmt = select(LikeModel).where(LikeModel.user_id == user_id, LikeModel.post_id == post_id)
        like_model = await self._scalar_one_or_none(stmt, "get_by_user_and_post")
        return self._model_to_domain(like_model) if like_model else None

    async def exists(self, user_id: str, post_id: str) -> bool:
        return await self._count(LikeModel, LikeModel.user_id == user_id, LikeModel.post_id == post_id) > 0

    async def get_by_post(self, post_id: str, limit: int, offset: int) -> List[Like]:
        stmt = (
            select(LikeModel)
            .where(LikeModel.post_id == post_id)
            .order_by(LikeModel.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        return [self._model_to_domain(model) for model in await self._scalars(stmt, "get_by_post")]

    async def get_by_user(self, user_id: str, limit: int, offset: int) -> List[Like]:
        stmt = (
            select(LikeModel)
            .where(LikeModel.user_id == user_id)
            .order_by(LikeModel.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        return [self._model_to_domain(model) for model in await self._scalars(stmt, "get_by_user")]

    async def count_by_post(self, post_id: str) -> int:
        return await self._count(LikeModel, LikeModel.post_id == post_id)

    async def count_by_user(self, user_id: str) -> int:
        return await self._count(LikeModel, LikeModel.user_id == user_id)

    async def update(self, like: Like) -> Like:
        # Likes carry no mutable state; this only confirms the row exists
        like_model = await self._get(LikeModel, like.id)
        if like_model is None:
            raise NotFoundError(resource_type=self.resource_type, resource_id=like.id)
        return self._model_to_domain(like_model)

    async def delete(self, like_id: str) -> bool:
        like_model = await self._get(LikeModel, like_id)
        if like_model is None:
            return False
        await self._delete_model(like_model)
        logger.info(f"Removed like {like_id}")
        return True

    @staticmethod
    def _model_to_domain(like_model: LikeModel) -> Like:
        return Like(
            id=str(like_model.id),
            user_id=str(like_model.user_id),
            post_id=str(like_model.post_id),
            created_at=like_model.created_at,
        )
