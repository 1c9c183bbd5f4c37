# 📄 File: social_platform/modules/content/infrastructure/database/share_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# Saves re-shares of posts and counts them.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy implementation of ShareRepository with explicit row <-> domain mapping.
#
# 🔗 Dependencies:
# - social_platform.modules.content.domain (Share, ShareRepository)
# - social_platform.modules.content.infrastructure.database.models (ShareModel)
# - social_platform.shared.infrastructure.database.repository (SQLAlchemyRepository)
#
# 🔄 Connected Modules / Calls From:
# - share_service.py, post_service.py

from typing import List, Optional

from sqlalchemy import select

from social_platform.modules.content.domain.models.share import Share
from social_platform.modules.content.domain.repositories.share_repository import ShareRepository
from social_platform.modules.content.infrastructure.database.models import ShareModel
from social_platform.shared.core.exceptions import NotFoundError
from social_platform.shared.infrastructure.database.repository import SQLAlchemyRepository


class ShareRepositoryImpl(SQLAlchemyRepository, ShareRepository):

    resource_type = "Share"

    async def create(self, share: Share) -> Share:
        share_model = ShareModel(
            id=share.id,
            user_id=share.user_id,
            post_id=share.post_id,
            comment=share.comment,
            created_at=share.created_at,
        )
        await self._add(share_model)
        return self._model_to_domain(share_model)

    async def get_by_id(self, share_id: str) -> Optional[Share]:
        share_model = await self._get(ShareModel, share_id)
        return self._model_to_domain(share_model) if share_model else None

    async def exists(self, user_id: str, post_id: str) -> bool:
        return await self._count(ShareModel, ShareModel.user_id == user_id, ShareModel.post_id == post_id) > 0

    async def get_by_post(self, post_id: str, limit: int, offset: int) -> List[Share]:
        stmt = (
            select(ShareModel)
            .where(ShareModel.post_id == post_id)
            .order_by(ShareModel.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        return [self._model_to_domain(model) for model in await self._scalars(stmt, "get_by_post")]

    async def get_by_user(self, user_id: str, limit: int, offset: int) -> List[Share]:
        stmt = (
            select(ShareModel)
            .where(ShareModel.user_id == user_id)
            .order_by(ShareModel.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        return [self._model_to_domain(model) for model in await self._scalars(stmt, "get_by_user")]

    async def count_by_post(self, post_id: str) -> int:
        return await self._count(ShareModel, ShareModel.post_id == post_id)

    async def update(self, share: Share) -> Share:
        share_model = await self._get(ShareModel, share.id)
        if share_model is None:
            raise NotFoundError(resource_type=self.resource_type, resource_id=share.id)
        share_model.comment = share.comment
        await self._flush("update")
        self._record_changes()
        return self._model_to_domain(share_model)

    async def delete(self, share_id: str) -> bool:
        share_model = await self._get(ShareModel, share_id)
        if share_model is None:
            return False
        await self._delete_model(share_model)
        return True

    @staticmethod
    def _model_to_domain(share_model: ShareModel) -> Share:
        return Share(
            id=str(share_model.id),
            user_id=str(share_model.user_id),
            post_id=str(share_model.post_id),
            comment=share_model.comment,
            created_at=share_model.created_at,
        )
