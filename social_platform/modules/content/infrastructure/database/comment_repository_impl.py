# 📄 File: social_platform/modules/content/infrastructure/database/comment_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# Saves comments and lists them under a post or for a person.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy implementation of CommentRepository with explicit row <-> domain mapping.
#
# 🔗 Dependencies:
# - social_platform.modules.content.domain (Comment, CommentRepository)
# - social_platform.modules.content.infrastructure.database.models (CommentModel)
# - social_platform.shared.infrastructure.database.repository (SQLAlchemyRepository)
#
# 🔄 Connected Modules / Calls From:
# - comment_service.py, post_service.py

import logging
from typing import List, Optional

from sqlalchemy import select

from social_platform.modules.content.domain.models.comment import Comment
from social_platform.modules.content.domain.repositories.comment_repository import CommentRepository
from social_platform.modules.content.infrastructure.database.models import CommentModel
from social_platform.shared.core.exceptions import NotFoundError
from social_platform.shared.infrastructure.database.repository import SQLAlchemyRepository

logger = logging.getLogger(__name__)


class CommentRepositoryImpl(SQLAlchemyRepository, CommentRepository):
    """SQLAlchemy implementation of the CommentRepository interface."""

    resource_type = "Comment"

    async def create(self, comment: Comment) -> Comment:
        comment_model = CommentModel(
            id=comment.id,
            user_id=comment.user_id,
            post_id=comment.post_id,
            content=comment.content,
            is_edited=comment.is_edited,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
        )
        await self._add(comment_model)
        logger.info(f"Created comment {comment.id} on post {comment.post_id}")
        return self._model_to_domain(comment_model)

    async def get_by_id(self, comment_id: str) -> Optional[Comment]:
        comment_model = await self._get(CommentModel, comment_id)
        return self._model_to_domain(comment_model) if comment_model else None

    async def get_by_post(self, post_id: str, limit: int, offset: int) -> List[Comment]:
        stmt = (
            select(CommentModel)
            .where(CommentModel.post_id == post_id)
            .order_by(CommentModel.created_at.asc())
            .limit(limit)
            .offset(offset)
        )
        return [self._model_to_domain(model) for model in await self._scalars(stmt, "get_by_post")]

    async def get_by_user(self, user_id: str, limit: int, offset: int) -> List[Comment]:
        stmt = (
            select(CommentModel)
            .where(CommentModel.user_id == user_id)
            .order_by(CommentModel.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        return [self._model_to_domain(model) for model in await self._scalars(stmt, "get_by_user")]

    async def count_by_post(self, post_id: str) -> int:
        return await self._count(CommentModel, CommentModel.post_id == post_id)

    async def count_by_user(self, user_id: str) -> int:
        return await self._count(CommentModel, CommentModel.user_id == user_id)

    async def update(self, comment: Comment) -> Comment:
        comment_model = await self._get(CommentModel, comment.id)
        if comment_model is None:
            raise NotFoundError(resource_type=self.resource_type, resource_id=comment.id)
        comment_model.content = comment.content
        comment_model.is_edited = comment.is_edited
        comment_model.updated_at = comment.updated_at
        await self._flush("update")
        self._record_changes()
        return self._model_to_domain(comment_model)

    async def delete(self, comment_id: str) -> bool:
        comment_model = await self._get(CommentModel, comment_id)
        if comment_model is None:
            return False
        await self._delete_model(comment_model)
        return True

    @staticmethod
    def _model_to_domain(comment_model: CommentModel) -> Comment:
        return Comment(
            id=str(comment_model.id),
            user_id=str(comment_model.user_id),
            post_id=str(comment_model.post_id),
            content=comment_model.content,
            is_edited=comment_model.is_edited,
            created_at=comment_model.created_at,
            updated_at=comment_model.updated_at,
        )
