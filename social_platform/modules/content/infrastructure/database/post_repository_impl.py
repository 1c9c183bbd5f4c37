# 📄 File: social_platform/modules/content/infrastructure/database/post_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# This file handles all database work for posts: saving them with their photos and videos,
# building the home feed and public timeline, finding replies and searching.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy implementation of PostRepository. Maps the Post aggregate (post row plus attachment
# rows) explicitly in both directions; update() synchronizes the attachment collection.
#
# 🔗 Dependencies:
# - social_platform.modules.content.domain (Post, MediaAttachment, PostRepository)
# - social_platform.modules.content.infrastructure.database.models (PostModel, MediaAttachmentModel)
# - social_platform.modules.user_management.infrastructure.database.models (FollowModel, feed subquery)
# - social_platform.shared.infrastructure.database.repository (SQLAlchemyRepository)
#
# 🔄 Connected Modules / Calls From:
# - post_service.py, comment_service.py, like_service.py, share_service.py

"""
Post Repository Implementation

Feed query:
    own top-level posts
    UNION top-level PUBLIC/FOLLOWERS posts by authors the user follows (accepted)

Viewer filter (author listings, replies), applied before LIMIT/OFFSET:
    PUBLIC posts
    OR the viewer's own posts
    OR FOLLOWERS posts by authors the viewer follows (accepted)
    anonymous viewers see PUBLIC posts only
"""

import logging
from typing import List, Optional

from sqlalchemy import and_, func, or_, select

from social_platform.modules.content.domain.models.media_attachment import MediaAttachment
from social_platform.modules.content.domain.models.post import Post, PostType, PostVisibility
from social_platform.modules.content.domain.repositories.post_repository import PostRepository
from social_platform.modules.content.infrastructure.database.models import MediaAttachmentModel, PostModel
from social_platform.modules.user_management.infrastructure.database.models import FollowModel
from social_platform.shared.core.exceptions import NotFoundError
from social_platform.shared.infrastructure.database.repository import LIKE_ESCAPE, SQLAlchemyRepository, contains_pattern

logger = logging.getLogger(__name__)

_ATTACHMENT_FIELDS = (
    "url", "file_name", "content_type", "file_size", "alt_text", "width", "height",
    "duration", "thumbnail_url", "created_at",
)


def _accepted_followees(user_id: str):
    return select(FollowModel.followee_id).where(
        FollowModel.follower_id == user_id, FollowModel.is_accepted.is_(True)
    )


def _visible_to(viewer_id: Optional[str]):
    if not viewer_id:
        return PostModel.visibility == PostVisibility.PUBLIC.value
    return or_(
        PostModel.visibility == PostVisibility.PUBLIC.value,
        PostModel.author_id == viewer_id,
        and_(
            PostModel.visibility == PostVisibility.FOLLOWERS.value,
            PostModel.author_id.in_(_accepted_followees(viewer_id)),
        ),
    )


class PostRepositoryImpl(SQLAlchemyRepository, PostRepository):
    """
    SQLAlchemy implementation of the PostRepository interface.
    """

    resource_type = "Post"

    async def create(self, post: Post) -> Post:
        post_model = self._domain_to_model(post)
        await self._add(post_model)
        self._record_changes(len(post_model.media_attachments))
        logger.info(f"Created post {post.id} by {post.author_id} ({post.type.value}, {post.visibility.value})")
        return self._model_to_domain(post_model)

    async def get_by_id(self, post_id: str) -> Optional[Post]:
        post_model = await self._get(PostModel, post_id)
        return self._model_to_domain(post_model) if post_model else None

    async def update(self, post: Post) -> Post:
        """
        Write the post and its attachment collection back.

        Raises:
            NotFoundError: If the post no longer exists
        """
        post_model = await self._get(PostModel, post.id)
        if post_model is None:
            raise NotFoundError(resource_type=self.resource_type, resource_id=post.id)

        self._update_model_from_domain(post_model, post)
        added = self._sync_attachments(post_model, post.media_attachments)
        await self._flush("update")
        self._record_changes(1 + added)
        logger.info(f"Updated post: {post.id}")
        return self._model_to_domain(post_model)

    async def delete(self, post_id: str) -> bool:
        post_model = await self._get(PostModel, post_id)
        if post_model is None:
            return False
        await self._delete_model(post_model)
        logger.info(f"Deleted post: {post_id}")
        return True

    # =========================================================================
    # QUERIES
    # =========================================================================

    async def get_by_author(self, author_id: str, viewer_id: Optional[str], limit: int, offset: int) -> List[Post]:
        stmt = (
            select(PostModel)
            .where(PostModel.author_id == author_id, _visible_to(viewer_id))
            .order_by(PostModel.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        return await self._posts(stmt, "get_by_author")

    async def get_feed(self, user_id: str, limit: int, offset: int) -> List[Post]:
        stmt = (
            select(PostModel)
            .where(
                PostModel.parent_post_id.is_(None),
                or_(
                    PostModel.author_id == user_id,
                    and_(
                        PostModel.author_id.in_(_accepted_followees(user_id)),
                        PostModel.visibility.in_([PostVisibility.PUBLIC.value, PostVisibility.FOLLOWERS.value]),
                    ),
                ),
            )
            .order_by(PostModel.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        return await self._posts(stmt, "get_feed")

    async def get_public_timeline(self, limit: int, offset: int) -> List[Post]:
        stmt = (
            select(PostModel)
            .where(PostModel.visibility == PostVisibility.PUBLIC.value, PostModel.parent_post_id.is_(None))
            .order_by(PostModel.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        return await self._posts(stmt, "get_public_timeline")

    async def get_replies(self, parent_post_id: str, viewer_id: Optional[str], limit: int, offset: int) -> List[Post]:
        stmt = (
            select(PostModel)
            .where(PostModel.parent_post_id == parent_post_id, _visible_to(viewer_id))
            .order_by(PostModel.created_at.asc())
            .limit(limit)
            .offset(offset)
        )
        return await self._posts(stmt, "get_replies")

    async def search(self, term: str, limit: int, offset: int) -> List[Post]:
        pattern = contains_pattern(term)
        stmt = (
            select(PostModel)
            .where(
                PostModel.visibility == PostVisibility.PUBLIC.value,
                func.lower(PostModel.content).like(pattern, escape=LIKE_ESCAPE),
            )
            .order_by(PostModel.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        return await self._posts(stmt, "search")

    async def get_with_media(self, limit: int, offset: int) -> List[Post]:
        stmt = (
            select(PostModel)
            .where(
                PostModel.visibility == PostVisibility.PUBLIC.value,
                PostModel.media_attachments.any(),
            )
            .order_by(PostModel.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        return await self._posts(stmt, "get_with_media")

    async def count_by_author(self, author_id: str) -> int:
        return await self._count(PostModel, PostModel.author_id == author_id)

    async def count_replies(self, parent_post_id: str) -> int:
        return await self._count(PostModel, PostModel.parent_post_id == parent_post_id)

    async def _posts(self, stmt, operation: str) -> List[Post]:
        post_models = await self._scalars(stmt, operation)
        logger.debug(f"{operation} returned {len(post_models)} posts")
        return [self._model_to_domain(post_model) for post_model in post_models]

    # =========================================================================
    # MAPPING
    # =========================================================================

    def _domain_to_model(self, post: Post) -> PostModel:
        post_model = PostModel(id=post.id, author_id=post.author_id, created_at=post.created_at)
        self._update_model_from_domain(post_model, post)
        post_model.media_attachments = [self._attachment_to_model(attachment) for attachment in post.media_attachments]
        return post_model

    @staticmethod
    def _update_model_from_domain(post_model: PostModel, post: Post) -> None:
        post_model.content = post.content
        post_model.type = post.type.value
        post_model.visibility = post.visibility.value
        post_model.is_edited = post.is_edited
        post_model.parent_post_id = post.parent_post_id
        post_model.root_post_id = post.root_post_id
        post_model.updated_at = post.updated_at

    def _sync_attachments(self, post_model: PostModel, attachments: List[MediaAttachment]) -> int:
        """Mirror the domain attachment list onto the row collection; returns rows added."""
        existing = {str(model.id): model for model in post_model.media_attachments}
        added = 0
        synced = []
        for attachment in attachments:
            attachment_model = existing.get(attachment.id)
            if attachment_model is None:
                attachment_model = self._attachment_to_model(attachment)
                added += 1
            else:
                for field in _ATTACHMENT_FIELDS:
                    setattr(attachment_model, field, getattr(attachment, field))
            synced.append(attachment_model)
        post_model.media_attachments = synced
        return added

    @staticmethod
    def _attachment_to_model(attachment: MediaAttachment) -> MediaAttachmentModel:
        values = {field: getattr(attachment, field) for field in _ATTACHMENT_FIELDS}
        return MediaAttachmentModel(id=attachment.id, post_id=attachment.post_id, **values)

    @staticmethod
    def _model_to_domain(post_model: PostModel) -> Post:
        attachments = [
            MediaAttachment(
                id=str(model.id),
                post_id=str(model.post_id),
                **{field: getattr(model, field) for field in _ATTACHMENT_FIELDS},
            )
            for model in post_model.media_attachments
        ]
        return Post(
            id=str(post_model.id),
            author_id=str(post_model.author_id),
            content=post_model.content,
            type=PostType(post_model.type),
            visibility=PostVisibility(post_model.visibility),
            is_edited=post_model.is_edited,
            parent_post_id=str(post_model.parent_post_id) if post_model.parent_post_id else None,
            root_post_id=str(post_model.root_post_id) if post_model.root_post_id else None,
            media_attachments=attachments,
            created_at=post_model.created_at,
            updated_at=post_model.updated_at,
        )
