# 📄 File: social_platform/modules/content/domain/services/comment_service.py
# 🧭 Purpose (Layman Explanation):
# Lets people comment on posts they can see, answer other comments, fix or remove their own
# comments, and lists the comments under a post or written by a person. The post's author gets
# notified.
#
# 🧪 Purpose (Technical Summary):
# Comment domain service with owner-checked edits and deletes, 50-item default pagination and a
# comment notification staged in the same unit of work as the comment itself.
#
# 🔗 Dependencies:
# - social_platform.modules.content.domain (Comment, CommentRepository, PostRepository)
# - social_platform.modules.content.domain.services.post_service (post_visible_to)
# - social_platform.modules.user_management.domain.repositories (author lookup, follows for visibility)
# - social_platform.modules.notifications.domain.services.notification_service (comment notifications)
# - social_platform.shared (exceptions, pagination, settings, validators)
#
# 🔄 Connected Modules / Calls From:
# - social_platform.shared.core.dependencies (ServiceContainer)

import logging
from typing import List, Optional

from social_platform.modules.content.domain.models.comment import Comment
from social_platform.modules.content.domain.repositories.comment_repository import CommentRepository
from social_platform.modules.content.domain.models.post import Post
from social_platform.modules.content.domain.repositories.post_repository import PostRepository
from social_platform.modules.content.domain.services.post_service import post_visible_to
from social_platform.modules.notifications.domain.services.notification_service import NotificationService
from social_platform.modules.user_management.domain.repositories.follow_repository import FollowRepository
from social_platform.modules.user_management.domain.repositories.user_repository import UserRepository
from social_platform.shared.config.settings import get_settings
from social_platform.shared.core.exceptions import AuthorizationError, NotFoundError
from social_platform.shared.core.pagination import normalize_pagination
from social_platform.shared.utils.validators import require_id, require_text

logger = logging.getLogger(__name__)


class CommentService:
    """Domain service for comments."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        post_repository: PostRepository,
        user_repository: UserRepository,
        follow_repository: FollowRepository,
        notification_service: Optional[NotificationService] = None,
    ):
        self.comment_repository = comment_repository
        self.post_repository = post_repository
        self.user_repository = user_repository
        self.follow_repository = follow_repository
        self.notification_service = notification_service

    async def _ensure_user_exists(self, user_id: str, field: str) -> None:
        if await self.user_repository.get_by_id(user_id) is None:
            raise NotFoundError("Author not found", resource_type="User", resource_id=user_id, field=field)

    async def _load_visible_post(self, post_id: str, viewer_id: Optional[str]) -> Post:
        post = await self.post_repository.get_by_id(post_id)
        if post is None or not await post_visible_to(post, viewer_id, self.follow_repository):
            raise NotFoundError("Post not found", resource_type="Post", resource_id=post_id, field="post_id")
        return post

    async def _store_comment(self, comment: Comment, post_author_id: str) -> Comment:
        created = await self.comment_repository.create(comment)
        if self.notification_service is not None and post_author_id != comment.user_id:
            await self.notification_service.create_comment_notification(
                post_author_id,
                comment.post_id,
                created.id,
                comment.user_id,
                commit=False,
            )
        await self.comment_repository.save_changes()
        return created

    # =========================================================================
    # CREATION
    # =========================================================================

    async def create_comment(self, author_id: str, post_id: str, content: str) -> Comment:
        """
        Comment on a post and notify its author.

        Raises:
            ValidationError: If an id or the content is blank
            NotFoundError: If the author or the post does not exist, or the
                author cannot see the post
        """
        logger.info(f"Creating comment on post {post_id} by author {author_id}")

        # 1. Validate input
        require_id(author_id, "author_id")
        require_id(post_id, "post_id")
        content = require_text(content, "content")

        # 2. Load author and post
        await self._ensure_user_exists(author_id, "author_id")
        post = await self._load_visible_post(post_id, author_id)

        # 3. Persist with the notification
        created = await self._store_comment(Comment(user_id=author_id, post_id=post_id, content=content), post.author_id)

        logger.info(f"Successfully created comment {created.id} on post {post_id} by author {author_id}")
        return created

    async def create_reply(self, author_id: str, parent_comment_id: str, content: str) -> Comment:
        """
        Answer a comment. Comments are flat, so the reply is a new comment on
        the same post as the parent comment.

        Raises:
            NotFoundError: If the author, the parent comment or its post does not
                exist, or the author cannot see the post
        """
        logger.info(f"Creating reply to comment {parent_comment_id} by author {author_id}")

        require_id(author_id, "author_id")
        require_id(parent_comment_id, "parent_comment_id")
        content = require_text(content, "content")

        await self._ensure_user_exists(author_id, "author_id")
        parent = await self.comment_repository.get_by_id(parent_comment_id)
        if parent is None:
            raise NotFoundError(
                "Parent comment not found",
                resource_type="Comment",
                resource_id=parent_comment_id,
                field="parent_comment_id",
            )

        post = await self._load_visible_post(parent.post_id, author_id)

        created = await self._store_comment(Comment(user_id=author_id, post_id=parent.post_id, content=content), post.author_id)

        logger.info(f"Successfully created reply {created.id} to comment {parent_comment_id} by author {author_id}")
        return created

    # =========================================================================
    # MUTATION
    # =========================================================================

    async def _get_owned_comment(self, comment_id: str, author_id: str, action: str) -> Comment:
        require_id(comment_id, "comment_id")
        require_id(author_id, "author_id")

        comment = await self.comment_repository.get_by_id(comment_id)
        if comment is None:
            raise NotFoundError(resource_type="Comment", resource_id=comment_id, field="comment_id")

        if comment.user_id != author_id:
            logger.warning(f"User {author_id} attempted to {action} comment {comment_id} owned by {comment.user_id}")
            raise AuthorizationError(
                f"User is not authorized to {action} this comment",
                resource_type="Comment",
                resource_id=comment_id,
                required_action=action,
                user_id=author_id,
            )
        return comment

    async def update_comment(self, comment_id: str, author_id: str, content: str) -> Comment:
        """
        Edit a comment's text.

        Raises:
            NotFoundError: If the comment does not exist
            AuthorizationError: If ``author_id`` did not write it (nothing is changed)
        """
        logger.info(f"Updating comment {comment_id} by author {author_id}")
        content = require_text(content, "content")
        comment = await self._get_owned_comment(comment_id, author_id, "update")
        comment.update_content(content)

        updated = await self.comment_repository.update(comment)
        await self.comment_repository.save_changes()
        logger.info(f"Successfully updated comment {comment_id}")
        return updated

    async def delete_comment(self, comment_id: str, author_id: str) -> bool:
        logger.info(f"Deleting comment {comment_id} by author {author_id}")
        await self._get_owned_comment(comment_id, author_id, "delete")

        await self.comment_repository.delete(comment_id)
        await self.comment_repository.save_changes()
        logger.info(f"Successfully deleted comment {comment_id}")
        return True

    # =========================================================================
    # RETRIEVAL
    # =========================================================================

    async def get_comment_by_id(self, comment_id: str) -> Optional[Comment]:
        if not comment_id:
            return None
        logger.debug(f"Retrieving comment {comment_id}")
        return await self.comment_repository.get_by_id(comment_id)

    async def get_post_comments(
        self,
        post_id: str,
        viewer_id: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> List[Comment]:
        """
        Comments on a post, oldest first; 50 per page by default.

        Empty when the post is missing or hidden from ``viewer_id``.
        """
        if not post_id:
            return []
        post = await self.post_repository.get_by_id(post_id)
        if post is None or not await post_visible_to(post, viewer_id, self.follow_repository):
            return []
        page = normalize_pagination(limit, offset, get_settings().DEFAULT_COMMENT_PAGE_SIZE)
        logger.debug(f"Retrieving comments for post {post_id} with limit {page.limit} and offset {page.offset}")
        return await self.comment_repository.get_by_post(post_id, page.limit, page.offset)

    async def get_user_comments(self, user_id: str, limit: int = 50, offset: int = 0) -> List[Comment]:
        if not user_id:
            return []
        page = normalize_pagination(limit, offset, get_settings().DEFAULT_COMMENT_PAGE_SIZE)
        return await self.comment_repository.get_by_user(user_id, page.limit, page.offset)

    async def get_post_comment_count(self, post_id: str) -> int:
        if not post_id:
            return 0
        return await self.comment_repository.count_by_post(post_id)

    async def get_user_comment_count(self, user_id: str) -> int:
        if not user_id:
            return 0
        return await self.comment_repository.count_by_user(user_id)
