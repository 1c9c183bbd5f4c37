# 📄 File: social_platform/modules/content/domain/services/like_service.py
# 🧭 Purpose (Layman Explanation):
# Handles the heart button: liking and un-liking posts, checking whether someone already liked a
# post, and listing who liked what. The author hears about each new like.
#
# 🧪 Purpose (Technical Summary):
# Like domain service. One like per user and post (checked here and by a unique index), no liking
# one's own posts or posts hidden from the liker, 50-item default pagination, like notification
# staged with the like.
#
# 🔗 Dependencies:
# - social_platform.modules.content.domain (Like, LikeRepository, PostRepository)
# - social_platform.modules.content.domain.services.post_service (post_visible_to)
# - social_platform.modules.user_management.domain (User, UserRepository, FollowRepository)
# - social_platform.modules.notifications.domain.services.notification_service (like notifications)
# - social_platform.shared (exceptions, pagination, settings, validators)
#
# 🔄 Connected Modules / Calls From:
# - social_platform.shared.core.dependencies (ServiceContainer)

import logging
from typing import List, Optional

from social_platform.modules.content.domain.models.like import Like
from social_platform.modules.content.domain.models.post import Post
from social_platform.modules.content.domain.repositories.like_repository import LikeRepository
from social_platform.modules.content.domain.repositories.post_repository import PostRepository
from social_platform.modules.content.domain.services.post_service import post_visible_to
from social_platform.modules.notifications.domain.services.notification_service import NotificationService
from social_platform.modules.user_management.domain.models.user import User
from social_platform.modules.user_management.domain.repositories.follow_repository import FollowRepository
from social_platform.modules.user_management.domain.repositories.user_repository import UserRepository
from social_platform.shared.config.settings import get_settings
from social_platform.shared.core.exceptions import BusinessRuleViolationError, DuplicateResourceError, NotFoundError
from social_platform.shared.core.pagination import normalize_pagination
from social_platform.shared.utils.validators import require_id

logger = logging.getLogger(__name__)


class LikeService:
    """
    Domain service for likes.

    Business rules:
    - A user likes a post at most once
    - Users cannot like their own posts
    - Posts the user may not see behave as missing
    """

    def __init__(
        self,
        like_repository: LikeRepository,
        post_repository: PostRepository,
        user_repository: UserRepository,
        follow_repository: FollowRepository,
        notification_service: Optional[NotificationService] = None,
    ):
        self.like_repository = like_repository
        self.post_repository = post_repository
        self.user_repository = user_repository
        self.follow_repository = follow_repository
        self.notification_service = notification_service

    async def _load_user_and_post(self, user_id: str, post_id: str, must_see: bool = True) -> Post:
        require_id(user_id, "user_id")
        require_id(post_id, "post_id")

        if await self.user_repository.get_by_id(user_id) is None:
            raise NotFoundError("User not found", resource_type="User", resource_id=user_id, field="user_id")

        post = await self.post_repository.get_by_id(post_id)
        if post is None or (must_see and not await post_visible_to(post, user_id, self.follow_repository)):
            raise NotFoundError("Post not found", resource_type="Post", resource_id=post_id, field="post_id")
        return post

    async def like_post(self, user_id: str, post_id: str) -> Like:
        """
        Like a post and notify its author.

        Raises:
            NotFoundError: If the user or the post does not exist, or the user
                cannot see the post
            DuplicateResourceError: If the user already liked the post
            BusinessRuleViolationError: If the user wrote the post
        """
        logger.info(f"User {user_id} attempting to like post {post_id}")
        post = await self._load_user_and_post(user_id, post_id)

        if await self.like_repository.exists(user_id, post_id):
            logger.warning(f"User {user_id} has already liked post {post_id}")
            raise DuplicateResourceError(
                "User has already liked this post",
                resource_type="Like",
                field="post_id",
                value=post_id,
            )

        if post.author_id == user_id:
            raise BusinessRuleViolationError(
                "Users cannot like their own posts",
                rule="no_self_like",
                context={"user_id": user_id, "post_id": post_id},
            )

        created = await self.like_repository.create(Like(user_id=user_id, post_id=post_id))
        if self.notification_service is not None:
            await self.notification_service.create_like_notification(post.author_id, post_id, user_id, commit=False)
        await self.like_repository.save_changes()

        logger.info(f"Successfully created like {created.id} for post {post_id} by user {user_id}")
        return created

    async def unlike_post(self, user_id: str, post_id: str) -> bool:
        """
        Remove a like. Works even if the post has since been hidden from the user.

        Raises:
            NotFoundError: If the user, the post or the like does not exist
        """
        logger.info(f"User {user_id} attempting to unlike post {post_id}")
        await self._load_user_and_post(user_id, post_id, must_see=False)

        like = await self.like_repository.get_by_user_and_post(user_id, post_id)
        if like is None:
            raise NotFoundError(
                "Like not found - user has not liked this post",
                resource_type="Like",
                field="post_id",
            )

        await self.like_repository.delete(like.id)
        await self.like_repository.save_changes()
        logger.info(f"Successfully removed like for post {post_id} by user {user_id}")
        return True

    async def has_user_liked_post(self, user_id: str, post_id: str) -> bool:
        logger.debug(f"Checking if user {user_id} has liked post {post_id}")
        if not user_id or not post_id:
            return False
        return await self.like_repository.exists(user_id, post_id)

    async def get_post_likes(
        self,
        post_id: str,
        viewer_id: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> List[Like]:
        """Likes on a post, newest first; empty when the post is missing or hidden from the viewer."""
        if not post_id:
            return []
        post = await self.post_repository.get_by_id(post_id)
        if post is None or not await post_visible_to(post, viewer_id, self.follow_repository):
            return []
        page = normalize_pagination(limit, offset, get_settings().DEFAULT_LIKE_PAGE_SIZE)
        logger.debug(f"Retrieving likes for post {post_id} with limit {page.limit} and offset {page.offset}")
        return await self.like_repository.get_by_post(post_id, page.limit, page.offset)

    async def get_user_likes(self, user_id: str, limit: int = 50, offset: int = 0) -> List[Like]:
        if not user_id:
            return []
        page = normalize_pagination(limit, offset, get_settings().DEFAULT_LIKE_PAGE_SIZE)
        return await self.like_repository.get_by_user(user_id, page.limit, page.offset)

    async def get_post_like_count(self, post_id: str) -> int:
        if not post_id:
            return 0
        return await self.like_repository.count_by_post(post_id)

    async def get_user_like_count(self, user_id: str) -> int:
        if not user_id:
            return 0
        return await self.like_repository.count_by_user(user_id)

    async def get_users_who_liked_post(
        self,
        post_id: str,
        viewer_id: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> List[User]:
        """Users behind the likes of a post, most recent like first."""
        likes = await self.get_post_likes(post_id, viewer_id, limit, offset)
        return await self.user_repository.get_by_ids([like.user_id for like in likes])
