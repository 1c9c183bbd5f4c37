# 📄 File: social_platform/modules/content/domain/services/share_service.py
# 🧭 Purpose (Layman Explanation):
# Lets people re-share posts they can see (once per post), optionally with their own comment, and
# change or remove their shares later.
#
# 🧪 Purpose (Technical Summary):
# Share domain service. Sharing requires an existing sharer and a post visible to them (delegated
# to PostService); one share per user and post (checked here and by a unique index); edits and
# deletes are owner-checked.
#
# 🔗 Dependencies:
# - social_platform.modules.content.domain (Share, ShareRepository, PostService)
# - social_platform.modules.user_management.domain.repositories.user_repository (sharer lookup)
# - social_platform.shared (exceptions, pagination, validators)
#
# 🔄 Connected Modules / Calls From:
# - social_platform.shared.core.dependencies (ServiceContainer)

import logging
from typing import List, Optional

from social_platform.modules.content.domain.models.share import Share
from social_platform.modules.content.domain.repositories.share_repository import ShareRepository
from social_platform.modules.content.domain.services.post_service import PostService
from social_platform.modules.user_management.domain.repositories.user_repository import UserRepository
from social_platform.shared.core.exceptions import AuthorizationError, DuplicateResourceError, NotFoundError
from social_platform.shared.core.pagination import normalize_pagination
from social_platform.shared.utils.validators import require_id

logger = logging.getLogger(__name__)


class ShareService:
    """Domain service for shares."""

    def __init__(self, share_repository: ShareRepository, post_service: PostService, user_repository: UserRepository):
        self.share_repository = share_repository
        self.post_service = post_service
        self.user_repository = user_repository

    async def share_post(self, user_id: str, post_id: str, comment: Optional[str] = None) -> Share:
        """
        Share a post.

        Raises:
            NotFoundError: If the user or the post does not exist, or the user
                cannot see the post
            DuplicateResourceError: If the user already shared the post
        """
        logger.info(f"User {user_id} sharing post {post_id}")
        require_id(user_id, "user_id")
        require_id(post_id, "post_id")

        if await self.user_repository.get_by_id(user_id) is None:
            raise NotFoundError("User not found", resource_type="User", resource_id=user_id, field="user_id")
        await self.post_service.get_visible_post(post_id, user_id)

        if await self.share_repository.exists(user_id, post_id):
            logger.warning(f"User {user_id} has already shared post {post_id}")
            raise DuplicateResourceError(
                "User has already shared this post",
                resource_type="Share",
                field="post_id",
                value=post_id,
            )

        created = await self.share_repository.create(Share(user_id=user_id, post_id=post_id, comment=comment))
        await self.share_repository.save_changes()

        logger.info(f"Successfully created share {created.id} of post {post_id} by user {user_id}")
        return created

    async def _get_owned_share(self, share_id: str, user_id: str, action: str) -> Share:
        require_id(share_id, "share_id")
        require_id(user_id, "user_id")

        share = await self.share_repository.get_by_id(share_id)
        if share is None:
            raise NotFoundError(resource_type="Share", resource_id=share_id, field="share_id")

        if share.user_id != user_id:
            logger.warning(f"User {user_id} attempted to {action} share {share_id} owned by {share.user_id}")
            raise AuthorizationError(
                f"User is not authorized to {action} this share",
                resource_type="Share",
                resource_id=share_id,
                required_action=action,
                user_id=user_id,
            )
        return share

    async def update_share_comment(self, share_id: str, user_id: str, comment: Optional[str]) -> Share:
        share = await self._get_owned_share(share_id, user_id, "update")
        share.update_comment(comment)

        updated = await self.share_repository.update(share)
        await self.share_repository.save_changes()
        return updated

    async def delete_share(self, share_id: str, user_id: str) -> bool:
        await self._get_owned_share(share_id, user_id, "delete")

        await self.share_repository.delete(share_id)
        await self.share_repository.save_changes()
        logger.info(f"Share {share_id} deleted by user {user_id}")
        return True

    async def get_post_shares(
        self,
        post_id: str,
        viewer_id: Optional[str] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Share]:
        if not await self.post_service.can_user_view_post(post_id, viewer_id):
            return []
        page = normalize_pagination(limit, offset)
        return await self.share_repository.get_by_post(post_id, page.limit, page.offset)

    async def get_user_shares(self, user_id: str, limit: int = 20, offset: int = 0) -> List[Share]:
        if not user_id:
            return []
        page = normalize_pagination(limit, offset)
        return await self.share_repository.get_by_user(user_id, page.limit, page.offset)

    async def get_post_share_count(self, post_id: str) -> int:
        if not post_id:
            return 0
        return await self.share_repository.count_by_post(post_id)
