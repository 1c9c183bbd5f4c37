# 📄 File: social_platform/modules/content/domain/services/post_service.py
# 🧭 Purpose (Layman Explanation):
# Everything people do with posts: writing text posts, posting photos and videos, replying,
# editing, deleting, and deciding which posts each person is allowed to see in lists and feeds.
#
# 🧪 Purpose (Technical Summary):
# Post domain service. Orchestrates validate -> load -> authorize -> mutate -> persist for posts,
# replies and media attachments. Single-post reads go through post_visible_to (Post.can_be_viewed_by
# plus the viewer's follow of the author); listings pass the viewer to the repository, which applies
# the same rule in SQL before paginating.
#
# 🔗 Dependencies:
# - social_platform.modules.content.domain (Post, PostVisibility, content repositories)
# - social_platform.modules.content.application.dto.post_dto (MediaAttachmentInput, PostStatsDTO)
# - social_platform.modules.user_management.domain.repositories (UserRepository, FollowRepository)
# - social_platform.shared.core (exceptions, pagination)
#
# 🔄 Connected Modules / Calls From:
# - like_service.py, comment_service.py, share_service.py (visibility check before engaging)
# - social_platform.shared.core.dependencies (ServiceContainer)

import logging
from typing import List, Optional, Sequence

from social_platform.modules.content.application.dto.post_dto import MediaAttachmentInput, PostStatsDTO
from social_platform.modules.content.domain.models.post import Post, PostVisibility
from social_platform.modules.content.domain.repositories.comment_repository import CommentRepository
from social_platform.modules.content.domain.repositories.like_repository import LikeRepository
from social_platform.modules.content.domain.repositories.post_repository import PostRepository
from social_platform.modules.content.domain.repositories.share_repository import ShareRepository
from social_platform.modules.user_management.domain.repositories.follow_repository import FollowRepository
from social_platform.modules.user_management.domain.repositories.user_repository import UserRepository
from social_platform.shared.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from social_platform.shared.core.pagination import normalize_pagination
from social_platform.shared.utils.validators import require_id, require_text

logger = logging.getLogger(__name__)


async def post_visible_to(
    post: Post,
    viewer_id: Optional[str],
    follow_repository: FollowRepository,
) -> bool:
    """
    Apply Post.can_be_viewed_by, loading the viewer's follow of the author only
    when the answer depends on it (FOLLOWERS posts seen by someone else).

    Shared by every service that reads or engages with a single post; listings
    apply the same rule in SQL instead.
    """
    if post.visibility != PostVisibility.FOLLOWERS or not viewer_id or viewer_id == post.author_id:
        return post.can_be_viewed_by(viewer_id)

    follow = await follow_repository.get_by_pair(viewer_id, post.author_id)
    return post.can_be_viewed_by(viewer_id, [follow] if follow else [])


class PostService:
    """
    Domain service for post business logic.

    Business rules:
    - Text posts and replies need content; media posts need at least one attachment
    - Only the author may edit, re-scope or delete a post
    - Every read goes through the visibility rules; hidden posts look missing
    """

    def __init__(
        self,
        post_repository: PostRepository,
        user_repository: UserRepository,
        follow_repository: FollowRepository,
        like_repository: Optional[LikeRepository] = None,
        comment_repository: Optional[CommentRepository] = None,
        share_repository: Optional[ShareRepository] = None,
    ):
        self.post_repository = post_repository
        self.user_repository = user_repository
        self.follow_repository = follow_repository
        self.like_repository = like_repository
        self.comment_repository = comment_repository
        self.share_repository = share_repository

    # =========================================================================
    # CREATION
    # =========================================================================

    async def _ensure_author_exists(self, author_id: str) -> None:
        if await self.user_repository.get_by_id(author_id) is None:
            raise NotFoundError("Author not found", resource_type="User", resource_id=author_id, field="author_id")

    async def create_text_post(
        self,
        author_id: str,
        content: str,
        visibility: PostVisibility = PostVisibility.PUBLIC,
    ) -> Post:
        """
        Create a text post.

        Raises:
            ValidationError: If the author id or content is blank
            NotFoundError: If the author does not exist
        """
        logger.info(f"Creating text post for author {author_id} with visibility {PostVisibility(visibility).value}")

        # 1. Validate input
        require_id(author_id, "author_id")
        content = require_text(content, "content")

        # 2. Load author
        await self._ensure_author_exists(author_id)

        # 3. Create and persist
        post = Post.create(author_id, content, visibility=visibility)
        created = await self.post_repository.create(post)
        await self.post_repository.save_changes()

        logger.info(f"Successfully created text post {created.id} for author {author_id}")
        return created

    async def create_media_post(
        self,
        author_id: str,
        content: Optional[str],
        attachments: Sequence[MediaAttachmentInput],
        visibility: PostVisibility = PostVisibility.PUBLIC,
    ) -> Post:
        """
        Create a post with media; the caption is optional.

        The post type is derived from the attachments (one media category gives
        that type, several give MIXED).

        Raises:
            ValidationError: If there are no attachments or one is invalid
            NotFoundError: If the author does not exist
        """
        logger.info(f"Creating media post for author {author_id} with visibility {PostVisibility(visibility).value}")

        require_id(author_id, "author_id")
        if not attachments:
            raise ValidationError(
                "At least one media attachment is required",
                field="attachments",
                constraint="min_items_1",
            )

        await self._ensure_author_exists(author_id)

        post = Post.create_with_media(author_id, content, attachments, visibility=visibility)
        created = await self.post_repository.create(post)
        await self.post_repository.save_changes()

        logger.info(
            f"Successfully created media post {created.id} for author {author_id} "
            f"with {len(created.media_attachments)} attachments"
        )
        return created

    async def create_reply(
        self,
        author_id: str,
        parent_post_id: str,
        content: str,
        visibility: PostVisibility = PostVisibility.PUBLIC,
    ) -> Post:
        """
        Reply to a post.

        The reply joins the parent's thread: its root is the parent's root, or
        the parent itself when the parent is a top-level post.

        Raises:
            NotFoundError: If the author or the parent post does not exist, or
                the author cannot see the parent post
        """
        logger.info(f"Creating reply for author {author_id} to post {parent_post_id}")

        require_id(author_id, "author_id")
        require_id(parent_post_id, "parent_post_id")
        content = require_text(content, "content")

        await self._ensure_author_exists(author_id)
        parent = await self.post_repository.get_by_id(parent_post_id)
        if parent is None or not await self._can_view(parent, author_id):
            raise NotFoundError(
                "Parent post not found",
                resource_type="Post",
                resource_id=parent_post_id,
                field="parent_post_id",
            )

        reply = Post.create_reply(
            author_id,
            content,
            parent_post_id=parent.id,
            root_post_id=parent.root_post_id or parent.id,
            visibility=visibility,
        )
        created = await self.post_repository.create(reply)
        await self.post_repository.save_changes()

        logger.info(f"Successfully created reply {created.id} for author {author_id} to post {parent_post_id}")
        return created

    # =========================================================================
    # MUTATION
    # =========================================================================

    async def _get_owned_post(self, post_id: str, author_id: str, action: str) -> Post:
        require_id(post_id, "post_id")
        require_id(author_id, "author_id")

        post = await self.post_repository.get_by_id(post_id)
        if post is None:
            raise NotFoundError(resource_type="Post", resource_id=post_id, field="post_id")

        if post.author_id != author_id:
            logger.warning(f"User {author_id} attempted to {action} post {post_id} owned by {post.author_id}")
            raise AuthorizationError(
                f"User is not authorized to {action} this post",
                resource_type="Post",
                resource_id=post_id,
                required_action=action,
                user_id=author_id,
            )
        return post

    async def update_post_content(self, post_id: str, author_id: str, content: str) -> Post:
        logger.info(f"Updating content for post {post_id} by author {author_id}")
        post = await self._get_owned_post(post_id, author_id, "update")
        post.update_content(content)

        updated = await self.post_repository.update(post)
        await self.post_repository.save_changes()
        logger.info(f"Successfully updated content for post {post_id}")
        return updated

    async def update_post_visibility(self, post_id: str, author_id: str, visibility: PostVisibility) -> Post:
        visibility = PostVisibility(visibility)
        logger.info(f"Updating visibility for post {post_id} to {visibility.value} by author {author_id}")
        post = await self._get_owned_post(post_id, author_id, "update")
        post.set_visibility(visibility)

        updated = await self.post_repository.update(post)
        await self.post_repository.save_changes()
        logger.info(f"Successfully updated visibility for post {post_id} to {visibility.value}")
        return updated

    async def add_media_attachment(self, post_id: str, author_id: str, attachment: MediaAttachmentInput) -> Post:
        """Attach a file to an existing post and recompute its type."""
        post = await self._get_owned_post(post_id, author_id, "update")
        post.add_media_attachment(attachment.url, attachment.file_name, attachment.content_type, attachment.file_size)

        updated = await self.post_repository.update(post)
        await self.post_repository.save_changes()
        logger.info(f"Added {attachment.content_type} attachment to post {post_id}; type is now {updated.type.value}")
        return updated

    async def delete_post(self, post_id: str, author_id: str) -> bool:
        """
        Delete a post together with its replies, attachments, likes, comments and shares.

        Raises:
            NotFoundError: If the post does not exist
            AuthorizationError: If ``author_id`` is not the author
        """
        logger.info(f"Deleting post {post_id} by author {author_id}")
        await self._get_owned_post(post_id, author_id, "delete")

        await self.post_repository.delete(post_id)
        await self.post_repository.save_changes()
        logger.info(f"Successfully deleted post {post_id}")
        return True

    # =========================================================================
    # VISIBILITY
    # =========================================================================

    async def _can_view(self, post: Post, viewer_id: Optional[str]) -> bool:
        return await post_visible_to(post, viewer_id, self.follow_repository)

    async def get_visible_post(self, post_id: str, viewer_id: Optional[str], field: str = "post_id") -> Post:
        """
        Load a post for someone about to act on it.

        Raises:
            NotFoundError: If the post does not exist or the viewer may not see it
        """
        require_id(post_id, field)
        post = await self.post_repository.get_by_id(post_id)
        if post is None or not await self._can_view(post, viewer_id):
            raise NotFoundError("Post not found", resource_type="Post", resource_id=post_id, field=field)
        return post

    async def can_user_view_post(self, post_id: str, viewer_id: Optional[str]) -> bool:
        """False for missing posts as well as hidden ones."""
        if not post_id:
            logger.debug("Empty post ID provided, access denied")
            return False

        post = await self.post_repository.get_by_id(post_id)
        if post is None:
            logger.debug(f"Post {post_id} not found, access denied")
            return False
        return await self._can_view(post, viewer_id)

    # =========================================================================
    # RETRIEVAL
    # =========================================================================

    async def get_post_by_id(self, post_id: str, viewer_id: Optional[str] = None) -> Optional[Post]:
        """Return the post, or None when it does not exist or the viewer may not see it."""
        if not post_id:
            logger.debug("Empty post ID provided, returning None")
            return None

        post = await self.post_repository.get_by_id(post_id)
        if post is None:
            logger.debug(f"Post {post_id} not found")
            return None

        if not await self._can_view(post, viewer_id):
            logger.debug(f"Post {post_id} is not visible to viewer {viewer_id}")
            return None
        return post

    async def get_posts_by_author(
        self,
        author_id: str,
        viewer_id: Optional[str] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Post]:
        if not author_id:
            return []
        page = normalize_pagination(limit, offset)
        logger.debug(f"Retrieving posts by author {author_id} with limit {page.limit} and offset {page.offset}")

        return await self.post_repository.get_by_author(author_id, viewer_id, page.limit, page.offset)

    async def get_user_feed(self, user_id: str, limit: int = 20, offset: int = 0) -> List[Post]:
        """
        Home feed: the user's own top-level posts plus the non-private top-level
        posts of accounts they follow with an accepted follow, newest first.
        """
        if not user_id:
            return []
        page = normalize_pagination(limit, offset)
        posts = await self.post_repository.get_feed(user_id, page.limit, page.offset)
        logger.debug(f"Retrieved {len(posts)} posts for user feed {user_id}")
        return posts

    async def get_public_timeline(self, limit: int = 20, offset: int = 0) -> List[Post]:
        page = normalize_pagination(limit, offset)
        return await self.post_repository.get_public_timeline(page.limit, page.offset)

    async def search_posts(self, term: str, limit: int = 20, offset: int = 0) -> List[Post]:
        """Full-text-ish search over public posts; a blank term returns nothing."""
        if term is None or not term.strip():
            logger.debug("Empty or null search term provided, returning empty list")
            return []
        page = normalize_pagination(limit, offset)
        posts = await self.post_repository.search(term.strip(), page.limit, page.offset)
        logger.debug(f"Found {len(posts)} posts matching search term '{term}'")
        return posts

    async def get_media_posts(self, limit: int = 20, offset: int = 0) -> List[Post]:
        page = normalize_pagination(limit, offset)
        return await self.post_repository.get_with_media(page.limit, page.offset)

    async def get_post_replies(
        self,
        parent_post_id: str,
        viewer_id: Optional[str] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Post]:
        if not parent_post_id:
            return []
        page = normalize_pagination(limit, offset)
        return await self.post_repository.get_replies(parent_post_id, viewer_id, page.limit, page.offset)

    async def get_post_stats(self, post_id: str, viewer_id: Optional[str] = None) -> PostStatsDTO:
        """
        Engagement counters for a post.

        Raises:
            NotFoundError: If the post does not exist or the viewer may not see it
        """
        await self.get_visible_post(post_id, viewer_id)

        stats = PostStatsDTO(post_id=post_id)
        if self.like_repository is not None:
            stats.likes_count = await self.like_repository.count_by_post(post_id)
        if self.comment_repository is not None:
            stats.comments_count = await self.comment_repository.count_by_post(post_id)
        if self.share_repository is not None:
            stats.shares_count = await self.share_repository.count_by_post(post_id)
        stats.replies_count = await self.post_repository.count_replies(post_id)
        return stats
