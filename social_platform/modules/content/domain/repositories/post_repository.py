# 📄 File: social_platform/modules/content/domain/repositories/post_repository.py
# 🧭 Purpose (Layman Explanation):
# Defines how posts are saved and found: a person's posts, the home feed, the public timeline,
# replies under a post, searches and posts with photos or videos.
# 🧪 Purpose (Technical Summary):
# Repository interface for the Post aggregate (post row plus media attachments). Query methods
# return newest-first pages except replies, which read oldest-first like a conversation.
# 🔗 Dependencies:
# Domain models (Post), shared Repository base, typing, abc
# 🔄 Connected Modules / Calls From:
# post_service.py, comment_service.py, like_service.py, share_service.py, post_repository_impl.py

from abc import abstractmethod
from typing import List, Optional

from social_platform.modules.content.domain.models.post import Post
from social_platform.shared.core.repository import Repository


class PostRepository(Repository[Post]):
    """
    Repository interface for Post entity data access operations.

    Implementation Notes:
    - Posts are returned with their media attachments loaded
    - ``update`` also persists attachments appended since the post was loaded
    - Deleting a post removes its attachments, likes, comments and shares
    """

    @abstractmethod
    async def get_by_author(self, author_id: str, viewer_id: Optional[str], limit: int, offset: int) -> List[Post]:
        """
        Get the posts written by an author that ``viewer_id`` may see, newest first.

        Visibility is applied in the query, before pagination: PUBLIC posts, the
        viewer's own posts, and FOLLOWERS posts when the viewer has an accepted
        follow of the author. A None viewer sees PUBLIC posts only.
        """
        pass

    @abstractmethod
    async def get_feed(self, user_id: str, limit: int, offset: int) -> List[Post]:
        """
        Get a user's home feed.

        Contains the user's own top-level posts and the PUBLIC or FOLLOWERS
        top-level posts of every author the user follows with an accepted
        follow, newest first.
        """
        pass

    @abstractmethod
    async def get_public_timeline(self, limit: int, offset: int) -> List[Post]:
        """PUBLIC top-level posts of all users, newest first."""
        pass

    @abstractmethod
    async def get_replies(self, parent_post_id: str, viewer_id: Optional[str], limit: int, offset: int) -> List[Post]:
        """Direct replies to a post that ``viewer_id`` may see, oldest first; same rule as get_by_author."""
        pass

    @abstractmethod
    async def search(self, term: str, limit: int, offset: int) -> List[Post]:
        """PUBLIC posts whose content contains ``term`` (case-insensitive), newest first."""
        pass

    @abstractmethod
    async def get_with_media(self, limit: int, offset: int) -> List[Post]:
        """PUBLIC posts carrying at least one attachment, newest first."""
        pass

    @abstractmethod
    async def count_by_author(self, author_id: str) -> int:
        pass

    @abstractmethod
    async def count_replies(self, parent_post_id: str) -> int:
        pass
