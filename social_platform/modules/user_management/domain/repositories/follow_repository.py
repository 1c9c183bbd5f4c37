# 📄 File: social_platform/modules/user_management/domain/repositories/follow_repository.py
# 🧭 Purpose (Layman Explanation):
# The rules for storing and looking up "who follows whom", including follow requests that
# are still waiting for an answer.
# 🧪 Purpose (Technical Summary):
# Repository interface for Follow edges. Replaces navigation collections (followers/following)
# with explicit paginated queries, plus pair lookup and accepted-followee projection used by
# the feed and by visibility checks.
# 🔗 Dependencies:
# Domain models (Follow), shared Repository base, typing, abc
# 🔄 Connected Modules / Calls From:
# user_service.py, post_service.py, share_service.py, follow_repository_impl.py

from abc import abstractmethod
from typing import List, Optional

from social_platform.modules.user_management.domain.models.follow import Follow
from social_platform.shared.core.repository import Repository


class FollowRepository(Repository[Follow]):
    """
    Repository interface for Follow relationships.

    At most one follow exists per (follower, followee) pair.
    """

    @abstractmethod
    async def get_by_pair(self, follower_id: str, followee_id: str) -> Optional[Follow]:
        """
        Get the follow from ``follower_id`` to ``followee_id``.

        Returns:
            Follow (accepted or pending) if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_followers(self, user_id: str, limit: int, offset: int) -> List[Follow]:
        """Accepted follows targeting ``user_id``, newest first."""
        pass

    @abstractmethod
    async def get_following(self, user_id: str, limit: int, offset: int) -> List[Follow]:
        """Accepted follows created by ``user_id``, newest first."""
        pass

    @abstractmethod
    async def get_pending_requests(self, user_id: str, limit: int, offset: int) -> List[Follow]:
        """Pending follow requests targeting ``user_id``, oldest first."""
        pass

    @abstractmethod
    async def get_accepted_followee_ids(self, follower_id: str) -> List[str]:
        """Identifiers of every user ``follower_id`` follows with an accepted follow."""
        pass

    @abstractmethod
    async def count_followers(self, user_id: str) -> int:
        pass

    @abstractmethod
    async def count_following(self, user_id: str) -> int:
        pass

    @abstractmethod
    async def count_pending_requests(self, user_id: str) -> int:
        pass
