# 📄 File: social_platform/modules/content/domain/repositories/like_repository.py
# 🧭 Purpose (Layman Explanation):
# How likes are stored: has this person liked this post, who liked it, how many likes.
# 🧪 Purpose (Technical Summary):
# Repository interface for Like entities. One like per (user, post), enforced by a unique index;
# a duplicate insert surfaces as DuplicateResourceError.
# 🔗 Dependencies:
# Domain models (Like), shared Repository base, typing, abc
# 🔄 Connected Modules / Calls From:
# like_service.py, post_service.py (stats), like_repository_impl.py

from abc import abstractmethod
from typing import List, Optional

from social_platform.modules.content.domain.models.like import Like
from social_platform.shared.core.repository import Repository


class LikeRepository(Repository[Like]):
    """Repository interface for likes."""

    @abstractmethod
    async def get_by_user_and_post(self, user_id: str, post_id: str) -> Optional[Like]:
        pass

    @abstractmethod
    async def exists(self, user_id: str, post_id: str) -> bool:
        pass

    @abstractmethod
    async def get_by_post(self, post_id: str, limit: int, offset: int) -> List[Like]:
        """Likes on a post, newest first."""
        pass

    @abstractmethod
    async def get_by_user(self, user_id: str, limit: int, offset: int) -> List[Like]:
        """Likes given by a user, newest first."""
        pass

    @abstractmethod
    async def count_by_post(self, post_id: str) -> int:
        pass

    @abstractmethod
    async def count_by_user(self, user_id: str) -> int:
        pass
