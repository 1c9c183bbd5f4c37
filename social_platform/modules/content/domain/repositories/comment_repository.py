# 📄 File: social_platform/modules/content/domain/repositories/comment_repository.py
# 🧭 Purpose (Layman Explanation):
# How comments are stored and listed, either under one post or for one person.
# 🧪 Purpose (Technical Summary):
# Repository interface for Comment entities with per-post and per-user pages and counts.
# 🔗 Dependencies:
# Domain models (Comment), shared Repository base, typing, abc
# 🔄 Connected Modules / Calls From:
# comment_service.py, post_service.py (stats), comment_repository_impl.py

from abc import abstractmethod
from typing import List

from social_platform.modules.content.domain.models.comment import Comment
from social_platform.shared.core.repository import Repository


class CommentRepository(Repository[Comment]):
    """Repository interface for comments."""

    @abstractmethod
    async def get_by_post(self, post_id: str, limit: int, offset: int) -> List[Comment]:
        """Comments on a post, oldest first."""
        pass

    @abstractmethod
    async def get_by_user(self, user_id: str, limit: int, offset: int) -> List[Comment]:
        """Comments written by a user, newest first."""
        pass

    @abstractmethod
    async def count_by_post(self, post_id: str) -> int:
        pass

    @abstractmethod
    async def count_by_user(self, user_id: str) -> int:
        pass
