# 📄 File: social_platform/modules/content/domain/repositories/share_repository.py
# 🧭 Purpose (Layman Explanation):
# How re-shares of a post are stored and counted.
# 🧪 Purpose (Technical Summary):
# Repository interface for Share entities with an existence check, per-post and per-user pages
# and a per-post count.
# 🔗 Dependencies:
# Domain models (Share), shared Repository base, typing, abc
# 🔄 Connected Modules / Calls From:
# share_service.py, post_service.py (stats), share_repository_impl.py

from abc import abstractmethod
from typing import List

from social_platform.modules.content.domain.models.share import Share
from social_platform.shared.core.repository import Repository


class ShareRepository(Repository[Share]):
    """A user shares a given post at most once (unique index on user and post)."""

    @abstractmethod
    async def exists(self, user_id: str, post_id: str) -> bool:
        pass

    @abstractmethod
    async def get_by_post(self, post_id: str, limit: int, offset: int) -> List[Share]:
        pass

    @abstractmethod
    async def get_by_user(self, user_id: str, limit: int, offset: int) -> List[Share]:
        pass

    @abstractmethod
    async def count_by_post(self, post_id: str) -> int:
        pass
