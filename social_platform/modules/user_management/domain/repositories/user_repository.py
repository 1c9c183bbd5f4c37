# 📄 File: social_platform/modules/user_management/domain/repositories/user_repository.py
# 🧭 Purpose (Layman Explanation):
# Defines the contract for how to save, find, update, and delete user accounts without saying
# which database is behind it.
# 🧪 Purpose (Technical Summary):
# Repository interface for User entities (Repository pattern, dependency inversion). Adds
# case-insensitive identity lookups, uniqueness checks and username/display-name search.
# 🔗 Dependencies:
# Domain models (User), shared Repository base, typing, abc
# 🔄 Connected Modules / Calls From:
# user_service.py, auth_token_service.py, like_service.py, user_repository_impl.py

from abc import abstractmethod
from typing import List, Optional, Sequence

from social_platform.modules.user_management.domain.models.user import User
from social_platform.shared.core.repository import Repository


class UserRepository(Repository[User]):
    """
    Repository interface for User entity data access operations.

    Implementation Notes:
    - Concrete implementations are in infrastructure layer
    - Methods return domain entities (User), not database models
    - Email and username comparisons are case-insensitive
    - Uniqueness of email and username is also enforced by storage indexes
    """

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """
        Get user by email address.

        Args:
            email: Email address to find (any case)

        Returns:
            User entity if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_by_username(self, username: str) -> Optional[User]:
        """
        Get user by username.

        Args:
            username: Username to find (any case)

        Returns:
            User entity if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_by_ids(self, user_ids: Sequence[str]) -> List[User]:
        """
        Get several users at once, in the order of ``user_ids``.

        Unknown identifiers are skipped.
        """
        pass

    @abstractmethod
    async def is_email_taken(self, email: str) -> bool:
        pass

    @abstractmethod
    async def is_username_taken(self, username: str) -> bool:
        pass

    @abstractmethod
    async def search(self, term: str, limit: int, offset: int) -> List[User]:
        """
        Search users whose username or display name contains ``term``.

        Args:
            term: Case-insensitive search fragment
            limit: Maximum number of users to return
            offset: Number of users to skip

        Returns:
            List of matching users ordered by username
        """
        pass
