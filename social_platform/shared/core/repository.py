# 📄 File: social_platform/shared/core/repository.py
# 🧭 Purpose (Layman Explanation):
# The common promise every kind of storage makes: save something new, find it by ID,
# write back changes, remove it, and finally commit everything that was done.
# 🧪 Purpose (Technical Summary):
# Generic repository interface shared by every entity repository contract. Write-back is
# explicit (update receives the whole entity) and commit is a separate save_changes call.
# 🔗 Dependencies:
# abc, typing
# 🔄 Connected Modules / Calls From:
# modules/*/domain/repositories (entity contracts), domain services

from abc import ABC, abstractmethod
from typing import Generic, Optional, TypeVar

EntityT = TypeVar("EntityT")


class Repository(ABC, Generic[EntityT]):
    """
    Base repository interface.

    Implementation Notes:
    - Concrete implementations are in the infrastructure layer
    - Methods return domain entities, never database models
    - Changes are staged by create/update/delete and committed by save_changes
    """

    @abstractmethod
    async def create(self, entity: EntityT) -> EntityT:
        """
        Stage a new entity for insertion.

        Raises:
            DuplicateResourceError: If a uniqueness constraint is violated
            RepositoryError: If database operation fails
        """
        pass

    @abstractmethod
    async def get_by_id(self, entity_id: str) -> Optional[EntityT]:
        """
        Get entity by ID.

        Returns:
            Entity if found, None otherwise
        """
        pass

    @abstractmethod
    async def update(self, entity: EntityT) -> EntityT:
        """
        Write every field of an already-mutated entity back to storage.

        Raises:
            NotFoundError: If the entity no longer exists
            RepositoryError: If database operation fails
        """
        pass

    @abstractmethod
    async def delete(self, entity_id: str) -> bool:
        """
        Hard delete entity by ID.

        Returns:
            True if deleted, False if not found
        """
        pass

    @abstractmethod
    async def save_changes(self) -> int:
        """
        Commit the current unit of work.

        Returns:
            Number of rows added, changed or removed since the last commit
        """
        pass
