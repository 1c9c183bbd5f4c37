# 📄 File: social_platform/shared/infrastructure/database/repository.py
#
# 🧭 Purpose (Layman Explanation):
# The shared toolbox every database storage class uses: run a query safely, turn
# "this already exists" database errors into friendly platform errors, and commit work.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy repository base class. Wraps statement execution with SQLAlchemyError handling,
# translates IntegrityError by constraint kind (unique to DuplicateResourceError, foreign key to
# NotFoundError, others to RepositoryError), and implements the unit-of-work save_changes()
# commit that reports how many rows were affected.
#
# 🔗 Dependencies:
# - sqlalchemy.ext.asyncio (AsyncSession)
# - social_platform.shared.core.exceptions (DuplicateResourceError, NotFoundError, RepositoryError, TransactionError)
#
# 🔄 Connected Modules / Calls From:
# - Every *_repository_impl.py in modules/*/infrastructure/database

import logging
from typing import Any, List, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from social_platform.shared.core.exceptions import (
    DuplicateResourceError,
    NotFoundError,
    RepositoryError,
    SocialPlatformException,
    TransactionError,
)

logger = logging.getLogger(__name__)

_PENDING_CHANGES_KEY = "pending_changes"

# PostgreSQL SQLSTATE codes; SQLite only reports the violation in its message
_UNIQUE_VIOLATION = "23505"
_FOREIGN_KEY_VIOLATION = "23503"

LIKE_ESCAPE = "\\"


def contains_pattern(term: str) -> str:
    """
    Case-folded ``%term%`` pattern for ``LIKE`` with the wildcards in ``term``
    escaped; pair it with ``escape=LIKE_ESCAPE``.
    """
    escaped = term.strip().lower()
    for char in (LIKE_ESCAPE, "%", "_"):
        escaped = escaped.replace(char, LIKE_ESCAPE + char)
    return f"%{escaped}%"


class SQLAlchemyRepository:
    """
    Base class for SQLAlchemy repository implementations.

    Repositories used in the same request share one AsyncSession, so the
    affected-row counter lives in ``session.info`` rather than on the repository.
    """

    resource_type: str = "Resource"

    def __init__(self, session: AsyncSession):
        """
        Initialize the repository.

        Args:
            session: SQLAlchemy async session for database operations
        """
        self._session = session

    # =========================================================================
    # UNIT OF WORK
    # =========================================================================

    def _record_changes(self, count: int = 1) -> None:
        info = self._session.info
        info[_PENDING_CHANGES_KEY] = info.get(_PENDING_CHANGES_KEY, 0) + max(count, 0)

    async def _rollback(self) -> None:
        await self._session.rollback()
        self._session.info.pop(_PENDING_CHANGES_KEY, None)

    def _integrity_error(self, error: IntegrityError, operation: str) -> SocialPlatformException:
        """Map a constraint violation onto the platform error for its kind."""
        sqlstate = getattr(error.orig, "sqlstate", None) or getattr(error.orig, "pgcode", None)
        message = str(error.orig).lower()

        if sqlstate == _UNIQUE_VIOLATION or "unique constraint" in message:
            return DuplicateResourceError(resource_type=self.resource_type)
        if sqlstate == _FOREIGN_KEY_VIOLATION or "foreign key constraint" in message:
            return NotFoundError(
                f"{self.resource_type} {operation} references a record that does not exist",
                resource_type=self.resource_type,
            )
        return RepositoryError(
            f"Failed to {operation} {self.resource_type}: {error.orig}",
            repository=self.__class__.__name__,
            operation=operation,
        )

    async def save_changes(self) -> int:
        """
        Commit the current unit of work.

        Returns:
            int: Rows added, changed or removed since the last commit
        """
        try:
            await self._session.commit()
        except IntegrityError as e:
            await self._rollback()
            logger.warning(f"{self.resource_type} commit rejected by a constraint: {e.orig}")
            raise self._integrity_error(e, "save_changes") from e
        except SQLAlchemyError as e:
            await self._rollback()
            logger.error(f"Database error committing {self.resource_type} changes: {e}")
            raise TransactionError(f"Failed to save changes: {e}") from e

        affected = self._session.info.pop(_PENDING_CHANGES_KEY, 0)
        logger.debug(f"Committed unit of work ({affected} rows affected)")
        return affected

    # =========================================================================
    # WRITE HELPERS
    # =========================================================================

    async def _add(self, model: Any, operation: str = "create") -> Any:
        """Add a row and flush so constraint violations surface immediately."""
        try:
            self._session.add(model)
            await self._session.flush()
        except IntegrityError as e:
            await self._rollback()
            logger.warning(f"{self.resource_type} {operation} violated a constraint: {e.orig}")
            raise self._integrity_error(e, operation) from e
        except SQLAlchemyError as e:
            await self._rollback()
            logger.error(f"Database error during {self.resource_type} {operation}: {e}")
            raise RepositoryError(
                f"Failed to {operation} {self.resource_type}: {e}",
                repository=self.__class__.__name__,
                operation=operation,
            ) from e

        self._record_changes()
        return model

    async def _add_all(self, models: List[Any], operation: str = "create_many") -> List[Any]:
        if not models:
            return models
        try:
            self._session.add_all(models)
            await self._session.flush()
        except IntegrityError as e:
            await self._rollback()
            logger.warning(f"{self.resource_type} {operation} violated a constraint: {e.orig}")
            raise self._integrity_error(e, operation) from e
        except SQLAlchemyError as e:
            await self._rollback()
            logger.error(f"Database error during {self.resource_type} {operation}: {e}")
            raise RepositoryError(
                f"Failed to {operation} {self.resource_type}: {e}",
                repository=self.__class__.__name__,
                operation=operation,
            ) from e

        self._record_changes(len(models))
        return models

    async def _flush(self, operation: str) -> None:
        try:
            await self._session.flush()
        except IntegrityError as e:
            await self._rollback()
            logger.warning(f"{self.resource_type} {operation} violated a constraint: {e.orig}")
            raise self._integrity_error(e, operation) from e
        except SQLAlchemyError as e:
            await self._rollback()
            logger.error(f"Database error during {self.resource_type} {operation}: {e}")
            raise RepositoryError(
                f"Failed to {operation} {self.resource_type}: {e}",
                repository=self.__class__.__name__,
                operation=operation,
            ) from e

    async def _delete_model(self, model: Any) -> None:
        try:
            await self._session.delete(model)
            await self._session.flush()
        except SQLAlchemyError as e:
            await self._rollback()
            logger.error(f"Database error deleting {self.resource_type}: {e}")
            raise RepositoryError(
                f"Failed to delete {self.resource_type}: {e}",
                repository=self.__class__.__name__,
                operation="delete",
            ) from e
        self._record_changes()

    async def _execute_write(self, stmt: Any, operation: str, record: bool = True) -> int:
        """Run a bulk UPDATE/DELETE and, unless ``record`` is False, count its rows as changes."""
        try:
            result = await self._session.execute(stmt)
        except SQLAlchemyError as e:
            await self._rollback()
            logger.error(f"Database error during {self.resource_type} {operation}: {e}")
            raise RepositoryError(
                f"Failed to {operation} {self.resource_type}: {e}",
                repository=self.__class__.__name__,
                operation=operation,
            ) from e

        affected = result.rowcount or 0
        if record:
            self._record_changes(affected)
        return affected

    # =========================================================================
    # READ HELPERS
    # =========================================================================

    async def _get(self, model_class: Any, entity_id: str) -> Optional[Any]:
        try:
            return await self._session.get(model_class, entity_id)
        except SQLAlchemyError as e:
            logger.error(f"Database error retrieving {self.resource_type} {entity_id}: {e}")
            raise RepositoryError(
                f"Failed to retrieve {self.resource_type}: {e}",
                repository=self.__class__.__name__,
                operation="get_by_id",
            ) from e

    async def _scalars(self, stmt: Any, operation: str) -> List[Any]:
        try:
            result = await self._session.execute(stmt)
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error(f"Database error during {self.resource_type} {operation}: {e}")
            raise RepositoryError(
                f"Failed to {operation}: {e}",
                repository=self.__class__.__name__,
                operation=operation,
            ) from e

    async def _scalar_one_or_none(self, stmt: Any, operation: str) -> Optional[Any]:
        try:
            result = await self._session.execute(stmt)
            return result.scalars().first()
        except SQLAlchemyError as e:
            logger.error(f"Database error during {self.resource_type} {operation}: {e}")
            raise RepositoryError(
                f"Failed to {operation}: {e}",
                repository=self.__class__.__name__,
                operation=operation,
            ) from e

    async def _rows(self, stmt: Any, operation: str) -> List[Any]:
        try:
            result = await self._session.execute(stmt)
            return list(result.all())
        except SQLAlchemyError as e:
            logger.error(f"Database error during {self.resource_type} {operation}: {e}")
            raise RepositoryError(
                f"Failed to {operation}: {e}",
                repository=self.__class__.__name__,
                operation=operation,
            ) from e

    async def _count(self, model_class: Any, *criteria: Any) -> int:
        stmt = select(func.count()).select_from(model_class)
        if criteria:
            stmt = stmt.where(*criteria)
        try:
            result = await self._session.execute(stmt)
            return int(result.scalar_one())
        except SQLAlchemyError as e:
            logger.error(f"Database error counting {self.resource_type}: {e}")
            raise RepositoryError(
                f"Failed to count {self.resource_type}: {e}",
                repository=self.__class__.__name__,
                operation="count",
            ) from e
