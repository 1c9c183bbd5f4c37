# 📄 File: social_platform/shared/infrastructure/database/session.py
#
# 🧭 Purpose (Layman Explanation):
# Manages database sessions (like conversations with the database), making sure each
# request gets its own clean session and that half-finished changes are thrown away on errors.
#
# 🧪 Purpose (Technical Summary):
# Async SQLAlchemy session factory and unit-of-work context manager: one AsyncSession per
# logical operation, committed on success and rolled back on any exception.
#
# 🔗 Dependencies:
# - sqlalchemy.ext.asyncio (AsyncSession, async_sessionmaker)
# - social_platform/shared/infrastructure/database/connection.py (database engine)
#
# 🔄 Connected Modules / Calls From:
# - The hosting application (one session per request, shared by that request's repositories)
# - Integration tests

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from sqlalchemy import exc
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from social_platform.shared.core.exceptions import DatabaseError, SocialPlatformException, TransactionError
from social_platform.shared.infrastructure.database.connection import DatabaseConnectionManager

logger = logging.getLogger(__name__)


class DatabaseSessionManager:
    """
    Manages database sessions with transaction handling and automatic cleanup.
    """

    def __init__(self, connection_manager: DatabaseConnectionManager):
        self._connection_manager = connection_manager
        self._session_factory: Optional[async_sessionmaker] = None

    async def initialize(self) -> None:
        """Initialize the session factory with database engine."""
        if not self._connection_manager.is_initialized:
            await self._connection_manager.initialize()

        self._session_factory = async_sessionmaker(
            self._connection_manager.engine,
            class_=AsyncSession,
            expire_on_commit=False,  # Keep objects accessible after commit
            autoflush=True,
        )
        logger.info("Database session factory initialized successfully")

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Get an async database session scoped to one unit of work.

        Changes not yet committed through a repository's ``save_changes`` are
        committed when the block exits cleanly; any exception rolls back.

        Yields:
            AsyncSession: Database session

        Raises:
            DatabaseError: If the session manager is not initialized or storage fails
            TransactionError: If an unexpected error aborts the transaction
        """
        if self._session_factory is None:
            raise DatabaseError("Session manager not initialized")

        session: AsyncSession = self._session_factory()

        try:
            logger.debug("Database session created")
            yield session

            await session.commit()
            logger.debug("Database transaction committed successfully")

        except SocialPlatformException:
            # Domain failures pass through unchanged after the rollback
            await session.rollback()
            raise

        except exc.SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"Database error occurred, transaction rolled back: {e}")
            raise DatabaseError(f"Database operation failed: {e}") from e

        except Exception as e:
            await session.rollback()
            logger.error(f"Unexpected error occurred, transaction rolled back: {e}")
            raise TransactionError(f"Transaction failed: {e}") from e

        finally:
            await session.close()
            logger.debug("Database session closed")

    @property
    def is_initialized(self) -> bool:
        """Check if session manager is initialized."""
        return self._session_factory is not None
