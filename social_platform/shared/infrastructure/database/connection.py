# 📄 File: social_platform/shared/infrastructure/database/connection.py
#
# 🧭 Purpose (Layman Explanation):
# Manages the connection to our database, making sure we can talk to our data storage
# and share a small pool of connections instead of opening a new one for every request.
#
# 🧪 Purpose (Technical Summary):
# Async SQLAlchemy engine management with connection pooling, health checks and
# the declarative Base every ORM model in every module derives from.
#
# 🔗 Dependencies:
# - sqlalchemy (async engine, declarative base)
# - social_platform/shared/config/settings.py (database configuration)
# - asyncpg (PostgreSQL async driver) / aiosqlite (tests)
#
# 🔄 Connected Modules / Calls From:
# - social_platform/shared/infrastructure/database/session.py (session management)
# - All module ORM models (Base)

import logging
from typing import Any, Dict, Optional

from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool

from social_platform.shared.config.settings import Settings, get_settings
from social_platform.shared.utils.helpers import utc_now

logger = logging.getLogger(__name__)

Base = declarative_base()


class DatabaseConnectionManager:
    """
    Manages database connections with connection pooling
    and health monitoring.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings or get_settings()
        self._engine: Optional[AsyncEngine] = None
        self._health_check_query = text("SELECT 1")

    def _build_connection_params(self) -> Dict[str, Any]:
        """Build SQLAlchemy connection parameters from settings."""
        settings = self._settings
        if settings.is_sqlite:
            # One shared in-memory connection; pool sizing does not apply
            return {
                "url": settings.database_url,
                "echo": settings.DB_ECHO,
                "connect_args": {"check_same_thread": False},
                "poolclass": StaticPool,
            }

        return {
            "url": settings.database_url,
            "echo": settings.DB_ECHO,
            "pool_pre_ping": True,
            "pool_recycle": settings.DB_POOL_RECYCLE,
            "pool_size": settings.DB_POOL_SIZE,
            "max_overflow": settings.DB_MAX_OVERFLOW,
            "pool_timeout": settings.DB_POOL_TIMEOUT,
            "connect_args": {
                "server_settings": {"application_name": "social_platform"},
                "command_timeout": 60,
            },
        }

    async def initialize(self) -> None:
        """Initialize database engine with connection pooling."""
        if self._engine is not None:
            logger.warning("Database engine already initialized")
            return

        logger.info("Initializing database connection pool...")
        self._engine = create_async_engine(**self._build_connection_params())
        self._register_connection_events()
        logger.info(f"Database engine initialized for {self._engine.url.render_as_string(hide_password=True)}")

    def _register_connection_events(self) -> None:
        """Register SQLAlchemy connection event listeners."""
        if self._engine is None or not self._settings.is_sqlite:
            return

        @event.listens_for(self._engine.sync_engine, "connect")
        def set_sqlite_pragma(dbapi_connection, connection_record):
            """SQLite only enforces ON DELETE CASCADE with foreign keys switched on."""
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    async def create_tables(self) -> None:
        """Create every table registered on Base (local runs and tests)."""
        if self._engine is None:
            raise RuntimeError("Database engine not initialized")

        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info(f"Created {len(Base.metadata.tables)} tables")

    async def drop_tables(self) -> None:
        """Drop every table registered on Base."""
        if self._engine is None:
            raise RuntimeError("Database engine not initialized")

        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def health_check(self) -> dict:
        """
        Perform database health check and return structured status.
        """
        if self._engine is None:
            logger.error("Database engine not initialized")
            return {
                "status": "unhealthy",
                "error": "Database engine not initialized",
                "timestamp": utc_now().isoformat()
            }

        try:
            async with self._engine.connect() as conn:
                result = await conn.execute(self._health_check_query)
                result.scalar()
        except Exception as e:
            logger.warning(f"Database health check failed: {e}")
            return {
                "status": "unhealthy",
                "error": str(e),
                "timestamp": utc_now().isoformat()
            }

        logger.debug("Database health check passed")
        return {
            "status": "healthy",
            "timestamp": utc_now().isoformat()
        }

    async def close(self) -> None:
        """Close database engine and all connections."""
        if self._engine is None:
            logger.warning("Database engine not initialized, nothing to close")
            return

        logger.info("Closing database connection pool...")
        await self._engine.dispose()
        self._engine = None
        logger.info("Database connection pool closed successfully")

    @property
    def engine(self) -> Optional[AsyncEngine]:
        """Get the SQLAlchemy async engine."""
        return self._engine

    @property
    def is_initialized(self) -> bool:
        """Check if database engine is initialized."""
        return self._engine is not None
