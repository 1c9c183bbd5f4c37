# 📄 File: social_platform/shared/infrastructure/database/__init__.py
# 🧭 Purpose (Layman Explanation):
# The database connection, the per-request database conversation and the common storage helpers.
# 🧪 Purpose (Technical Summary):
# Re-exports the declarative Base, engine and session managers, column types and the shared
# SQLAlchemy repository base.
# 🔗 Dependencies:
# sqlalchemy (async)
# 🔄 Connected Modules / Calls From:
# Module ORM models and repository implementations, dependency wiring, tests

from .connection import Base, DatabaseConnectionManager
from .session import DatabaseSessionManager
from .types import UTCDateTime, uuid_column_type
from .repository import SQLAlchemyRepository

__all__ = [
    "Base",
    "DatabaseConnectionManager",
    "DatabaseSessionManager",
    "UTCDateTime",
    "uuid_column_type",
    "SQLAlchemyRepository",
]
