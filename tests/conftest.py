"""
Pytest configuration and fixtures for social platform tests.
"""
import os

# Settings are cached on first use, so the test environment is fixed before any import
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("LOG_LEVEL", "DEBUG")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from unittest.mock import AsyncMock

import pytest
import pytest_asyncio

from social_platform.modules.content.domain.models import Post
from social_platform.modules.user_management.domain.models import User
from social_platform.shared.config.settings import Settings
from social_platform.shared.core.dependencies import service_scope
from social_platform.shared.infrastructure.database import DatabaseConnectionManager, DatabaseSessionManager
from social_platform.shared.utils.helpers import generate_uuid


# =============================================================================
# DOMAIN FACTORIES
# =============================================================================

def make_user(username: str = "alice", **overrides) -> User:
    """Build a valid user without touching storage."""
    values = {
        "email": f"{username}@example.com",
        "username": username,
        "display_name": username.title(),
        "password_hash": "not-a-real-hash",
    }
    values.update(overrides)
    return User(**values)


def make_post(author_id: str = None, content: str = "hello", **overrides) -> Post:
    return Post(author_id=author_id or generate_uuid(), content=content, **overrides)


# =============================================================================
# MOCK REPOSITORIES
# =============================================================================

def mock_repository() -> AsyncMock:
    """Repository double whose writes echo the entity they receive."""
    repository = AsyncMock()
    repository.create.side_effect = lambda entity: entity
    repository.update.side_effect = lambda entity: entity
    repository.delete.return_value = True
    repository.save_changes.return_value = 1
    return repository


@pytest.fixture
def user_repository():
    return mock_repository()


@pytest.fixture
def follow_repository():
    repository = mock_repository()
    repository.get_by_pair.return_value = None
    return repository


@pytest.fixture
def post_repository():
    return mock_repository()


@pytest.fixture
def notification_repository():
    repository = mock_repository()
    repository.create_many.side_effect = lambda notifications: list(notifications)
    return repository


# =============================================================================
# DATABASE
# =============================================================================

@pytest_asyncio.fixture
async def session_manager():
    """Fresh in-memory SQLite database with every table created."""
    settings = Settings(DATABASE_URL="sqlite+aiosqlite:///:memory:", ENVIRONMENT="test")
    connection_manager = DatabaseConnectionManager(settings)
    await connection_manager.initialize()
    await connection_manager.create_tables()

    manager = DatabaseSessionManager(connection_manager)
    await manager.initialize()

    yield manager

    await connection_manager.close()


@pytest_asyncio.fixture
async def services(session_manager):
    """Repositories and services sharing one session."""
    async with service_scope(session_manager) as container:
        yield container
