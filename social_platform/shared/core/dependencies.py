# 📄 File: social_platform/shared/core/dependencies.py
# 🧭 Purpose (Layman Explanation):
# The place where all the pieces are plugged together: for each request it hands every service
# the storage classes it needs, all talking to the database through the same conversation.
#
# 🧪 Purpose (Technical Summary):
# Composition root. ServiceContainer wires the SQLAlchemy repository implementations and domain
# services around a single AsyncSession, so one save_changes commits everything a request staged.
# service_scope() opens that session from a DatabaseSessionManager for one unit of work.
#
# 🔗 Dependencies:
# - sqlalchemy.ext.asyncio (AsyncSession)
# - every module's *_repository_impl.py and domain service
# - social_platform.shared.infrastructure.database.session (DatabaseSessionManager)
#
# 🔄 Connected Modules / Calls From:
# - transport layer request handlers (excluded), integration tests

"""
Dependency wiring.

Usage:
    async with service_scope(session_manager) as services:
        post = await services.post_service.create_text_post(author_id, "hello")
"""

import logging
from contextlib import asynccontextmanager
from functools import cached_property
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from social_platform.modules.content.domain.services.comment_service import CommentService
from social_platform.modules.content.domain.services.like_service import LikeService
from social_platform.modules.content.domain.services.post_service import PostService
from social_platform.modules.content.domain.services.share_service import ShareService
from social_platform.modules.content.infrastructure.database.comment_repository_impl import CommentRepositoryImpl
from social_platform.modules.content.infrastructure.database.like_repository_impl import LikeRepositoryImpl
from social_platform.modules.content.infrastructure.database.post_repository_impl import PostRepositoryImpl
from social_platform.modules.content.infrastructure.database.share_repository_impl import ShareRepositoryImpl
from social_platform.modules.messaging.domain.services.message_service import MessageService
from social_platform.modules.messaging.infrastructure.database.message_repository_impl import MessageRepositoryImpl
from social_platform.modules.notifications.domain.services.notification_service import NotificationService
from social_platform.modules.notifications.infrastructure.database.notification_repository_impl import (
    NotificationRepositoryImpl,
)
from social_platform.modules.user_management.domain.services.auth_token_service import AuthTokenService
from social_platform.modules.user_management.domain.services.user_service import UserService
from social_platform.modules.user_management.infrastructure.database.auth_token_repository_impl import (
    PasswordResetTokenRepositoryImpl,
    RefreshTokenRepositoryImpl,
    UserSessionRepositoryImpl,
)
from social_platform.modules.user_management.infrastructure.database.follow_repository_impl import FollowRepositoryImpl
from social_platform.modules.user_management.infrastructure.database.user_repository_impl import UserRepositoryImpl
from social_platform.shared.infrastructure.database.session import DatabaseSessionManager

logger = logging.getLogger(__name__)


class ServiceContainer:
    """
    Repositories and services for one unit of work.

    Everything is created on first access and shares ``session``.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    # =========================================================================
    # REPOSITORIES
    # =========================================================================

    @cached_property
    def user_repository(self) -> UserRepositoryImpl:
        return UserRepositoryImpl(self.session)

    @cached_property
    def follow_repository(self) -> FollowRepositoryImpl:
        return FollowRepositoryImpl(self.session)

    @cached_property
    def refresh_token_repository(self) -> RefreshTokenRepositoryImpl:
        return RefreshTokenRepositoryImpl(self.session)

    @cached_property
    def password_reset_token_repository(self) -> PasswordResetTokenRepositoryImpl:
        return PasswordResetTokenRepositoryImpl(self.session)

    @cached_property
    def user_session_repository(self) -> UserSessionRepositoryImpl:
        return UserSessionRepositoryImpl(self.session)

    @cached_property
    def post_repository(self) -> PostRepositoryImpl:
        return PostRepositoryImpl(self.session)

    @cached_property
    def comment_repository(self) -> CommentRepositoryImpl:
        return CommentRepositoryImpl(self.session)

    @cached_property
    def like_repository(self) -> LikeRepositoryImpl:
        return LikeRepositoryImpl(self.session)

    @cached_property
    def share_repository(self) -> ShareRepositoryImpl:
        return ShareRepositoryImpl(self.session)

    @cached_property
    def message_repository(self) -> MessageRepositoryImpl:
        return MessageRepositoryImpl(self.session)

    @cached_property
    def notification_repository(self) -> NotificationRepositoryImpl:
        return NotificationRepositoryImpl(self.session)

    # =========================================================================
    # SERVICES
    # =========================================================================

    @cached_property
    def notification_service(self) -> NotificationService:
        return NotificationService(self.notification_repository, self.user_repository)

    @cached_property
    def user_service(self) -> UserService:
        return UserService(
            user_repository=self.user_repository,
            follow_repository=self.follow_repository,
            post_repository=self.post_repository,
            notification_service=self.notification_service,
        )

    @cached_property
    def auth_token_service(self) -> AuthTokenService:
        return AuthTokenService(
            user_repository=self.user_repository,
            refresh_token_repository=self.refresh_token_repository,
            password_reset_token_repository=self.password_reset_token_repository,
            user_session_repository=self.user_session_repository,
        )

    @cached_property
    def post_service(self) -> PostService:
        return PostService(
            post_repository=self.post_repository,
            user_repository=self.user_repository,
            follow_repository=self.follow_repository,
            like_repository=self.like_repository,
            comment_repository=self.comment_repository,
            share_repository=self.share_repository,
        )

    @cached_property
    def comment_service(self) -> CommentService:
        return CommentService(
            comment_repository=self.comment_repository,
            post_repository=self.post_repository,
            user_repository=self.user_repository,
            follow_repository=self.follow_repository,
            notification_service=self.notification_service,
        )

    @cached_property
    def like_service(self) -> LikeService:
        return LikeService(
            like_repository=self.like_repository,
            post_repository=self.post_repository,
            user_repository=self.user_repository,
            follow_repository=self.follow_repository,
            notification_service=self.notification_service,
        )

    @cached_property
    def share_service(self) -> ShareService:
        return ShareService(self.share_repository, self.post_service, self.user_repository)

    @cached_property
    def message_service(self) -> MessageService:
        return MessageService(self.message_repository, self.user_repository)


@asynccontextmanager
async def service_scope(session_manager: DatabaseSessionManager) -> AsyncGenerator[ServiceContainer, None]:
    """
    Open one unit of work and yield its services.

    The session commits when the block exits cleanly and rolls back on error.
    """
    async with session_manager.get_session() as session:
        yield ServiceContainer(session)
