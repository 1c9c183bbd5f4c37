# 📄 File: social_platform/modules/user_management/domain/services/user_service.py
# 🧭 Purpose (Layman Explanation):
# This file contains the business logic for managing users - creating accounts, updating profiles,
# following and unfollowing people, handling follow requests for private accounts and finding users.
#
# 🧪 Purpose (Technical Summary):
# Domain service implementing user lifecycle and social graph operations: registration with
# uniqueness checks, owner-checked profile mutations, the follow request state machine with
# notifications staged in the same unit of work, follower/following listings and profile statistics.
#
# 🔗 Dependencies:
# - social_platform.modules.user_management.domain (User, Follow, UserRepository, FollowRepository)
# - social_platform.modules.content.domain.repositories.post_repository (post counts)
# - social_platform.modules.notifications.domain.services.notification_service (follow notifications)
# - social_platform.shared.core (exceptions, security, pagination)
#
# 🔄 Connected Modules / Calls From:
# - social_platform.shared.core.dependencies (ServiceContainer)
# - transport layer (excluded)

import logging
from datetime import date
from typing import List, Optional

from social_platform.modules.content.domain.repositories.post_repository import PostRepository
from social_platform.modules.notifications.domain.services.notification_service import NotificationService
from social_platform.modules.user_management.application.dto.user_dto import UserStatsDTO
from social_platform.modules.user_management.domain.models.follow import Follow
from social_platform.modules.user_management.domain.models.user import User
from social_platform.modules.user_management.domain.repositories.follow_repository import FollowRepository
from social_platform.modules.user_management.domain.repositories.user_repository import UserRepository
from social_platform.shared.core.exceptions import (
    AuthorizationError,
    DuplicateResourceError,
    InvalidOperationError,
    NotFoundError,
)
from social_platform.shared.core.pagination import normalize_pagination
from social_platform.shared.core.security import generate_secure_token, get_password_hash
from social_platform.shared.utils.validators import ensure_different, require_id, require_text

logger = logging.getLogger(__name__)


class UserService:
    """
    Domain service for user management business logic.

    Business rules:
    - Email and username are unique (case-insensitive)
    - Following a private account creates a pending request
    - A pending request is accepted by the followee or rejected by deleting it
    - Profile changes and account deletion are limited to the account owner
    """

    def __init__(
        self,
        user_repository: UserRepository,
        follow_repository: FollowRepository,
        post_repository: Optional[PostRepository] = None,
        notification_service: Optional[NotificationService] = None,
    ):
        self.user_repository = user_repository
        self.follow_repository = follow_repository
        self.post_repository = post_repository
        self.notification_service = notification_service

    # =========================================================================
    # USER CREATION AND LIFECYCLE
    # =========================================================================

    async def create_user(
        self,
        email: str,
        username: str,
        display_name: str,
        password: Optional[str] = None,
    ) -> User:
        """
        Register a new user.

        Args:
            email: Email address
            username: Unique username
            display_name: Name shown on the profile
            password: Plain text password; accounts created without one get an
                unusable random password until a reset is completed

        Returns:
            User: Created user

        Raises:
            ValidationError: If a required field is blank
            DuplicateResourceError: If the email or username is taken
        """
        logger.info(f"Creating user with email {email} and username {username}")

        # 1. Validate input before touching storage
        email = require_text(email, "email")
        username = require_text(username, "username")
        display_name = require_text(display_name, "display_name")

        # 2. Uniqueness checks
        if await self.user_repository.is_email_taken(email):
            raise DuplicateResourceError(
                "Email address is already in use",
                resource_type="User",
                field="email",
                value=email.lower(),
            )
        if await self.user_repository.is_username_taken(username):
            raise DuplicateResourceError(
                "Username is already in use",
                resource_type="User",
                field="username",
                value=username.lower(),
            )

        # 3. Create and persist
        password_hash = get_password_hash(password or generate_secure_token())
        user = User.create_new_user(email, username, display_name, password_hash)
        created = await self.user_repository.create(user)
        await self.user_repository.save_changes()

        logger.info(f"Successfully created user {created.id} with username {created.username}")
        return created

    async def get_user_by_id(self, user_id: str) -> Optional[User]:
        require_id(user_id, "user_id")
        logger.debug(f"Retrieving user {user_id}")
        return await self.user_repository.get_by_id(user_id)

    async def get_user_by_username(self, username: str) -> Optional[User]:
        username = require_text(username, "username")
        logger.debug(f"Retrieving user by username {username}")
        return await self.user_repository.get_by_username(username)

    async def _get_existing_user(self, user_id: str, field: str = "user_id") -> User:
        require_id(user_id, field)
        user = await self.user_repository.get_by_id(user_id)
        if user is None:
            raise NotFoundError(resource_type="User", resource_id=user_id, field=field)
        return user

    async def _save_user(self, user: User) -> User:
        updated = await self.user_repository.update(user)
        await self.user_repository.save_changes()
        return updated

    async def delete_user(self, user_id: str, acting_user_id: str) -> bool:
        """
        Permanently delete an account and, through cascades, everything it owns.

        Raises:
            NotFoundError: If the user does not exist
            AuthorizationError: If ``acting_user_id`` is not the account owner
        """
        require_id(acting_user_id, "acting_user_id")
        user = await self._get_existing_user(user_id)

        if user.id != acting_user_id:
            logger.warning(f"User {acting_user_id} attempted to delete account {user_id}")
            raise AuthorizationError(
                "You can only delete your own account",
                resource_type="User",
                resource_id=user_id,
                required_action="delete",
                user_id=acting_user_id,
            )

        await self.user_repository.delete(user_id)
        await self.user_repository.save_changes()
        logger.info(f"Deleted user {user_id}")
        return True

    # =========================================================================
    # PROFILE MANAGEMENT
    # =========================================================================

    async def update_user_profile(
        self,
        user_id: str,
        display_name: Optional[str] = None,
        bio: Optional[str] = None,
        website: Optional[str] = None,
        location: Optional[str] = None,
    ) -> User:
        """
        Update public profile fields.

        A blank display name keeps the current one; bio, website and location
        are replaced as given.

        Raises:
            NotFoundError: If the user does not exist
        """
        logger.info(f"Updating profile for user {user_id}")
        user = await self._get_existing_user(user_id)
        user.update_profile(display_name=display_name, bio=bio, website=website, location=location)
        updated = await self._save_user(user)
        logger.info(f"Successfully updated profile for user {user_id}")
        return updated

    async def update_profile_image(self, user_id: str, image_url: Optional[str]) -> User:
        user = await self._get_existing_user(user_id)
        user.update_profile_image(image_url)
        return await self._save_user(user)

    async def update_cover_image(self, user_id: str, image_url: Optional[str]) -> User:
        user = await self._get_existing_user(user_id)
        user.update_cover_image(image_url)
        return await self._save_user(user)

    async def set_privacy(self, user_id: str, is_private: bool) -> User:
        user = await self._get_existing_user(user_id)
        user.set_privacy_status(is_private)
        updated = await self._save_user(user)
        logger.info(f"User {user_id} privacy set to {'private' if is_private else 'public'}")
        return updated

    async def set_verification(self, user_id: str, is_verified: bool) -> User:
        user = await self._get_existing_user(user_id)
        user.set_verification_status(is_verified)
        return await self._save_user(user)

    async def set_birth_date(self, user_id: str, birth_date: date) -> User:
        user = await self._get_existing_user(user_id)
        user.set_birth_date(birth_date)
        return await self._save_user(user)

    # =========================================================================
    # SOCIAL GRAPH
    # =========================================================================

    async def follow_user(self, follower_id: str, followee_id: str) -> Follow:
        """
        Follow another user.

        Following a private account creates a pending request that the
        followee has to accept. The followee is notified either way.

        Returns:
            Follow: Accepted follow, or a pending request for private accounts

        Raises:
            ValidationError: If the ids are blank or identical
            NotFoundError: If either user does not exist
            DuplicateResourceError: If the follow (or request) already exists
        """
        logger.info(f"User {follower_id} attempting to follow user {followee_id}")

        # 1. Validate input
        require_id(follower_id, "follower_id")
        require_id(followee_id, "followee_id")
        ensure_different(follower_id, followee_id, "followee_id", "Users cannot follow themselves")

        # 2. Load both users
        await self._get_existing_user(follower_id, "follower_id")
        followee = await self._get_existing_user(followee_id, "followee_id")

        # 3. Reject duplicates
        if await self.follow_repository.get_by_pair(follower_id, followee_id) is not None:
            raise DuplicateResourceError(
                "Already following this user",
                resource_type="Follow",
                field="followee_id",
                value=followee_id,
            )

        # 4. Create the follow and stage the notification in the same unit of work
        follow = Follow.create(follower_id, followee_id, requires_approval=followee.is_private)
        created = await self.follow_repository.create(follow)

        if self.notification_service is not None:
            if created.is_accepted:
                await self.notification_service.create_follow_notification(followee_id, follower_id, commit=False)
            else:
                await self.notification_service.create_follow_request_notification(followee_id, follower_id, commit=False)

        await self.follow_repository.save_changes()

        state = "follow request" if created.is_pending() else "follow relationship"
        logger.info(f"Successfully created {state}: {follower_id} -> {followee_id}")
        return created

    async def _get_existing_follow(self, follower_id: str, followee_id: str) -> Follow:
        require_id(follower_id, "follower_id")
        require_id(followee_id, "followee_id")
        follow = await self.follow_repository.get_by_pair(follower_id, followee_id)
        if follow is None:
            raise NotFoundError(
                f"No follow from {follower_id} to {followee_id}",
                resource_type="Follow",
                field="followee_id",
            )
        return follow

    async def unfollow_user(self, follower_id: str, followee_id: str) -> bool:
        """
        Remove a follow or withdraw a pending request.

        Raises:
            NotFoundError: If there is no follow between the users
        """
        logger.info(f"User {follower_id} attempting to unfollow user {followee_id}")
        follow = await self._get_existing_follow(follower_id, followee_id)

        await self.follow_repository.delete(follow.id)
        await self.follow_repository.save_changes()
        logger.info(f"Successfully removed follow relationship: {follower_id} -> {followee_id}")
        return True

    async def accept_follow_request(self, followee_id: str, follower_id: str) -> Follow:
        """
        Accept a pending follow request addressed to ``followee_id``.

        Raises:
            NotFoundError: If there is no request
            InvalidOperationError: If the follow is already accepted
        """
        follow = await self._get_existing_follow(follower_id, followee_id)
        follow.accept()

        updated = await self.follow_repository.update(follow)
        await self.follow_repository.save_changes()
        logger.info(f"User {followee_id} accepted follow request from {follower_id}")
        return updated

    async def reject_follow_request(self, followee_id: str, follower_id: str) -> bool:
        """
        Reject a pending follow request by deleting it.

        Raises:
            NotFoundError: If there is no request
            InvalidOperationError: If the follow was already accepted
        """
        follow = await self._get_existing_follow(follower_id, followee_id)
        if follow.is_accepted:
            raise InvalidOperationError(
                "Follow request is already accepted; unfollow instead",
                operation="reject",
                entity_type="Follow",
                entity_id=follow.id,
            )

        await self.follow_repository.delete(follow.id)
        await self.follow_repository.save_changes()
        logger.info(f"User {followee_id} rejected follow request from {follower_id}")
        return True

    async def get_followers(self, user_id: str, limit: int = 20, offset: int = 0) -> List[User]:
        require_id(user_id, "user_id")
        page = normalize_pagination(limit, offset)
        follows = await self.follow_repository.get_followers(user_id, page.limit, page.offset)
        return await self.user_repository.get_by_ids([follow.follower_id for follow in follows])

    async def get_following(self, user_id: str, limit: int = 20, offset: int = 0) -> List[User]:
        require_id(user_id, "user_id")
        page = normalize_pagination(limit, offset)
        follows = await self.follow_repository.get_following(user_id, page.limit, page.offset)
        return await self.user_repository.get_by_ids([follow.followee_id for follow in follows])

    async def get_pending_follow_requests(self, user_id: str, limit: int = 20, offset: int = 0) -> List[User]:
        """Users waiting for ``user_id`` to approve their follow request, oldest first."""
        require_id(user_id, "user_id")
        page = normalize_pagination(limit, offset)
        follows = await self.follow_repository.get_pending_requests(user_id, page.limit, page.offset)
        return await self.user_repository.get_by_ids([follow.follower_id for follow in follows])

    # =========================================================================
    # SEARCH & STATISTICS
    # =========================================================================

    async def search_users(self, term: str, limit: int = 20, offset: int = 0) -> List[User]:
        """Search by username or display name; a blank term returns nothing."""
        logger.debug(f"Searching users with term {term!r} and limit {limit}")
        if term is None or not term.strip():
            return []
        page = normalize_pagination(limit, offset)
        return await self.user_repository.search(term.strip(), page.limit, page.offset)

    async def get_user_stats(self, user_id: str) -> UserStatsDTO:
        """
        Profile statistics.

        Raises:
            NotFoundError: If the user does not exist
        """
        await self._get_existing_user(user_id)

        posts_count = 0
        if self.post_repository is not None:
            posts_count = await self.post_repository.count_by_author(user_id)

        return UserStatsDTO(
            user_id=user_id,
            followers_count=await self.follow_repository.count_followers(user_id),
            following_count=await self.follow_repository.count_following(user_id),
            posts_count=posts_count,
            pending_requests_count=await self.follow_repository.count_pending_requests(user_id),
        )
