"""
Tests for UserService, AuthTokenService and MessageService with mocked repositories.
"""
from datetime import timedelta
from unittest.mock import AsyncMock

import pytest

from social_platform.modules.messaging.domain.models import Message
from social_platform.modules.messaging.domain.services import MessageService
from social_platform.modules.user_management.domain.models import Follow, PasswordResetToken, RefreshToken
from social_platform.modules.user_management.domain.services import AuthTokenService, UserService
from social_platform.shared.core.exceptions import (
    AccountLockedException,
    AuthenticationError,
    AuthorizationError,
    DuplicateResourceError,
    InvalidOperationError,
    NotFoundError,
    ValidationError,
)
from social_platform.shared.core.security import get_password_hash, verify_password
from social_platform.shared.utils.helpers import generate_uuid, utc_now
from tests.conftest import make_user, mock_repository


def users_by_id(*users):
    """side_effect for get_by_id that resolves the given users."""
    lookup = {user.id: user for user in users}
    return lambda user_id: lookup.get(user_id)


class TestUserService:
    """Test registration, profiles and the follow graph."""

    @pytest.fixture
    def notification_service(self):
        return AsyncMock()

    @pytest.fixture
    def service(self, user_repository, follow_repository, post_repository, notification_service):
        return UserService(user_repository, follow_repository, post_repository, notification_service)

    async def test_create_user(self, service, user_repository):
        user_repository.is_email_taken.return_value = False
        user_repository.is_username_taken.return_value = False

        user = await service.create_user("Ana@Example.com", "Ana", "Ana", password="s3cret-pass")

        assert user.email == "ana@example.com"
        assert user.username == "ana"
        assert verify_password("s3cret-pass", user.password_hash)
        user_repository.save_changes.assert_awaited_once()

    async def test_create_user_duplicate_email(self, service, user_repository):
        user_repository.is_email_taken.return_value = True

        with pytest.raises(DuplicateResourceError) as exc_info:
            await service.create_user("ana@example.com", "ana", "Ana")

        assert exc_info.value.field == "email"
        user_repository.create.assert_not_awaited()

    async def test_create_user_blank_display_name(self, service, user_repository):
        with pytest.raises(ValidationError):
            await service.create_user("ana@example.com", "ana", "   ")
        user_repository.is_email_taken.assert_not_awaited()

    async def test_follow_public_user(self, service, user_repository, follow_repository, notification_service):
        follower, followee = make_user("ana"), make_user("ben")
        user_repository.get_by_id.side_effect = users_by_id(follower, followee)

        follow = await service.follow_user(follower.id, followee.id)

        assert follow.is_accepted is True
        notification_service.create_follow_notification.assert_awaited_once_with(
            followee.id, follower.id, commit=False
        )
        follow_repository.save_changes.assert_awaited_once()

    async def test_follow_private_user_creates_request(
        self, service, user_repository, follow_repository, notification_service
    ):
        follower, followee = make_user("ana"), make_user("ben", is_private=True)
        user_repository.get_by_id.side_effect = users_by_id(follower, followee)

        follow = await service.follow_user(follower.id, followee.id)

        assert follow.is_pending() is True
        notification_service.create_follow_request_notification.assert_awaited_once_with(
            followee.id, follower.id, commit=False
        )
        notification_service.create_follow_notification.assert_not_awaited()

    async def test_follow_self(self, service, follow_repository):
        user_id = generate_uuid()
        with pytest.raises(ValidationError):
            await service.follow_user(user_id, user_id)
        follow_repository.create.assert_not_awaited()

    async def test_follow_twice(self, service, user_repository, follow_repository):
        follower, followee = make_user("ana"), make_user("ben")
        user_repository.get_by_id.side_effect = users_by_id(follower, followee)
        follow_repository.get_by_pair.return_value = Follow.create(follower.id, followee.id)

        with pytest.raises(DuplicateResourceError):
            await service.follow_user(follower.id, followee.id)
        follow_repository.create.assert_not_awaited()

    async def test_unfollow_without_follow(self, service, follow_repository):
        with pytest.raises(NotFoundError):
            await service.unfollow_user(generate_uuid(), generate_uuid())
        follow_repository.delete.assert_not_awaited()

    async def test_accept_follow_request(self, service, follow_repository):
        request = Follow.create(generate_uuid(), generate_uuid(), requires_approval=True)
        follow_repository.get_by_pair.return_value = request

        accepted = await service.accept_follow_request(request.followee_id, request.follower_id)

        assert accepted.is_accepted is True
        assert accepted.accepted_at is not None
        follow_repository.update.assert_awaited_once()

    async def test_reject_follow_request_deletes_it(self, service, follow_repository):
        request = Follow.create(generate_uuid(), generate_uuid(), requires_approval=True)
        follow_repository.get_by_pair.return_value = request

        assert await service.reject_follow_request(request.followee_id, request.follower_id) is True
        follow_repository.delete.assert_awaited_once_with(request.id)

    async def test_reject_accepted_follow(self, service, follow_repository):
        follow = Follow.create(generate_uuid(), generate_uuid())
        follow_repository.get_by_pair.return_value = follow

        with pytest.raises(InvalidOperationError):
            await service.reject_follow_request(follow.followee_id, follow.follower_id)
        follow_repository.delete.assert_not_awaited()

    async def test_delete_other_account(self, service, user_repository):
        user = make_user()
        user_repository.get_by_id.return_value = user

        with pytest.raises(AuthorizationError):
            await service.delete_user(user.id, generate_uuid())
        user_repository.delete.assert_not_awaited()

    async def test_search_blank_term(self, service, user_repository):
        assert await service.search_users("  ") == []
        user_repository.search.assert_not_awaited()

    async def test_user_stats(self, service, user_repository, follow_repository, post_repository):
        user = make_user()
        user_repository.get_by_id.return_value = user
        follow_repository.count_followers.return_value = 3
        follow_repository.count_following.return_value = 2
        follow_repository.count_pending_requests.return_value = 1
        post_repository.count_by_author.return_value = 7

        stats = await service.get_user_stats(user.id)

        assert stats.followers_count == 3
        assert stats.following_count == 2
        assert stats.pending_requests_count == 1
        assert stats.posts_count == 7


class TestAuthTokenService:
    """Test login lockout, refresh token rotation and password reset."""

    @pytest.fixture
    def refresh_token_repository(self):
        repository = mock_repository()
        repository.revoke_all_for_user.return_value = 2
        return repository

    @pytest.fixture
    def reset_token_repository(self):
        return mock_repository()

    @pytest.fixture
    def service(self, user_repository, refresh_token_repository, reset_token_repository):
        return AuthTokenService(user_repository, refresh_token_repository, reset_token_repository, mock_repository())

    async def test_authenticate(self, service, user_repository):
        user = make_user(password_hash=get_password_hash("correct horse"))
        user_repository.get_by_email.return_value = user

        authenticated = await service.authenticate("Alice@Example.com", "correct horse")

        assert authenticated.last_login_at is not None
        user_repository.get_by_email.assert_awaited_once_with("alice@example.com")

    async def test_wrong_password_counts_failure(self, service, user_repository):
        user = make_user(password_hash=get_password_hash("correct horse"))
        user_repository.get_by_email.return_value = user

        with pytest.raises(AuthenticationError):
            await service.authenticate(user.email, "battery staple")

        assert user.failed_login_attempts == 1
        user_repository.update.assert_awaited_once()
        user_repository.save_changes.assert_awaited_once()

    async def test_locked_account(self, service, user_repository):
        user = make_user(lockout_end_at=utc_now() + timedelta(minutes=10))
        user_repository.get_by_email.return_value = user

        with pytest.raises(AccountLockedException):
            await service.authenticate(user.email, "anything")
        user_repository.update.assert_not_awaited()

    async def test_unknown_email(self, service, user_repository):
        user_repository.get_by_email.return_value = None
        with pytest.raises(AuthenticationError):
            await service.authenticate("nobody@example.com", "pw")

    async def test_rotate_refresh_token(self, service, refresh_token_repository):
        existing = RefreshToken.issue(generate_uuid(), "old-token", "jwt-1", utc_now() + timedelta(days=1))
        refresh_token_repository.get_by_token.return_value = existing

        replacement = await service.rotate_refresh_token("old-token", "jwt-2")

        assert replacement.jwt_id == "jwt-2"
        assert replacement.user_id == existing.user_id
        assert existing.is_used is True
        assert existing.is_revoked is True
        assert existing.replaced_by_token == replacement.token
        refresh_token_repository.update.assert_awaited_once_with(existing)

    async def test_reused_refresh_token_revokes_all(self, service, refresh_token_repository):
        existing = RefreshToken.issue(generate_uuid(), "old-token", "jwt-1", utc_now() + timedelta(days=1))
        existing.mark_as_used()
        refresh_token_repository.get_by_token.return_value = existing

        with pytest.raises(AuthenticationError):
            await service.rotate_refresh_token("old-token", "jwt-2")

        refresh_token_repository.revoke_all_for_user.assert_awaited_once()
        refresh_token_repository.create.assert_not_awaited()

    async def test_revoke_twice(self, service, refresh_token_repository):
        existing = RefreshToken.issue(generate_uuid(), "token", "jwt", utc_now() + timedelta(days=1))
        existing.revoke()
        refresh_token_repository.get_by_token.return_value = existing

        with pytest.raises(InvalidOperationError):
            await service.revoke_refresh_token("token")

    async def test_password_reset_unknown_email(self, service, user_repository, reset_token_repository):
        user_repository.get_by_email.return_value = None

        assert await service.create_password_reset_token("nobody@example.com") is None
        reset_token_repository.create.assert_not_awaited()

    async def test_reset_password(self, service, user_repository, refresh_token_repository, reset_token_repository):
        user = make_user()
        reset_token = PasswordResetToken.issue(user.id, "reset-me", utc_now() + timedelta(hours=1))
        reset_token_repository.get_by_token.return_value = reset_token
        user_repository.get_by_id.return_value = user

        updated = await service.reset_password("reset-me", "brand new password")

        assert verify_password("brand new password", updated.password_hash)
        assert reset_token.is_used is True
        refresh_token_repository.revoke_all_for_user.assert_awaited_once()

    async def test_reset_password_with_used_token(self, service, reset_token_repository, user_repository):
        reset_token = PasswordResetToken.issue(generate_uuid(), "reset-me", utc_now() + timedelta(hours=1))
        reset_token.mark_as_used()
        reset_token_repository.get_by_token.return_value = reset_token

        with pytest.raises(AuthenticationError):
            await service.reset_password("reset-me", "brand new password")
        user_repository.update.assert_not_awaited()


class TestMessageService:
    """Test direct message rules."""

    @pytest.fixture
    def message_repository(self):
        return mock_repository()

    @pytest.fixture
    def service(self, message_repository, user_repository):
        return MessageService(message_repository, user_repository)

    async def test_send_message(self, service, message_repository, user_repository):
        sender, recipient = make_user("ana"), make_user("ben")
        user_repository.get_by_id.side_effect = users_by_id(sender, recipient)

        message = await service.send_message(sender.id, recipient.id, "  hi ben ")

        assert message.content == "hi ben"
        assert message.is_read is False
        message_repository.save_changes.assert_awaited_once()

    async def test_send_message_to_self(self, service, message_repository):
        user_id = generate_uuid()
        with pytest.raises(ValidationError):
            await service.send_message(user_id, user_id, "note to self")
        message_repository.create.assert_not_awaited()

    async def test_send_to_unknown_recipient(self, service, message_repository, user_repository):
        sender = make_user("ana")
        user_repository.get_by_id.side_effect = users_by_id(sender)

        with pytest.raises(NotFoundError) as exc_info:
            await service.send_message(sender.id, generate_uuid(), "hello?")

        assert exc_info.value.field == "recipient_id"
        message_repository.create.assert_not_awaited()

    async def test_only_recipient_marks_read(self, service, message_repository):
        message = Message.create(generate_uuid(), generate_uuid(), "hi")
        message_repository.get_by_id.return_value = message

        with pytest.raises(AuthorizationError):
            await service.mark_as_read(message.id, message.sender_id)
        assert message.is_read is False

    async def test_mark_read_twice_skips_write(self, service, message_repository):
        message = Message.create(generate_uuid(), generate_uuid(), "hi")
        message.mark_as_read()
        message_repository.get_by_id.return_value = message

        assert await service.mark_as_read(message.id, message.recipient_id) is message
        message_repository.update.assert_not_awaited()

    async def test_deleted_message_is_missing(self, service, message_repository):
        message = Message.create(generate_uuid(), generate_uuid(), "hi")
        message.delete()
        message_repository.get_by_id.return_value = message

        with pytest.raises(NotFoundError):
            await service.edit_message(message.id, message.sender_id, "edited")

    async def test_only_sender_deletes(self, service, message_repository):
        message = Message.create(generate_uuid(), generate_uuid(), "hi")
        message_repository.get_by_id.return_value = message

        with pytest.raises(AuthorizationError):
            await service.delete_message(message.id, message.recipient_id)
        assert message.is_deleted is False
