"""
Integration tests for accounts, follows and authentication against SQLite.
"""

import pytest

from social_platform.modules.notifications.domain.models.notification import NotificationType
from social_platform.shared.core.exceptions import AuthenticationError, DuplicateResourceError, InvalidOperationError


async def _create(services, username, password="correct horse battery"):
    return await services.user_service.create_user(
        f"{username}@example.com", username, username.title(), password=password
    )


class TestUserPersistence:
    """Users survive a round-trip through the repositories."""

    async def test_lookup_by_username_and_email(self, services):
        created = await _create(services, "alice")

        by_username = await services.user_service.get_user_by_username("ALICE")
        by_email = await services.user_repository.get_by_email("Alice@Example.com")

        assert by_username.id == created.id
        assert by_email.id == created.id
        assert by_username.password_hash != "correct horse battery"

    async def test_duplicate_username_is_rejected(self, services):
        await _create(services, "alice")

        with pytest.raises(DuplicateResourceError) as exc_info:
            await services.user_service.create_user("other@example.com", "Alice", "Other")
        assert exc_info.value.field == "username"

    async def test_profile_update_is_persisted(self, services):
        user = await _create(services, "alice")

        await services.user_service.update_user_profile(user.id, bio="  gardener  ", location="Lisbon")

        reloaded = await services.user_service.get_user_by_id(user.id)
        assert reloaded.bio == "gardener"
        assert reloaded.location == "Lisbon"

    async def test_search_matches_partial_username(self, services):
        await _create(services, "alice")
        await _create(services, "bob")

        found = await services.user_service.search_users("ali")

        assert [user.username for user in found] == ["alice"]

    @pytest.mark.parametrize("term, expected", [("%", ["100%real"]), ("_", ["dan_the_man"]), ("a_i", [])])
    async def test_search_treats_wildcards_literally(self, services, term, expected):
        await _create(services, "alice")
        await _create(services, "dan_the_man")
        await _create(services, "100%real")

        found = await services.user_service.search_users(term)

        assert [user.username for user in found] == expected


class TestFollowFlow:
    """Public follows are accepted at once, private ones wait for approval."""

    async def test_public_follow_is_accepted_and_notified(self, services):
        alice = await _create(services, "alice")
        bob = await _create(services, "bob")

        follow = await services.user_service.follow_user(alice.id, bob.id)

        assert follow.is_accepted
        followers = await services.user_service.get_followers(bob.id)
        assert [user.id for user in followers] == [alice.id]
        notifications = await services.notification_service.get_unread_notifications(bob.id)
        assert [n.type for n in notifications] == [NotificationType.FOLLOW]

    async def test_private_follow_waits_for_approval(self, services):
        alice = await _create(services, "alice")
        bob = await _create(services, "bob")
        await services.user_service.set_privacy(bob.id, True)

        follow = await services.user_service.follow_user(alice.id, bob.id)

        assert follow.is_pending()
        assert await services.user_service.get_followers(bob.id) == []
        pending = await services.user_service.get_pending_follow_requests(bob.id)
        assert [user.id for user in pending] == [alice.id]

        accepted = await services.user_service.accept_follow_request(bob.id, alice.id)

        assert accepted.is_accepted
        stats = await services.user_service.get_user_stats(bob.id)
        assert stats.followers_count == 1
        assert stats.pending_requests_count == 0

    async def test_rejected_request_can_be_sent_again(self, services):
        alice = await _create(services, "alice")
        bob = await _create(services, "bob")
        await services.user_service.set_privacy(bob.id, True)
        await services.user_service.follow_user(alice.id, bob.id)

        assert await services.user_service.reject_follow_request(bob.id, alice.id) is True

        again = await services.user_service.follow_user(alice.id, bob.id)
        assert again.is_pending()

    async def test_accepted_follow_cannot_be_rejected(self, services):
        alice = await _create(services, "alice")
        bob = await _create(services, "bob")
        await services.user_service.follow_user(alice.id, bob.id)

        with pytest.raises(InvalidOperationError):
            await services.user_service.reject_follow_request(bob.id, alice.id)

    async def test_unfollow_removes_the_relationship(self, services):
        alice = await _create(services, "alice")
        bob = await _create(services, "bob")
        await services.user_service.follow_user(alice.id, bob.id)

        await services.user_service.unfollow_user(alice.id, bob.id)

        assert await services.user_service.get_following(alice.id) == []


class TestAuthentication:
    """Password checks and refresh token rotation with real storage."""

    async def test_authenticate_with_correct_password(self, services):
        alice = await _create(services, "alice")

        user = await services.auth_token_service.authenticate("ALICE@example.com", "correct horse battery")

        assert user.id == alice.id
        assert user.failed_login_attempts == 0

    async def test_wrong_password_is_counted(self, services):
        alice = await _create(services, "alice")

        with pytest.raises(AuthenticationError):
            await services.auth_token_service.authenticate("alice@example.com", "wrong")

        reloaded = await services.user_service.get_user_by_id(alice.id)
        assert reloaded.failed_login_attempts == 1

    async def test_refresh_token_rotation_and_reuse(self, services):
        alice = await _create(services, "alice")
        first = await services.auth_token_service.issue_refresh_token(alice.id, "jti-1")

        second = await services.auth_token_service.rotate_refresh_token(first.token, "jti-2")

        stored_first = await services.refresh_token_repository.get_by_token(first.token)
        assert stored_first.is_used
        assert stored_first.replaced_by_token == second.token
        active = await services.refresh_token_repository.get_active_by_user(alice.id)
        assert [token.token for token in active] == [second.token]

        with pytest.raises(AuthenticationError):
            await services.auth_token_service.rotate_refresh_token(first.token, "jti-3")

        assert await services.refresh_token_repository.get_active_by_user(alice.id) == []

    async def test_password_reset_flow(self, services):
        alice = await _create(services, "alice")
        reset = await services.auth_token_service.create_password_reset_token("alice@example.com")

        await services.auth_token_service.reset_password(reset.token, "a brand new secret")

        user = await services.auth_token_service.authenticate("alice@example.com", "a brand new secret")
        assert user.id == alice.id
        stored = await services.password_reset_token_repository.get_by_token(reset.token)
        assert stored.is_used
